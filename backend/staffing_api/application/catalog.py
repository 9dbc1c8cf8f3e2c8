"""The resources served by the API and how each one is stored and linked."""

from staffing_api.domain.entities import (
    FieldFilter,
    FilterKind,
    ForeignKey,
    LinkedCollection,
    ResourceDefinition,
)


def _name_filter(param: str, field: str) -> FieldFilter:
    return FieldFilter(param, field, FilterKind.CONTAINS)


def _reference_table(name: str, singular: str, label: str) -> ResourceDefinition:
    """A lookup table with ``<singular>Id`` / ``<singular>Name`` fields."""
    snake = "".join(f"_{c.lower()}" if c.isupper() else c for c in singular)
    return ResourceDefinition(
        name=name,
        collection=name,
        id_field=f"{singular}Id",
        item_key=singular,
        list_key=name,
        label=label,
        filters=(_name_filter(f"{snake}_name", f"{singular}Name"),),
    )


STAFF = ResourceDefinition(
    name="staffs",
    collection="staff",
    id_field="staffId",
    item_key="staff",
    list_key="staffs",
    label="Staff",
    filters=(
        FieldFilter("staff_id", "staffId"),
        FieldFilter("company_id", "companyId"),
        FieldFilter("daily_report_staff_id", "dailyReportStaffId"),
        _name_filter("staff_name", "staffName"),
    ),
    linked_collections=(
        LinkedCollection("jobCategories", "jobCategories", "job_categories"),
        LinkedCollection("companies", "companies", "companies"),
        LinkedCollection("licenses", "licenses", "licenses"),
        LinkedCollection("specialEducations", "specialEducations", "special_educations"),
        LinkedCollection("skillTrainings", "skillTrainings", "skill_trainings"),
        LinkedCollection("officialPositions", "officialPositions", "official_positions"),
        LinkedCollection("projects", "projects", "projects"),
        LinkedCollection("attachedDocuments", "attachedDocuments", "attached_documents"),
        LinkedCollection("documentTypes", "documentTypes", "attached_documents"),
    ),
)

COMPANIES = ResourceDefinition(
    name="companies",
    collection="companies",
    id_field="companyId",
    item_key="company",
    list_key="companies",
    label="Company",
    filters=(
        FieldFilter("company_id", "companyId"),
        _name_filter("company_name", "companyName"),
    ),
)

LICENSES = ResourceDefinition(
    name="licenses",
    collection="licenses",
    id_field="licenseId",
    item_key="license",
    list_key="licenses",
    label="License",
    filters=(
        FieldFilter("staff_id", "staffId", FilterKind.ANY_OF),
        FieldFilter("license_type_id", "licenseTypeId"),
    ),
    foreign_keys=(
        ForeignKey("licenseTypeId", "licenseTypes", "licenseType", "licenseTypes"),
    ),
)

PROJECTS = ResourceDefinition(
    name="projects",
    collection="projects",
    id_field="projectId",
    item_key="project",
    list_key="projects",
    label="Project",
    filters=(
        FieldFilter("project_id", "projectId"),
        _name_filter("project_name", "projectName"),
        FieldFilter("project_type_id", "projectTypeId"),
    ),
    foreign_keys=(
        ForeignKey("projectTypeId", "projectTypes", "projectType", "projectTypes"),
    ),
)

TRANSFERS = ResourceDefinition(
    name="transfers",
    collection="transfers",
    id_field="transferId",
    item_key="transfer",
    list_key="transfers",
    label="Transfer",
    filters=(
        FieldFilter("staff_id", "staffId"),
        FieldFilter("transfer_id", "transferId"),
    ),
    foreign_keys=(
        ForeignKey("moveOutProject", "projects", "moveOutProjectDetail", "projects"),
        ForeignKey("moveInProject", "projects", "moveInProjectDetail", "projects"),
    ),
)

ATTACHED_DOCUMENTS = ResourceDefinition(
    name="attachedDocuments",
    collection="attachedDocuments",
    id_field="attachedDocumentId",
    item_key="attachedDocument",
    list_key="attachedDocuments",
    label="Attached document",
    filters=(
        FieldFilter("staff_id", "staffId", FilterKind.ANY_OF),
        FieldFilter("document_type_id", "documentTypeId"),
    ),
    foreign_keys=(
        ForeignKey("documentTypeId", "documentTypes", "documentType", "documentTypes"),
    ),
)

RESOURCES: tuple[ResourceDefinition, ...] = (
    STAFF,
    COMPANIES,
    LICENSES,
    _reference_table("licenseTypes", "licenseType", "License type"),
    PROJECTS,
    _reference_table("projectTypes", "projectType", "Project type"),
    TRANSFERS,
    ATTACHED_DOCUMENTS,
    _reference_table("documentTypes", "documentType", "Document type"),
    _reference_table("jobCategories", "jobCategory", "Job category"),
    _reference_table("officialPositions", "officialPosition", "Official position"),
    _reference_table("specialEducations", "specialEducation", "Special education"),
    _reference_table("skillTrainings", "skillTraining", "Skill training"),
)

_BY_NAME = {definition.name: definition for definition in RESOURCES}


def get_resource(name: str) -> ResourceDefinition:
    """Look up a resource by route name; raises KeyError for unknown names."""
    return _BY_NAME[name]
