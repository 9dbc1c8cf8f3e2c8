from .resources import (
    CREATE_SCHEMAS,
    AttachedDocumentCreate,
    CompanyCreate,
    DeleteRequest,
    DocumentTypeCreate,
    JobCategoryCreate,
    LicenseCreate,
    LicenseTypeCreate,
    OfficialPositionCreate,
    ProjectCreate,
    ProjectTypeCreate,
    ResourceUpdate,
    SkillTrainingCreate,
    SpecialEducationCreate,
    StaffCreate,
    TransferCreate,
)

__all__ = [
    "CREATE_SCHEMAS",
    "AttachedDocumentCreate",
    "CompanyCreate",
    "DeleteRequest",
    "DocumentTypeCreate",
    "JobCategoryCreate",
    "LicenseCreate",
    "LicenseTypeCreate",
    "OfficialPositionCreate",
    "ProjectCreate",
    "ProjectTypeCreate",
    "ResourceUpdate",
    "SkillTrainingCreate",
    "SpecialEducationCreate",
    "StaffCreate",
    "TransferCreate",
]
