"""Pydantic DTOs (Data Transfer Objects) for the resource request bodies.

Create schemas list the fields each resource requires or types; anything
else in the body is accepted and stored as-is.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# A linked collection entry: a bare id or an object carrying the target's id field.
LinkedReference = int | dict[str, Any]


class _ResourceCreate(BaseModel):
    model_config = ConfigDict(extra="allow")


class StaffCreate(_ResourceCreate):
    """Schema for creating a staff member."""

    staffName: str = Field(..., min_length=1, examples=["Taro Yamada"])
    companyId: int | None = None
    dailyReportStaffId: int | None = None
    experiencedProjectTypes: list[dict[str, Any]] | None = None
    jobCategories: list[LinkedReference] | None = None
    companies: list[LinkedReference] | None = None
    licenses: list[LinkedReference] | None = None
    specialEducations: list[LinkedReference] | None = None
    skillTrainings: list[LinkedReference] | None = None
    officialPositions: list[LinkedReference] | None = None
    projects: list[LinkedReference] | None = None
    attachedDocuments: list[LinkedReference] | None = None
    documentTypes: list[LinkedReference] | None = None


class CompanyCreate(_ResourceCreate):
    companyName: str = Field(..., min_length=1, examples=["Acme"])
    dailyReportCompanyId: int | None = None


class LicenseCreate(_ResourceCreate):
    staffId: int
    licenseTypeId: int
    licenseNumber: str | None = None
    expiryDate: str | None = None


class ProjectCreate(_ResourceCreate):
    projectName: str = Field(..., min_length=1)
    dailyReportProjectId: int | None = None
    projectTypeId: int | None = None


class TransferCreate(_ResourceCreate):
    staffId: int
    moveOutProject: int | None = None
    moveInProject: int | None = None
    isHomeProject: bool | None = None
    isActiveProject: bool | None = None
    scheduledMovingDate: str | None = None
    entranceDate: str | None = None
    movedDate: str | None = None
    scheduledLeavingDate: str | None = None
    leftDate: str | None = None


class AttachedDocumentCreate(_ResourceCreate):
    staffId: int
    documentTypeId: int
    expiryDate: str | None = None


class LicenseTypeCreate(_ResourceCreate):
    licenseTypeName: str = Field(..., min_length=1)


class ProjectTypeCreate(_ResourceCreate):
    projectTypeName: str = Field(..., min_length=1)


class DocumentTypeCreate(_ResourceCreate):
    documentTypeName: str = Field(..., min_length=1)
    expirable: bool | None = None


class JobCategoryCreate(_ResourceCreate):
    jobCategoryName: str = Field(..., min_length=1)


class OfficialPositionCreate(_ResourceCreate):
    officialPositionName: str = Field(..., min_length=1)


class SpecialEducationCreate(_ResourceCreate):
    specialEducationName: str = Field(..., min_length=1)


class SkillTrainingCreate(_ResourceCreate):
    skillTrainingName: str = Field(..., min_length=1)


CREATE_SCHEMAS: dict[str, type[_ResourceCreate]] = {
    "staffs": StaffCreate,
    "companies": CompanyCreate,
    "licenses": LicenseCreate,
    "licenseTypes": LicenseTypeCreate,
    "projects": ProjectCreate,
    "projectTypes": ProjectTypeCreate,
    "transfers": TransferCreate,
    "attachedDocuments": AttachedDocumentCreate,
    "documentTypes": DocumentTypeCreate,
    "jobCategories": JobCategoryCreate,
    "officialPositions": OfficialPositionCreate,
    "specialEducations": SpecialEducationCreate,
    "skillTrainings": SkillTrainingCreate,
}


class ResourceUpdate(BaseModel):
    """Schema for a partial update: any fields plus the lastUpdate token."""

    model_config = ConfigDict(extra="allow")

    lastUpdate: str | None = None


class DeleteRequest(BaseModel):
    """Schema for a soft delete. Only the lastUpdate token is read."""

    lastUpdate: str | None = None
