from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from jobly.schemas.common import FixedPoint


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyUpdateRequest(BaseModel):
    """
    Schema for a partial company update.

    Only the supplied fields change; the handle can never be changed.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("may not be null")
        return v


class CompanyResponse(BaseModel):
    """Schema for company response"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyJob(BaseModel):
    """A job as listed inside its company"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[FixedPoint] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with its jobs inlined"""
    jobs: List[CompanyJob] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]
