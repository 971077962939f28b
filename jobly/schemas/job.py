from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from jobly.schemas.common import FixedPoint


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    A job's id and company are fixed once created, so neither is accepted here.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("may not be null")
        return v


class JobResponse(BaseModel):
    """Schema for job response"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[FixedPoint] = None
    company_handle: str = Field(..., alias="companyHandle")


class JobListItem(BaseModel):
    """A job in a listing, with display fields from its company"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[FixedPoint] = None
    company_name: Optional[str] = Field(None, alias="companyName")
    num_employees: Optional[int] = Field(None, alias="numEmployees")


class JobDetailResponse(JobListItem):
    """A single job with its company's descriptive fields"""
    company_description: Optional[str] = Field(None, alias="companyDescription")


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetailResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobListItem]
