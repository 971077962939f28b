"""
CRUD operations for Company model.

Companies are keyed by handle. Listings are ordered by name.
"""

import logging
from typing import Any, List, Mapping, Sequence
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError
from jobly.core.filters import (
    INVALID_COMPANY_KEY,
    ByName,
    ByNameAndRange,
    ByRange,
    InvalidFilter,
    NoFilter,
    parse_company_filter,
)
from jobly.crud.base import CRUDBase
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailResponse,
    CompanyJob,
    CompanyResponse,
)

logger = logging.getLogger(__name__)


class CRUDCompany(CRUDBase[Company]):

    def create(self, db: Session, company_data: CompanyCreateRequest) -> CompanyResponse:
        """
        Create a new company.

        Raises:
            BadRequestError: If the handle (or name) is already taken
        """
        if self.get_by_key(db, company_data.handle) is not None:
            raise BadRequestError(f"Duplicate company: {company_data.handle}")

        db_company = Company(**company_data.model_dump())
        db.add(db_company)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise BadRequestError(f"Duplicate company name: {company_data.name}")
        db.refresh(db_company)

        logger.info(f"Created company {db_company.handle}")
        return CompanyResponse.model_validate(db_company)

    def find_all(self, db: Session) -> List[CompanyResponse]:
        """All companies, ordered by name."""
        companies = db.execute(select(Company).order_by(Company.name)).scalars().all()
        return [CompanyResponse.model_validate(c) for c in companies]

    def filtered(self, db: Session, keys: Sequence[str], values: Sequence[str]) -> List[CompanyResponse]:
        """
        Companies matching name / minEmployees / maxEmployees filters, ordered by name.

        name is a case-sensitive prefix match. An empty result is not an error.

        Raises:
            BadRequestError: For any key combination parse_company_filter rejects
        """
        intent = parse_company_filter(keys, values)

        if isinstance(intent, NoFilter):
            raise BadRequestError(INVALID_COMPANY_KEY)
        if isinstance(intent, InvalidFilter):
            logger.warning(f"Rejected company filter {list(keys)}: {intent.reason}")
            raise BadRequestError(intent.reason)

        query = select(Company)
        if isinstance(intent, (ByName, ByNameAndRange)):
            query = query.where(Company.name.like(f"{intent.prefix}%"))
        if isinstance(intent, (ByRange, ByNameAndRange)):
            if intent.min_employees is not None:
                query = query.where(Company.num_employees >= intent.min_employees)
            if intent.max_employees is not None:
                query = query.where(Company.num_employees <= intent.max_employees)

        companies = db.execute(query.order_by(Company.name)).scalars().all()
        return [CompanyResponse.model_validate(c) for c in companies]

    def get(self, db: Session, handle: str) -> CompanyDetailResponse:
        """
        Company by handle, with its jobs inlined.

        Raises:
            NotFoundError: If no company has this handle
        """
        db_company = self.get_by_key(db, handle)
        if db_company is None:
            raise self.not_found(handle)

        jobs = db.execute(
            select(Job.id, Job.title, Job.salary, Job.equity)
            .where(Job.company_handle == handle)
            .order_by(Job.id)
        ).all()

        company = CompanyResponse.model_validate(db_company)
        return CompanyDetailResponse(
            **company.model_dump(),
            jobs=[CompanyJob.model_validate(j) for j in jobs],
        )

    def update(self, db: Session, handle: str, data: Mapping[str, Any]) -> CompanyResponse:
        """
        Partial update of name, description, numEmployees and/or logoUrl.

        Raises:
            BadRequestError: If data is empty
            NotFoundError: If no company has this handle
        """
        return CompanyResponse.model_validate(self.update_row(db, handle, data))


company = CRUDCompany(
    Company,
    key="handle",
    label="company",
    js_to_sql={"numEmployees": "num_employees", "logoUrl": "logo_url"},
)
