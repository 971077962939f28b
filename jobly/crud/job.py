"""
CRUD operations for Job model.

Job listings carry their company's display fields (name, employee count)
through an outer join, so a job whose company is gone still lists.
"""

import logging
from typing import Any, List, Mapping, Sequence
from sqlalchemy import select
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, NoResultsError
from jobly.core.filters import (
    ByEquity,
    ByMinSalary,
    ByTitle,
    InvalidFilter,
    parse_job_filter,
)
from jobly.crud.base import CRUDBase
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.schemas.job import (
    JobCreateRequest,
    JobDetailResponse,
    JobListItem,
    JobResponse,
)

logger = logging.getLogger(__name__)


def _listing():
    """SELECT of job columns plus company display fields."""
    return (
        select(
            Job.id,
            Job.title,
            Job.salary,
            Job.equity,
            Company.name.label("company_name"),
            Company.num_employees.label("num_employees"),
        )
        .select_from(Job)
        .outerjoin(Company, Job.company_handle == Company.handle)
    )


class CRUDJob(CRUDBase[Job]):

    def create(self, db: Session, job_data: JobCreateRequest) -> JobResponse:
        """
        Create a new job; the id is assigned by the database.

        Raises:
            BadRequestError: If company_handle names no existing company
        """
        if db.get(Company, job_data.company_handle) is None:
            raise BadRequestError(f"No company: {job_data.company_handle}")

        db_job = Job(
            title=job_data.title,
            salary=job_data.salary,
            equity=job_data.equity,
            company_handle=job_data.company_handle,
        )

        db.add(db_job)
        db.commit()
        db.refresh(db_job)

        logger.info(f"Created job {db_job.id}: {db_job.title} at {db_job.company_handle}")
        return JobResponse.model_validate(db_job)

    def find_all(self, db: Session) -> List[JobListItem]:
        """All jobs, ordered by title."""
        rows = db.execute(_listing().order_by(Job.title)).all()
        return [JobListItem.model_validate(row) for row in rows]

    def filtered(self, db: Session, keys: Sequence[str], values: Sequence[str]) -> List[JobListItem]:
        """
        Jobs matching exactly one of title, minSalary or hasEquity.

        - title: case-sensitive prefix match, ordered by title
        - minSalary: salary >= value, ordered by salary descending
        - hasEquity=true: equity > 0, ordered by equity descending
        - hasEquity=false (or empty): equity = 0, ordered by title

        Raises:
            BadRequestError: For any key combination parse_job_filter rejects
            NoResultsError: If the filter is valid but matches no jobs
        """
        intent = parse_job_filter(keys, values)

        if isinstance(intent, InvalidFilter):
            logger.warning(f"Rejected job filter {list(keys)}: {intent.reason}")
            raise BadRequestError(intent.reason)

        query = _listing()
        if isinstance(intent, ByTitle):
            query = query.where(Job.title.like(f"{intent.prefix}%")).order_by(Job.title)
        elif isinstance(intent, ByMinSalary):
            query = query.where(Job.salary >= intent.min_salary).order_by(Job.salary.desc())
        elif isinstance(intent, ByEquity) and intent.has_equity:
            query = query.where(Job.equity > 0).order_by(Job.equity.desc())
        elif isinstance(intent, ByEquity):
            query = query.where(Job.equity == 0).order_by(Job.title)

        rows = db.execute(query).all()
        if not rows:
            raise NoResultsError()

        return [JobListItem.model_validate(row) for row in rows]

    def get(self, db: Session, job_id: int) -> JobDetailResponse:
        """
        Job by id with its company's name, description and size.

        Raises:
            NotFoundError: If no job has this id
        """
        row = db.execute(
            _listing()
            .add_columns(Company.description.label("company_description"))
            .where(Job.id == job_id)
        ).first()

        if row is None:
            raise self.not_found(job_id)

        return JobDetailResponse.model_validate(row)

    def update(self, db: Session, job_id: int, data: Mapping[str, Any]) -> JobResponse:
        """
        Partial update of title, salary and/or equity.

        Raises:
            BadRequestError: If data is empty
            NotFoundError: If no job has this id
        """
        return JobResponse.model_validate(self.update_row(db, job_id, data))


job = CRUDJob(Job, key="id", label="job", js_to_sql={"companyHandle": "company_handle"})
