import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require_admin
from jobly.core.filters import split_query_params
from jobly.crud import job as job_crud
from jobly.schemas.job import (
    JobCreateRequest,
    JobDetailEnvelope,
    JobEnvelope,
    JobListEnvelope,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a new job posting.

    Body: {title, salary, equity, company_handle}
    Returns: {job: {id, title, salary, equity, companyHandle}}

    Authorization required: admin
    """
    return {"job": job_crud.create(db, request)}


@router.get("", response_model=JobListEnvelope)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs, optionally narrowed by one filter:

    - title: jobs whose title starts with the value (case-sensitive)
    - minSalary: salary at least the value, highest salary first
    - hasEquity: "true" for jobs with equity (largest first), "false" for none

    A valid filter that matches nothing is answered with 400.

    Authorization required: none
    """
    keys, values = split_query_params(request.query_params)
    if keys:
        jobs = job_crud.filtered(db, keys, values)
    else:
        jobs = job_crud.find_all(db)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID, with its company's name, description and size.

    Authorization required: none
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def update_job(job_id: int, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a job. Fields can be {title, salary, equity};
    the id and company of a job never change.

    Authorization required: admin
    """
    return {"job": job_crud.update(db, job_id, request.model_dump(exclude_unset=True))}


@router.delete("/{job_id}", dependencies=[Depends(require_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": str(job_id)}
