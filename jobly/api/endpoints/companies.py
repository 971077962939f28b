import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require_admin
from jobly.core.filters import split_query_params
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def create_company(request: CompanyCreateRequest, db: Session = Depends(get_db)):
    """
    Create a company.

    Body: {handle, name, description, numEmployees, logoUrl}

    Authorization required: admin
    """
    return {"company": company_crud.create(db, request)}


@router.get("", response_model=CompanyListEnvelope)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies, ordered by name.

    Optional filters:
    - name: companies whose name starts with the value (case-sensitive)
    - minEmployees / maxEmployees: employee count bounds; when both are
      given min must be below max
    - all three together, with name first

    Authorization required: none
    """
    keys, values = split_query_params(request.query_params)
    if keys:
        companies = company_crud.filtered(db, keys, values)
    else:
        companies = company_crud.find_all(db)
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company by handle, including its jobs.

    Authorization required: none
    """
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def update_company(handle: str, request: CompanyUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a company: {name, description, numEmployees, logoUrl}.

    Authorization required: admin
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"company": company_crud.update(db, handle, data)}


@router.delete("/{handle}", dependencies=[Depends(require_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
