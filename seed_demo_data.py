"""
Script to load a handful of demo companies and jobs.

Existing companies (by handle) are left untouched, so the script can be
re-run safely. Run "alembic upgrade head" first, then from the project root:
    python seed_demo_data.py
"""

from decimal import Decimal

from jobly.core.database import SessionLocal
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.schemas.company import CompanyCreateRequest
from jobly.schemas.job import JobCreateRequest

COMPANIES = [
    {"handle": "anderson-arias-morrow", "name": "Anderson, Arias and Morrow",
     "description": "Somebody program how I. Face give away discussion view act inside.",
     "numEmployees": 245, "logoUrl": "/logos/logo3.png"},
    {"handle": "bauer-gallagher", "name": "Bauer-Gallagher",
     "description": "Difficult ready trip question produce produce someone.",
     "numEmployees": 862},
    {"handle": "watson-davis", "name": "Watson-Davis",
     "description": "Year join loss.",
     "numEmployees": 819, "logoUrl": "/logos/logo3.png"},
]

JOBS = [
    {"title": "Conservator, furniture", "salary": 110000, "equity": Decimal("0"),
     "company_handle": "watson-davis"},
    {"title": "Information officer", "salary": 200000, "equity": None,
     "company_handle": "anderson-arias-morrow"},
    {"title": "Consulting civil engineer", "salary": 60000, "equity": Decimal("0.05"),
     "company_handle": "bauer-gallagher"},
]


def seed_demo_data():
    """Insert demo companies, then their jobs."""
    db = SessionLocal()

    try:
        created = set()
        for data in COMPANIES:
            if company_crud.get_by_key(db, data["handle"]) is not None:
                print(f"  skip {data['handle']} (already exists)")
                continue
            company_crud.create(db, CompanyCreateRequest(**data))
            created.add(data["handle"])
            print(f"  + company {data['handle']}")

        for data in JOBS:
            if data["company_handle"] in created:
                new_job = job_crud.create(db, JobCreateRequest(**data))
                print(f"  + job {new_job.id}: {new_job.title}")

        print(f"\nSeeded {len(created)} companies")
    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_data()
