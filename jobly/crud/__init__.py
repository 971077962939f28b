"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern.
"""

from jobly.crud.company import company
from jobly.crud.job import job

__all__ = ["company", "job"]
