"""
Test suite for companies: repository and endpoints.

Tests cover:
- Company creation and duplicate handles
- Listing and filtering
- Retrieval with inlined jobs
- Partial update and deletion
- Admin-only writes
"""

import pytest

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.crud import company as company_crud
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.schemas.company import CompanyCreateRequest


C1 = {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"}
C2 = {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"}
C3 = {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": "http://c3.img"}


def _dump(companies):
    return [c.model_dump(by_alias=True) for c in companies]


class TestCompanyRepository:
    """Tests for crud.company against the database"""

    def test_create(self, db_session):
        new = CompanyCreateRequest(handle="new", name="New", description="New Description",
                                   numEmployees=1, logoUrl="http://new.img")

        created = company_crud.create(db_session, new)

        assert created.model_dump(by_alias=True) == {
            "handle": "new", "name": "New", "description": "New Description",
            "numEmployees": 1, "logoUrl": "http://new.img",
        }
        assert db_session.get(Company, "new").name == "New"

    def test_create_duplicate_handle(self, db_session, seeded):
        """A duplicate handle is rejected and the existing row is unchanged"""
        dupe = CompanyCreateRequest(handle="c1", name="Other", description="Other")

        with pytest.raises(BadRequestError):
            company_crud.create(db_session, dupe)

        db_session.expire_all()
        assert db_session.get(Company, "c1").name == "C1"

    def test_find_all_ordered_by_name(self, db_session, seeded):
        assert _dump(company_crud.find_all(db_session)) == [C1, C2, C3]

    def test_filter_by_name_prefix(self, db_session, seeded):
        db_session.add(Company(handle="c10", name="C10", description="Desc10", num_employees=10))
        db_session.commit()

        result = company_crud.filtered(db_session, ["name"], ["C1"])

        assert [c.handle for c in result] == ["c1", "c10"]

    def test_filter_by_name_is_case_sensitive(self, db_session, seeded):
        assert company_crud.filtered(db_session, ["name"], ["c"]) == []

    def test_filter_min_employees(self, db_session, seeded):
        result = company_crud.filtered(db_session, ["minEmployees"], ["2"])

        assert _dump(result) == [C2, C3]

    def test_filter_max_employees(self, db_session, seeded):
        result = company_crud.filtered(db_session, ["maxEmployees"], ["2"])

        assert _dump(result) == [C1, C2]

    @pytest.mark.parametrize("keys,values", [
        (["minEmployees", "maxEmployees"], ["2", "3"]),
        (["maxEmployees", "minEmployees"], ["3", "2"]),
    ])
    def test_filter_range(self, db_session, seeded, keys, values):
        assert _dump(company_crud.filtered(db_session, keys, values)) == [C2, C3]

    def test_filter_name_and_range(self, db_session, seeded):
        result = company_crud.filtered(db_session, ["name", "minEmployees", "maxEmployees"], ["C", "1", "2"])

        assert _dump(result) == [C1, C2]

    def test_filter_empty_result_is_not_an_error(self, db_session, seeded):
        assert company_crud.filtered(db_session, ["minEmployees"], ["100"]) == []

    @pytest.mark.parametrize("keys,values", [
        (["maxEmployees", "minEmployees"], ["1", "3"]),
        (["minEmployees", "maxEmployees"], ["3", "1"]),
        (["description"], ["Desc"]),
        (["minEmployees", "name", "maxEmployees"], ["1", "C", "3"]),
        ([], []),
    ])
    def test_filter_rejected(self, db_session, seeded, keys, values):
        with pytest.raises(BadRequestError):
            company_crud.filtered(db_session, keys, values)

    def test_get_with_jobs(self, db_session, seeded):
        company = company_crud.get(db_session, "c3")

        assert company.model_dump(by_alias=True, mode="json") == {
            **C3,
            "jobs": [
                {"id": seeded["j2"], "title": "j2", "salary": 500000, "equity": "0.2"},
                {"id": seeded["j3"], "title": "j3", "salary": 205000, "equity": "0"},
            ],
        }

    def test_get_without_jobs(self, db_session, seeded):
        assert company_crud.get(db_session, "c2").jobs == []

    def test_get_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "nope")

    def test_update(self, db_session, seeded):
        updated = company_crud.update(db_session, "c1", {"name": "New", "numEmployees": 10})

        assert updated.model_dump(by_alias=True) == {**C1, "name": "New", "numEmployees": 10}

    def test_update_null_fields(self, db_session, seeded):
        updated = company_crud.update(db_session, "c1", {"numEmployees": None, "logoUrl": None})

        assert updated.num_employees is None
        assert updated.logo_url is None

    def test_update_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", {"name": "New"})

    def test_update_no_data(self, db_session, seeded):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {})

    def test_remove(self, db_session, seeded):
        company_crud.remove(db_session, "c2")

        assert db_session.get(Company, "c2") is None

    def test_remove_cascades_to_jobs(self, db_session, seeded):
        company_crud.remove(db_session, "c3")

        assert db_session.query(Job).filter(Job.company_handle == "c3").count() == 0

    def test_remove_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")


class TestCompanyEndpoints:
    """Tests for the /companies routes"""

    def test_create_as_admin(self, client, admin_headers):
        body = {"handle": "new", "name": "New", "description": "DescNew", "numEmployees": 10}

        response = client.post("/companies", json=body, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {"company": {**body, "logoUrl": None}}

    def test_create_as_non_admin(self, client, u1_headers):
        response = client.post("/companies", json={"handle": "new", "name": "New", "description": "D"},
                               headers=u1_headers)

        assert response.status_code == 401

    def test_create_anonymous(self, client):
        response = client.post("/companies", json={"handle": "new", "name": "New", "description": "D"})

        assert response.status_code == 401

    def test_create_duplicate(self, client, seeded, admin_headers):
        response = client.post("/companies", json={"handle": "c1", "name": "X", "description": "D"},
                               headers=admin_headers)

        assert response.status_code == 400
        assert "Duplicate company" in response.json()["detail"]

    def test_create_schema_violation(self, client, admin_headers):
        response = client.post("/companies", json={"handle": "new", "numEmployees": -1},
                               headers=admin_headers)

        assert response.status_code == 400
        assert isinstance(response.json()["detail"], list)

    def test_list(self, client, seeded):
        response = client.get("/companies")

        assert response.status_code == 200
        assert response.json() == {"companies": [C1, C2, C3]}

    def test_list_filtered(self, client, seeded):
        response = client.get("/companies?name=C&maxEmployees=2&minEmployees=1")

        assert response.status_code == 200
        assert response.json() == {"companies": [C1, C2]}

    def test_list_bad_range(self, client, seeded):
        response = client.get("/companies?minEmployees=3&maxEmployees=1")

        assert response.status_code == 400

    def test_list_bad_key(self, client, seeded):
        response = client.get("/companies?nope=1")

        assert response.status_code == 400

    def test_get(self, client, seeded):
        response = client.get("/companies/c1")

        assert response.status_code == 200
        assert response.json() == {"company": {
            **C1,
            "jobs": [{"id": seeded["j1"], "title": "j1", "salary": 20000, "equity": "0.1"}],
        }}

    def test_get_not_found(self, client):
        response = client.get("/companies/nope")

        assert response.status_code == 404

    def test_update(self, client, seeded, admin_headers):
        response = client.patch("/companies/c1", json={"name": "C1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"company": {**C1, "name": "C1-new"}}

    def test_update_handle_rejected(self, client, seeded, admin_headers):
        response = client.patch("/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)

        assert response.status_code == 400

    def test_update_empty_body(self, client, seeded, admin_headers):
        response = client.patch("/companies/c1", json={}, headers=admin_headers)

        assert response.status_code == 400

    def test_update_not_found(self, client, seeded, admin_headers):
        response = client.patch("/companies/nope", json={"name": "X"}, headers=admin_headers)

        assert response.status_code == 404

    def test_update_as_non_admin(self, client, seeded, u1_headers):
        response = client.patch("/companies/c1", json={"name": "X"}, headers=u1_headers)

        assert response.status_code == 401

    def test_delete(self, client, seeded, admin_headers):
        response = client.delete("/companies/c1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "c1"}

    def test_delete_not_found(self, client, admin_headers):
        response = client.delete("/companies/nope", headers=admin_headers)

        assert response.status_code == 404

    def test_delete_as_non_admin(self, client, seeded, u1_headers):
        response = client.delete("/companies/c1", headers=u1_headers)

        assert response.status_code == 401
