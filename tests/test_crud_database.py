"""
Tests for the repository layer against a real database.

Each test gets fresh tables in in-memory SQLite, so the SQL templates,
constraints and transactions are exercised end to end. Search filters use
ILIKE and are covered against the fake session in test_crud.py.
"""

import pytest

from jobly.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud


@pytest.fixture
def acme(db_session, sample_company):
    return company_crud.create(db_session, sample_company)


@pytest.fixture
def anvil_job(db_session, acme):
    return job_crud.create(db_session, {
        "title": "Anvil Engineer",
        "salary": 100000,
        "equity": 0.05,
        "companyHandle": "acme",
    })


class TestCompanyRepository:

    def test_create_and_get(self, db_session, acme, sample_company):
        assert acme == sample_company

        company = company_crud.get(db_session, "acme")

        assert company == {**sample_company, "jobs": []}

    def test_create_duplicate_handle(self, db_session, acme, sample_company):
        with pytest.raises(ConflictError):
            company_crud.create(db_session, {**sample_company, "name": "Other Name"})

    def test_create_with_taken_name(self, db_session, acme, sample_company):
        with pytest.raises(ConflictError):
            company_crud.create(db_session, {**sample_company, "handle": "acme2"})

        # The failed insert was rolled back; the session is still usable
        company_crud.create(db_session, {**sample_company, "handle": "acme2", "name": "Acme Two"})
        assert [c["handle"] for c in company_crud.find_all(db_session)] == ["acme", "acme2"]

    def test_find_all_ordered_by_name(self, db_session, sample_company):
        company_crud.create(db_session, {**sample_company, "handle": "zeta", "name": "Zeta"})
        company_crud.create(db_session, {**sample_company, "handle": "beta", "name": "Beta"})

        assert [c["name"] for c in company_crud.find_all(db_session)] == ["Beta", "Zeta"]

    def test_partial_update_persists(self, db_session, acme):
        updated = company_crud.update(db_session, "acme", {"numEmployees": 7, "logoUrl": None})

        assert updated["numEmployees"] == 7
        assert updated["logoUrl"] is None
        assert updated["name"] == "Acme Corp"
        assert company_crud.get(db_session, "acme")["numEmployees"] == 7

    def test_update_missing(self, db_session):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", {"name": "X"})

    def test_update_to_taken_name(self, db_session, acme, sample_company):
        company_crud.create(db_session, {**sample_company, "handle": "other", "name": "Other"})

        with pytest.raises(ConflictError):
            company_crud.update(db_session, "other", {"name": "Acme Corp"})

        assert company_crud.get(db_session, "other")["name"] == "Other"

    def test_remove_cascades_to_jobs(self, db_session, anvil_job):
        company_crud.remove(db_session, "acme")

        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "acme")
        with pytest.raises(NotFoundError):
            job_crud.get(db_session, anvil_job["id"])

    def test_remove_missing(self, db_session):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")


class TestJobRepository:

    def test_create_and_get(self, db_session, anvil_job):
        job = job_crud.get(db_session, anvil_job["id"])

        assert job["title"] == "Anvil Engineer"
        assert job["salary"] == 100000
        assert float(job["equity"]) == pytest.approx(0.05)
        assert job["companyHandle"] == "acme"

    def test_company_detail_lists_jobs(self, db_session, anvil_job):
        company = company_crud.get(db_session, "acme")

        assert [j["id"] for j in company["jobs"]] == [anvil_job["id"]]
        assert "companyHandle" not in company["jobs"][0]

    def test_get_for_company_ordered_by_title(self, db_session, anvil_job):
        job_crud.create(db_session, {"title": "Accountant", "companyHandle": "acme"})

        titles = [j["title"] for j in job_crud.get_for_company(db_session, "acme")]

        assert titles == ["Accountant", "Anvil Engineer"]

    def test_get_for_missing_company(self, db_session):
        with pytest.raises(NotFoundError):
            job_crud.get_for_company(db_session, "nope")

    def test_create_for_missing_company(self, db_session):
        with pytest.raises(NotFoundError):
            job_crud.create(db_session, {"title": "t", "companyHandle": "nope"})

    def test_create_duplicate(self, db_session, anvil_job):
        with pytest.raises(ConflictError):
            job_crud.create(db_session, {
                "title": "Anvil Engineer",
                "salary": 100000,
                "companyHandle": "acme",
            })

    def test_create_duplicate_without_salary(self, db_session, acme):
        job_crud.create(db_session, {"title": "Intern", "companyHandle": "acme"})

        with pytest.raises(ConflictError):
            job_crud.create(db_session, {"title": "Intern", "companyHandle": "acme"})

    def test_same_title_other_salary_allowed(self, db_session, anvil_job):
        job = job_crud.create(db_session, {
            "title": "Anvil Engineer",
            "salary": 120000,
            "companyHandle": "acme",
        })

        assert job["id"] != anvil_job["id"]

    def test_company_removed_after_check(self, db_session, monkeypatch):
        """The foreign key still rejects a job whose company is gone"""
        monkeypatch.setattr(job_crud, "_ensure_company", lambda db, handle: None)

        with pytest.raises(ConflictError):
            job_crud.create(db_session, {"title": "t", "companyHandle": "gone"})

        assert job_crud.find_all(db_session) == []

    def test_partial_update_persists(self, db_session, anvil_job):
        updated = job_crud.update(db_session, anvil_job["id"], {"salary": 90000})

        assert updated["salary"] == 90000
        assert updated["title"] == "Anvil Engineer"
        assert job_crud.get(db_session, anvil_job["id"])["salary"] == 90000

    def test_update_missing(self, db_session):
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, 999, {"title": "x"})

    def test_remove(self, db_session, anvil_job):
        job_crud.remove(db_session, anvil_job["id"])

        with pytest.raises(NotFoundError):
            job_crud.get(db_session, anvil_job["id"])
        with pytest.raises(NotFoundError):
            job_crud.remove(db_session, anvil_job["id"])


class TestUserRepository:

    @pytest.fixture
    def user_data(self):
        return {
            "username": "u1",
            "password": "password1",
            "firstName": "U",
            "lastName": "One",
            "email": "u1@example.com",
        }

    def test_register_and_authenticate(self, db_session, user_data):
        user = user_crud.register(db_session, user_data)

        assert "password" not in user
        assert not user["isAdmin"]

        authed = user_crud.authenticate(db_session, "u1", "password1")
        assert authed["username"] == "u1"
        assert "password" not in authed

    def test_authenticate_wrong_password(self, db_session, user_data):
        user_crud.register(db_session, user_data)

        with pytest.raises(AuthenticationError):
            user_crud.authenticate(db_session, "u1", "wrong")

    def test_register_duplicate(self, db_session, user_data):
        user_crud.register(db_session, user_data)

        with pytest.raises(ConflictError):
            user_crud.register(db_session, {**user_data, "email": "other@example.com"})

    def test_password_update_is_hashed(self, db_session, user_data):
        user_crud.register(db_session, user_data)

        user_crud.update(db_session, "u1", {"password": "newpassword"})

        assert user_crud.authenticate(db_session, "u1", "newpassword")["username"] == "u1"

    def test_remove(self, db_session, user_data):
        user_crud.register(db_session, user_data)

        user_crud.remove(db_session, "u1")

        with pytest.raises(NotFoundError):
            user_crud.get(db_session, "u1")
