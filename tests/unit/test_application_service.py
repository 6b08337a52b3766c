"""Tests for applying to jobs and managing applicant status."""

import pytest

from app.errors import DuplicateApplication, Forbidden, NotFound, VacancyFull
from app.models.application import Application
from app.schemas.jobs import JobUpdate
from app.services import application_service, job_service

pytestmark = pytest.mark.asyncio


class TestApply:

    async def test_apply_creates_pending_application(self, db, seeker, make_job):
        job = await make_job()

        application = await application_service.apply(db, job.id, seeker, "I have a licence")

        assert application.status == "pending"
        assert application.job_id == job.id
        assert application.user_id == seeker.id
        assert application.user_name == seeker.name
        assert application.user_email == seeker.email
        assert application.user_phone == seeker.phone
        assert application.message == "I have a licence"

    async def test_message_defaults_to_empty(self, db, seeker, make_job):
        job = await make_job()
        application = await application_service.apply(db, job.id, seeker)
        assert application.message == ""

    async def test_apply_twice_rejected_and_list_unchanged(self, db, employer, seeker, make_job):
        job = await make_job(vacancies=3)
        await application_service.apply(db, job.id, seeker)

        with pytest.raises(DuplicateApplication):
            await application_service.apply(db, job.id, seeker, "again")

        applicants = await application_service.list_applicants(db, job.id, employer)
        assert len(applicants) == 1

    async def test_apply_to_missing_job(self, db, seeker):
        with pytest.raises(NotFound):
            await application_service.apply(db, 404, seeker)

    async def test_apply_to_closed_job(self, db, employer, seeker, make_job):
        job = await make_job()
        await job_service.toggle_job(db, job.id, employer)

        with pytest.raises(NotFound) as exc:
            await application_service.apply(db, job.id, seeker)
        assert exc.value.message == "Job not found or closed"

    async def test_apply_when_full(self, db, employer, seeker, second_seeker, make_job):
        job = await make_job(vacancies=1)
        await application_service.apply(db, job.id, seeker)
        await application_service.update_applicant_status(db, job.id, seeker.id, employer, "accepted")

        with pytest.raises(VacancyFull):
            await application_service.apply(db, job.id, second_seeker)


class TestListings:

    async def test_my_applications_newest_first_with_job(self, db, seeker, make_job):
        older = await make_job(title="Driver", location="Lichinga")
        newer = await make_job(title="Cook", location="Cuamba", company="Hotel Lago")
        await application_service.apply(db, older.id, seeker)
        await application_service.apply(db, newer.id, seeker)

        applications = await application_service.my_applications(db, seeker)

        assert [a.job_id for a in applications] == [newer.id, older.id]
        data = applications[0].to_dict(job=applications[0].job, include_job=True)
        assert data["job"] == {
            "id": newer.id,
            "title": "Cook",
            "company": "Hotel Lago",
            "location": "Cuamba",
        }

    async def test_my_applications_only_mine(self, db, seeker, second_seeker, make_job):
        job = await make_job(vacancies=2)
        await application_service.apply(db, job.id, second_seeker)

        assert await application_service.my_applications(db, seeker) == []

    async def test_list_applicants_owner_only(self, db, other_employer, seeker, make_job):
        job = await make_job()
        await application_service.apply(db, job.id, seeker)

        with pytest.raises(Forbidden):
            await application_service.list_applicants(db, job.id, other_employer)

    async def test_list_applicants_entries(self, db, employer, seeker, make_job):
        job = await make_job()
        await application_service.apply(db, job.id, seeker, "hello")

        [entry] = [a.to_applicant_dict() for a in await application_service.list_applicants(db, job.id, employer)]

        assert entry["userId"] == seeker.id
        assert entry["userName"] == seeker.name
        assert entry["userEmail"] == seeker.email
        assert entry["userPhone"] == seeker.phone
        assert entry["message"] == "hello"
        assert entry["status"] == "pending"
        assert entry["appliedAt"]


class TestUpdateApplicantStatus:

    async def test_accept_scenario(self, db, employer, seeker, second_seeker, make_job):
        job = await make_job(vacancies=1)
        await application_service.apply(db, job.id, seeker)

        updated = await application_service.update_applicant_status(
            db, job.id, seeker.id, employer, "accepted"
        )

        await db.refresh(job)
        assert job.filled == 1
        assert updated.status == "accepted"
        [entry] = await application_service.list_applicants(db, job.id, employer)
        assert entry.status == "accepted"

        with pytest.raises(VacancyFull):
            await application_service.apply(db, job.id, second_seeker)

    async def test_non_accept_status_does_not_fill(self, db, employer, seeker, make_job):
        job = await make_job()
        await application_service.apply(db, job.id, seeker)

        await application_service.update_applicant_status(db, job.id, seeker.id, employer, "reviewed")

        await db.refresh(job)
        assert job.filled == 0

    async def test_repeated_accept_counts_once(self, db, employer, seeker, make_job):
        job = await make_job(vacancies=2)
        await application_service.apply(db, job.id, seeker)

        await application_service.update_applicant_status(db, job.id, seeker.id, employer, "accepted")
        await application_service.update_applicant_status(db, job.id, seeker.id, employer, "accepted")

        await db.refresh(job)
        assert job.filled == 1

    async def test_accept_beyond_vacancies_is_not_capped(self, db, employer, seeker, second_seeker, make_job):
        job = await make_job(vacancies=2)
        await application_service.apply(db, job.id, seeker)
        await application_service.apply(db, job.id, second_seeker)
        await job_service.update_job(
            db, job.id, employer, JobUpdate(vacancies=1)
        )

        await application_service.update_applicant_status(db, job.id, seeker.id, employer, "accepted")
        await application_service.update_applicant_status(db, job.id, second_seeker.id, employer, "accepted")

        await db.refresh(job)
        assert job.filled == 2

    async def test_unknown_applicant_is_a_no_op(self, db, employer, seeker, make_job):
        job = await make_job()

        result = await application_service.update_applicant_status(
            db, job.id, seeker.id, employer, "accepted"
        )

        await db.refresh(job)
        assert result is None
        assert job.filled == 0

    async def test_non_owner_forbidden(self, db, other_employer, seeker, make_job):
        job = await make_job()
        await application_service.apply(db, job.id, seeker)

        with pytest.raises(Forbidden):
            await application_service.update_applicant_status(
                db, job.id, seeker.id, other_employer, "rejected"
            )

        application = await application_service.find_application(db, job.id, seeker.id)
        assert isinstance(application, Application)
        assert application.status == "pending"

    async def test_missing_job(self, db, employer, seeker):
        with pytest.raises(NotFound):
            await application_service.update_applicant_status(db, 777, seeker.id, employer, "accepted")
