"""Job query builder and job lifecycle tests."""

import uuid
from datetime import datetime

import pytest
from pydantic import ValidationError

from cwie.core.exceptions import NotFoundError, UnprocessableError
from cwie.models.enums import PaymentType, PublishStatus, UserRole
from cwie.schemas.job import JobCreate, JobQuery, JobSortField, JobUpdate, SortOrder
from cwie.services.job_service import JobService


@pytest.fixture
def service(db):
    return JobService(db)


@pytest.fixture
async def editor(make_user):
    return await make_user("hr.abc", role=UserRole.COMPANY)


def job_payload(catalog, **overrides):
    payload = {
        "name_th": "นักพัฒนาฝึกงาน",
        "name_en": "Developer Intern",
        "payment": 12000,
        "payment_type": PaymentType.MONTH,
        "start_date": datetime(2026, 6, 1),
        "end_date": datetime(2026, 9, 30),
        "company_id": catalog["company"].id,
        "internship_type_id": catalog["internship_type"].id,
    }
    payload.update(overrides)
    return JobCreate(**payload)


class TestJobQuery:
    @pytest.mark.asyncio
    async def test_payment_bounds_are_inclusive(self, service, make_job):
        for payment in (10000, 15000, 20000, 30000, 35000):
            await make_job(name=f"Job {payment}", payment=payment)

        page = await service.search(JobQuery(min_payment=15000, max_payment=30000))

        assert sorted(job.payment for job in page.data) == [15000, 20000, 30000]
        assert page.meta.total == 3

    @pytest.mark.asyncio
    async def test_zero_bound_is_applied(self, service, make_job):
        await make_job(name="Unpaid", payment=0)
        await make_job(name="Paid", payment=8000)

        page = await service.search(JobQuery(max_payment=0))
        assert [job.name_en for job in page.data] == ["Unpaid"]

        page = await service.search(JobQuery(min_payment=0))
        assert page.meta.total == 2

    @pytest.mark.asyncio
    async def test_empty_result_meta(self, service, catalog):
        page = await service.search(JobQuery(search="nothing matches"))

        assert page.data == []
        assert page.meta.total == 0
        assert page.meta.total_pages == 0

    @pytest.mark.asyncio
    async def test_pagination(self, service, make_job):
        for i in range(24):
            await make_job(name=f"Job {i:02d}")

        page = await service.search(
            JobQuery(page=2, limit=10, sort_by=JobSortField.NAME_EN, sort_order=SortOrder.ASC)
        )

        assert len(page.data) == 10
        assert page.data[0].name_en == "Job 10"
        assert page.meta.model_dump() == {"total": 24, "page": 2, "limit": 10, "total_pages": 3}

        last = await service.search(JobQuery(page=3, limit=10))
        assert len(last.data) == 4

    @pytest.mark.asyncio
    async def test_search_matches_either_name_case_insensitively(self, service, make_job):
        await make_job(name="Backend Intern")
        await make_job(name="Designer")

        page = await service.search(JobQuery(search="backend"))
        assert [job.name_en for job in page.data] == ["Backend Intern"]

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, service, make_job):
        await make_job(name="Backend Intern")
        await make_job(name="50% Remote Intern")

        page = await service.search(JobQuery(search="%"))
        assert [job.name_en for job in page.data] == ["50% Remote Intern"]

        page = await service.search(JobQuery(search="_"))
        assert page.data == []
        assert page.meta.total == 0

    @pytest.mark.asyncio
    async def test_status_and_activity_filters(self, service, make_job):
        await make_job(name="Published", status=PublishStatus.PUBLISHED)
        await make_job(name="Hidden", status=PublishStatus.PUBLISHED, is_active=False)
        await make_job(name="Draft")

        page = await service.search(JobQuery(status=PublishStatus.PUBLISHED, is_active=True))
        assert [job.name_en for job in page.data] == ["Published"]

    @pytest.mark.asyncio
    async def test_period_filters(self, service, make_job):
        await make_job(name="Summer", start_date=datetime(2026, 6, 1), end_date=datetime(2026, 8, 31))
        await make_job(name="Winter", start_date=datetime(2026, 11, 1), end_date=datetime(2027, 2, 28))

        page = await service.search(
            JobQuery(start_date_from=datetime(2026, 5, 1), end_date_to=datetime(2026, 12, 31))
        )
        assert [job.name_en for job in page.data] == ["Summer"]

    @pytest.mark.asyncio
    async def test_faculty_filter_matches_any(self, service, catalog, editor):
        eng = await service.create(
            job_payload(catalog, name_en="Eng job", faculty_ids=[catalog["engineering"].id]), editor
        )
        sci = await service.create(
            job_payload(catalog, name_en="Sci job", faculty_ids=[catalog["science"].id]), editor
        )
        await service.create(job_payload(catalog, name_en="Unlinked job"), editor)

        page = await service.search(
            JobQuery(faculty_ids=[catalog["engineering"].id, catalog["science"].id])
        )
        assert {job.id for job in page.data} == {eng.id, sci.id}

        page = await service.list_by_faculty(catalog["science"].id, JobQuery())
        assert [job.id for job in page.data] == [sci.id]

    @pytest.mark.asyncio
    async def test_sub_listing_of_unknown_company(self, service, catalog):
        with pytest.raises(NotFoundError):
            await service.list_by_company(uuid.uuid4(), JobQuery())

    def test_min_above_max_is_invalid(self):
        with pytest.raises(ValidationError):
            JobQuery(min_payment=30000, max_payment=15000)

    def test_unknown_sort_field_is_invalid(self):
        with pytest.raises(ValidationError):
            JobQuery(sort_by="password_hash")

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_bounds(self, limit):
        with pytest.raises(ValidationError):
            JobQuery(limit=limit)


class TestJobLifecycle:
    @pytest.mark.asyncio
    async def test_create_links_faculties_and_departments(self, service, catalog, editor):
        job = await service.create(
            job_payload(
                catalog,
                faculty_ids=[catalog["engineering"].id],
                department_ids=[catalog["computer"].id, catalog["civil"].id],
            ),
            editor,
        )

        assert job.created_by_id == editor.id
        assert job.status == PublishStatus.DRAFT
        assert [f.id for f in job.faculties] == [catalog["engineering"].id]
        assert {d.id for d in job.departments} == {catalog["computer"].id, catalog["civil"].id}
        assert job.company.name_en == "ABC Company Limited"

    @pytest.mark.asyncio
    async def test_create_with_unknown_reference(self, service, catalog, editor):
        with pytest.raises(NotFoundError):
            await service.create(job_payload(catalog, faculty_ids=[uuid.uuid4()]), editor)

        with pytest.raises(NotFoundError):
            await service.create(job_payload(catalog, company_id=uuid.uuid4()), editor)

    def test_end_before_start_is_invalid(self, catalog):
        with pytest.raises(ValidationError):
            job_payload(catalog, start_date=datetime(2026, 9, 1), end_date=datetime(2026, 6, 1))

    @pytest.mark.asyncio
    async def test_update_replaces_relation_sets(self, service, catalog, editor):
        job = await service.create(
            job_payload(catalog, department_ids=[catalog["computer"].id, catalog["civil"].id]),
            editor,
        )

        updated = await service.update(
            job.id, JobUpdate(name_en="Renamed", department_ids=[catalog["math"].id])
        )

        assert updated.name_en == "Renamed"
        assert [d.id for d in updated.departments] == [catalog["math"].id]

        # Omitted relation lists are left alone
        untouched = await service.update(job.id, JobUpdate(position_count=3))
        assert [d.id for d in untouched.departments] == [catalog["math"].id]
        assert untouched.position_count == 3

    @pytest.mark.asyncio
    async def test_update_period_checked_against_stored_dates(self, service, make_job):
        job = await make_job(start_date=datetime(2026, 6, 1), end_date=datetime(2026, 9, 30))

        with pytest.raises(UnprocessableError):
            await service.update(job.id, JobUpdate(end_date=datetime(2026, 5, 1)))

    @pytest.mark.asyncio
    async def test_status_and_activation_are_independent(self, service, make_job):
        job = await make_job()

        published = await service.publish(job.id)
        assert published.status == PublishStatus.PUBLISHED

        deactivated = await service.deactivate(job.id)
        assert deactivated.is_active is False
        assert deactivated.status == PublishStatus.PUBLISHED

        rejected = await service.reject(job.id)
        assert rejected.status == PublishStatus.REJECTED
        assert (await service.draft(job.id)).status == PublishStatus.DRAFT
        assert (await service.activate(job.id)).is_active is True

    @pytest.mark.asyncio
    async def test_remove(self, service, make_job):
        job = await make_job()

        await service.remove(job.id)

        with pytest.raises(NotFoundError):
            await service.get(job.id)
        with pytest.raises(NotFoundError):
            await service.remove(job.id)
