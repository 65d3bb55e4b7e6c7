"""Company service tests."""

import uuid

import pytest
from sqlalchemy import func, select

from cwie.core.exceptions import NotFoundError
from cwie.models.company import Contact
from cwie.models.enums import PublishStatus, UserRole
from cwie.models.job import Job
from cwie.schemas.company import CompanyCreate, CompanyUpdate, ContactCreate, ContactUpdate
from cwie.services.company_service import CompanyService


@pytest.fixture
def service(db):
    return CompanyService(db)


@pytest.fixture
async def owner(make_user):
    return await make_user("hr.xyz", role=UserRole.COMPANY)


def company_payload(catalog, **overrides):
    payload = {
        "name_th": "บริษัท เอ็กซ์วายแซด จำกัด",
        "name_en": "XYZ Solutions",
        "industry_id": catalog["industry"].id,
        "address": "1 Sukhumvit Road",
        "sub_district": "Khlong Toei",
        "district": "Khlong Toei",
        "province": "Bangkok",
        "postcode": "10110",
        "faculty_ids": [catalog["engineering"].id],
        "department_ids": [catalog["computer"].id],
        "contacts": [
            {
                "firstname": "Malee",
                "lastname": "Dee",
                "email": "malee@xyz.co.th",
                "phone": "0812345678",
            }
        ],
    }
    payload.update(overrides)
    return CompanyCreate(**payload)


async def count_contacts(db, company_id):
    result = await db.execute(
        select(func.count()).select_from(Contact).where(Contact.company_id == company_id)
    )
    return result.scalar_one()


@pytest.mark.asyncio
async def test_create_records_creator_and_relations(service, catalog, owner):
    company = await service.create(company_payload(catalog), owner)

    assert company.created_by_id == owner.id
    assert company.status == PublishStatus.DRAFT
    assert company.industry.name_en == "Software"
    assert [f.code for f in company.faculties] == ["ENG"]
    assert [d.code for d in company.departments] == ["CPE"]
    assert [c.firstname for c in company.contacts] == ["Malee"]


@pytest.mark.asyncio
async def test_create_with_unknown_industry(service, catalog, owner):
    with pytest.raises(NotFoundError):
        await service.create(company_payload(catalog, industry_id=uuid.uuid4()), owner)


@pytest.mark.asyncio
async def test_list_filters(service, catalog, owner):
    xyz = await service.create(company_payload(catalog), owner)
    hidden = await service.create(company_payload(catalog, name_en="Hidden Co"), owner)
    await service.update(hidden.id, CompanyUpdate(is_active=False))

    names = [c.name_en for c in await service.list()]
    assert "Hidden Co" not in names
    assert set(names) == {"XYZ Solutions", "ABC Company Limited"}

    by_province = await service.list(search="bangkok")
    assert [c.id for c in by_province] == [xyz.id]

    by_faculty = await service.list(faculty_id=catalog["engineering"].id)
    assert [c.id for c in by_faculty] == [xyz.id]

    by_department = await service.list(department_id=catalog["math"].id)
    assert by_department == []

    published = await service.list(status=PublishStatus.PUBLISHED)
    assert [c.id for c in published] == [catalog["company"].id]

    assert len(await service.list(skip=1, take=1)) == 1


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(service, catalog, owner):
    discounted = await service.create(company_payload(catalog, name_en="100% Thai Co"), owner)

    assert [c.id for c in await service.list(search="%")] == [discounted.id]
    assert await service.list(search="_") == []


@pytest.mark.asyncio
async def test_update_replaces_supplied_relations(service, catalog, owner):
    company = await service.create(company_payload(catalog), owner)

    updated = await service.update(
        company.id,
        CompanyUpdate(
            name_en="XYZ Solutions Plc",
            department_ids=[catalog["civil"].id, catalog["math"].id],
            contacts=[
                ContactCreate(firstname="Anan", lastname="Sri", email="anan@xyz.co.th", phone="02"),
                ContactCreate(firstname="Ploy", lastname="Sri", email="ploy@xyz.co.th", phone="03"),
            ],
        ),
    )

    assert updated.name_en == "XYZ Solutions Plc"
    assert {d.code for d in updated.departments} == {"CVE", "MTH"}
    assert {c.firstname for c in updated.contacts} == {"Anan", "Ploy"}
    # Faculties were not supplied and stay as they were
    assert [f.code for f in updated.faculties] == ["ENG"]


@pytest.mark.asyncio
async def test_update_with_unknown_department_changes_nothing(service, catalog, owner, db):
    company = await service.create(company_payload(catalog), owner)
    company_id = company.id

    with pytest.raises(NotFoundError):
        await service.update(
            company_id, CompanyUpdate(name_en="Renamed", department_ids=[uuid.uuid4()])
        )
    await db.rollback()

    reloaded = await service.get(company_id)
    assert reloaded.name_en == "XYZ Solutions"
    assert [d.code for d in reloaded.departments] == ["CPE"]


@pytest.mark.asyncio
async def test_remove_cascades_contacts_and_jobs(service, catalog, owner, db, make_job):
    company = await service.create(company_payload(catalog), owner)
    job = await make_job(company=company)

    await service.remove(company.id)

    assert await count_contacts(db, company.id) == 0
    assert await db.get(Job, job.id, populate_existing=True) is None
    with pytest.raises(NotFoundError):
        await service.get(company.id)


@pytest.mark.asyncio
async def test_status_update(service, catalog, owner):
    company = await service.create(company_payload(catalog), owner)

    updated = await service.update_status(company.id, PublishStatus.PUBLISHED)

    assert updated.status == PublishStatus.PUBLISHED


@pytest.mark.asyncio
async def test_contact_crud(service, catalog, owner, db):
    company = await service.create(company_payload(catalog, contacts=[]), owner)

    contact = await service.add_contact(
        company.id,
        ContactCreate(firstname="Nok", lastname="Jai", email="nok@xyz.co.th", phone="0899999999"),
    )
    assert [c.id for c in await service.list_contacts(company.id)] == [contact.id]

    updated = await service.update_contact(contact.id, ContactUpdate(phone="0800000000"))
    assert updated.phone == "0800000000"
    assert updated.firstname == "Nok"

    # Contact columns are required, so a null leaves them as they are
    updated = await service.update_contact(contact.id, ContactUpdate(email=None, lastname=None))
    assert updated.email == "nok@xyz.co.th"
    assert updated.lastname == "Jai"

    await service.remove_contact(contact.id)
    assert await count_contacts(db, company.id) == 0

    with pytest.raises(NotFoundError):
        await service.remove_contact(contact.id)
    with pytest.raises(NotFoundError):
        await service.add_contact(uuid.uuid4(), ContactCreate(
            firstname="A", lastname="B", email="a@b.co", phone="1"
        ))
