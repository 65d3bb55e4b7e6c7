"""
Shared fixtures: an in-memory SQLite database built from the models, the
application wired against it, and a mocked LDAP gateway.
"""

import json
from datetime import datetime
from typing import Optional

import httpx
import pytest

from cwie.config import Settings
from cwie.core.security import create_access_token, get_password_hash
from cwie.db.base import Base
from cwie.main import create_app
from cwie.models import Company, Department, Faculty, Industry, InternshipType, Job, User
from cwie.models.enums import PaymentType, PublishStatus, UserRole
from cwie.services.identity_service import IdentityVerifier, encode_password

LDAP_URL = "https://ldap.test/internship/intern-api/login/"
LDAP_USERS = {
    "65160001": {
        "password": "Secret#123",
        "record": {
            "username": "65160001",
            "first_name": "Somchai",
            "last_name": "Jaidee",
            "email": "65160001@go.buu.ac.th",
            "faculty": "Engineering",
        },
    },
    "wanida.s": {
        "password": "Staff#456",
        "record": {"username": "wanida.s", "first_name": "Wanida", "last_name": "Suk"},
    },
}

PASSWORD = "Password1!"


def ldap_handler(request: httpx.Request) -> httpx.Response:
    """Fake gateway: known user and hex-encoded password return the record."""
    username = request.url.params.get("username")
    entry = LDAP_USERS.get(username)
    if entry and request.url.params.get("password") == encode_password(entry["password"]):
        return httpx.Response(200, content=json.dumps(entry["record"]))
    return httpx.Response(401, json={"message": "invalid credentials"})


@pytest.fixture
def identity_verifier():
    return IdentityVerifier(LDAP_URL, transport=httpx.MockTransport(ldap_handler))


@pytest.fixture
def settings():
    """Test settings (local credentials, in-memory database)."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite+aiosqlite://",
        AUTH_MODE="local",
        LDAP_API_URL=LDAP_URL,
        JWT_ACCESS_SECRET="test-access-secret",
        JWT_REFRESH_SECRET="test-refresh-secret",
        LOG_FORMAT="console",
        LOG_LEVEL="WARNING",
        SENTRY_DSN="",
        DEBUG=False,
    )


@pytest.fixture
async def app(settings, identity_verifier):
    application = create_app(settings, identity_verifier)
    engine = application.state.context.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await engine.dispose()


@pytest.fixture
async def db(app):
    """Session bound to the application database."""
    async with app.state.context.session_factory() as session:
        yield session


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ==================== Data factories ====================


@pytest.fixture
def make_user(db):
    async def _make_user(
        username: str,
        role: UserRole = UserRole.STUDENT,
        password: str = PASSWORD,
        email: Optional[str] = None,
        is_active: bool = True,
    ) -> User:
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            firstname=username.title(),
            lastname="Test",
            role=role,
            password_hash=get_password_hash(password),
            is_active=is_active,
        )
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers(settings):
    def _auth_headers(user: User) -> dict:
        token = create_access_token(str(user.id), user.username, settings)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
async def catalog(db):
    """Two faculties with departments, an industry, an internship type and a company."""
    engineering = Faculty(name_th="วิศวกรรมศาสตร์", name_en="Engineering", code="ENG")
    science = Faculty(name_th="วิทยาศาสตร์", name_en="Science", code="SCI")
    db.add_all([engineering, science])
    await db.flush()

    computer = Department(
        name_th="คอมพิวเตอร์", name_en="Computer Engineering", code="CPE", faculty_id=engineering.id
    )
    civil = Department(
        name_th="โยธา", name_en="Civil Engineering", code="CVE", faculty_id=engineering.id
    )
    math = Department(name_th="คณิตศาสตร์", name_en="Mathematics", code="MTH", faculty_id=science.id)
    industry = Industry(name_th="ซอฟต์แวร์", name_en="Software")
    internship_type = InternshipType(name_th="สหกิจศึกษา", name_en="Cooperative Education")
    db.add_all([computer, civil, math, industry, internship_type])
    await db.flush()

    company = Company(
        name_th="บริษัท เอบีซี จำกัด",
        name_en="ABC Company Limited",
        address="99 Long Hat Road",
        sub_district="Saen Suk",
        district="Mueang Chon Buri",
        province="Chon Buri",
        postcode="20131",
        industry_id=industry.id,
        status=PublishStatus.PUBLISHED,
    )
    db.add(company)
    await db.commit()

    return {
        "engineering": engineering,
        "science": science,
        "computer": computer,
        "civil": civil,
        "math": math,
        "industry": industry,
        "internship_type": internship_type,
        "company": company,
    }


@pytest.fixture
def make_job(db, catalog):
    async def _make_job(
        name: str = "Backend Intern",
        payment: Optional[float] = 15000,
        payment_type: Optional[PaymentType] = PaymentType.MONTH,
        status: PublishStatus = PublishStatus.DRAFT,
        is_active: bool = True,
        start_date: datetime = datetime(2026, 6, 1),
        end_date: datetime = datetime(2026, 9, 30),
        company: Optional[Company] = None,
    ) -> Job:
        job = Job(
            name_th=name,
            name_en=name,
            payment=payment,
            payment_type=payment_type,
            start_date=start_date,
            end_date=end_date,
            status=status,
            is_active=is_active,
            company_id=(company or catalog["company"]).id,
            internship_type_id=catalog["internship_type"].id,
        )
        db.add(job)
        await db.commit()
        return job

    return _make_job
