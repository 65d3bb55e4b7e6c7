"""Application factory tests: startup schema creation and error mapping."""

import pytest
from fastapi import status
from sqlalchemy import inspect

from cwie.core.exceptions import UnprocessableError
from cwie.main import create_app


async def table_names(engine):
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


@pytest.mark.asyncio
async def test_development_startup_creates_tables(settings, identity_verifier):
    application = create_app(settings.model_copy(update={"ENVIRONMENT": "development"}), identity_verifier)

    async with application.router.lifespan_context(application):
        tables = await table_names(application.state.context.engine)

    assert {"users", "jobs", "companies"} <= set(tables)


@pytest.mark.asyncio
async def test_production_startup_leaves_schema_to_migrations(settings, identity_verifier):
    application = create_app(
        settings.model_copy(update={"ENVIRONMENT": "production", "DEBUG": False}), identity_verifier
    )

    async with application.router.lifespan_context(application):
        tables = await table_names(application.state.context.engine)

    assert tables == []


def test_unprocessable_error_status():
    assert UnprocessableError().status_code == status.HTTP_422_UNPROCESSABLE_CONTENT == 422
