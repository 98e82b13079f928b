from types import SimpleNamespace

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.depends import get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import create_access_token
from src.domain.entities import ProfileRole
from tests.fixtures import factories


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def studio(db_session):
    """
    One active tenant with an admin, a member, a membership-only class with
    a session in three days, and a sessions plan.
    """
    tenant_id = await factories.add_tenant(db_session)
    admin_id = await factories.add_profile(db_session, tenant_id, ProfileRole.admin)
    member_id = await factories.add_profile(db_session, tenant_id, ProfileRole.member)
    class_id = await factories.add_class(db_session, tenant_id)
    session_id = await factories.add_session(db_session, tenant_id, class_id)
    plan_id = await factories.add_plan(db_session, tenant_id)

    return SimpleNamespace(
        tenant_id=tenant_id,
        admin_id=admin_id,
        member_id=member_id,
        class_id=class_id,
        session_id=session_id,
        plan_id=plan_id,
        admin_headers={
            "Authorization": f"Bearer {create_access_token(admin_id, tenant_id, 'admin')}"
        },
        member_headers={
            "Authorization": f"Bearer {create_access_token(member_id, tenant_id, 'member')}"
        },
    )


@pytest_asyncio.fixture
async def client_without_ledger(db_session):
    """App whose unit of work has no credit ledger configured"""
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session, ledger_enabled=False)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
