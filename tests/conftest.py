'''
Pytest configuration for the flat payments backend.

This file sets up fixtures for:
1. Forcing the application into TEST_MODE before any code is imported.
2. Providing a fresh in-memory database (schema created) for each test.
3. Providing an httpx client bound to the FastAPI app for endpoint testing.
4. Providing instances of all service classes, pre-injected with a test db session.
5. Seeding the owner / other-user data set the tests share.
'''
import os

os.environ["TEST_MODE"] = "True"
os.environ["DATABASE_URL_TEST"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from decimal import Decimal
from typing import AsyncGenerator

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# --- Application Imports ---
from flat_payments_backend.main import app
from flat_payments_backend.common.config import settings
from flat_payments_backend.common.logger import log
from flat_payments_backend.database import engine as db_engine
from flat_payments_backend.database import models as db_models
from flat_payments_backend.services.ownership import OwnershipResolver
from flat_payments_backend.services.flat_service import FlatService
from flat_payments_backend.services.payment_type_service import PaymentTypeService
from flat_payments_backend.services.payment_service import PaymentService
from flat_payments_backend.services.dashboard_service import DashboardService
from flat_payments_backend.services.security import JWTHandler

from tests.database import factories
from tests.constants import (
    TEST_OWNER_ID,
    TEST_OTHER_USER_ID,
    TEST_FLAT_ID,
    TEST_OTHER_FLAT_ID,
)


@pytest.fixture(scope="session")
def anyio_backend():
    """
    Override the default 'anyio_backend' fixture.
    1. Forces the backend to 'asyncio'.
    2. Promotes the scope to 'session'.
    """
    return "asyncio"


# --- 1. Database Fixtures ---

@pytest.fixture(scope="function")
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    Creates the app's engine on a brand-new in-memory database, with the
    schema in place, and disposes of it after the test.
    """
    assert settings.TEST_MODE is True, \
        "TEST_MODE was not set to True! Check your .env file or environment."

    db_engine.create_db_engine_and_session_factory()
    await db_engine.create_all_tables()
    yield db_engine.AsyncSessionLocal
    await db_engine.dispose_db_engine()


@pytest.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides a single session for service-level tests.
    """
    session = session_factory()
    try:
        yield session
    finally:
        await session.rollback()
        await session.close()


@pytest.fixture(scope="function")
async def api_client(session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    An httpx client talking to the app in-process. The app's own
    get_db_session dependency uses the engine created by session_factory.
    """
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def auth_headers_for(user_id) -> dict:
    """Creates a JWT for the given user id and returns auth headers."""
    token = JWTHandler.create_access_token(subject=str(user_id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def owner_headers() -> dict:
    return auth_headers_for(TEST_OWNER_ID)


@pytest.fixture(scope="function")
def other_user_headers() -> dict:
    return auth_headers_for(TEST_OTHER_USER_ID)


# --- 2. SERVICE FIXTURES ---

@pytest.fixture(scope="function")
def ownership_resolver(db_session: AsyncSession) -> OwnershipResolver:
    return OwnershipResolver(db=db_session, logger=log)

@pytest.fixture(scope="function")
def flat_service(db_session: AsyncSession, ownership_resolver: OwnershipResolver) -> FlatService:
    return FlatService(db=db_session, ownership=ownership_resolver, logger=log)

@pytest.fixture(scope="function")
def payment_type_service(db_session: AsyncSession, ownership_resolver: OwnershipResolver) -> PaymentTypeService:
    return PaymentTypeService(db=db_session, ownership=ownership_resolver, logger=log)

@pytest.fixture(scope="function")
def payment_service(db_session: AsyncSession, ownership_resolver: OwnershipResolver) -> PaymentService:
    return PaymentService(db=db_session, ownership=ownership_resolver, logger=log)

@pytest.fixture(scope="function")
def dashboard_service(
    db_session: AsyncSession,
    ownership_resolver: OwnershipResolver,
    payment_service: PaymentService
) -> DashboardService:
    return DashboardService(
        db=db_session,
        ownership=ownership_resolver,
        payment_service=payment_service,
        logger=log
    )


# --- 3. SEED DATA ---
# Every seed fixture commits, so a service-level rollback never erases it.

@pytest.fixture(scope="function")
async def owner(db_session: AsyncSession) -> db_models.Users:
    user = factories.UserFactory.build(id=TEST_OWNER_ID)
    db_session.add(user)
    await db_session.commit()
    return user

@pytest.fixture(scope="function")
async def other_user(db_session: AsyncSession) -> db_models.Users:
    user = factories.UserFactory.build(id=TEST_OTHER_USER_ID)
    db_session.add(user)
    await db_session.commit()
    return user

@pytest.fixture(scope="function")
async def owner_flat(db_session: AsyncSession, owner: db_models.Users) -> db_models.Flats:
    """Flat F of the owner, without payment types."""
    flat = factories.FlatFactory.build(id=TEST_FLAT_ID, user_id=owner.id, name="Sunny Flat")
    db_session.add(flat)
    await db_session.commit()
    return flat

@pytest.fixture(scope="function")
async def rent_and_utilities(
    db_session: AsyncSession,
    owner_flat: db_models.Flats
) -> tuple[db_models.PaymentTypes, db_models.PaymentTypes]:
    """Payment types {Rent: 1500, Utilities: 500} on the owner's flat."""
    rent = factories.PaymentTypeFactory.build(
        flat_id=owner_flat.id, name="Rent", base_amount=Decimal("1500.00")
    )
    utilities = factories.PaymentTypeFactory.build(
        flat_id=owner_flat.id, name="Utilities", base_amount=Decimal("500.00")
    )
    db_session.add_all([rent, utilities])
    await db_session.commit()
    return rent, utilities

@pytest.fixture(scope="function")
async def other_user_flat(db_session: AsyncSession, other_user: db_models.Users) -> dict:
    """
    A flat of the other user with one payment type and one unpaid payment.
    Returned as plain ids so tests never touch expired ORM state.
    """
    flat = factories.FlatFactory.build(id=TEST_OTHER_FLAT_ID, user_id=other_user.id)
    payment_type = factories.PaymentTypeFactory.build(
        flat_id=flat.id, name="Rent", base_amount=Decimal("900.00")
    )
    payment = factories.PaymentFactory.build(
        payment_type_id=payment_type.id, amount=Decimal("900.00"), month=5, year=2026
    )
    db_session.add_all([flat, payment_type, payment])
    await db_session.commit()
    return {"flat_id": flat.id, "payment_type_id": payment_type.id, "payment_id": payment.id}
