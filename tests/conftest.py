import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from concierge.api.deps import get_db
from concierge.core.auth import User, get_current_user
from concierge.core.database import Base, enable_sqlite_foreign_keys
from concierge.main import app
from concierge.models.funder import Funder
from concierge.models.resident import Resident
from concierge.models.site import Site
from concierge.models.space import Space, SpaceType


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def engine():
    """Fresh in-memory database per test, shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def TestingSession(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(TestingSession):
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# Client
# =============================================================================

@pytest.fixture
def current_user():
    return User(user_id="user-admin", email="admin@example.com", role="admin")


@pytest.fixture
def client(TestingSession, current_user):
    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: current_user
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# =============================================================================
# Seed data
# =============================================================================

@pytest.fixture
def site(db):
    site = Site(name="Maple Court", address="12 Maple St")
    db.add(site)
    db.commit()
    db.refresh(site)
    return site


@pytest.fixture
def space_type(db):
    space_type = SpaceType(name="studio")
    db.add(space_type)
    db.commit()
    db.refresh(space_type)
    return space_type


@pytest.fixture
def space(db, site, space_type):
    space = Space(identifier="2B", site_id=site.id, space_type_id=space_type.id)
    db.add(space)
    db.commit()
    db.refresh(space)
    return space


@pytest.fixture
def resident(db):
    resident = Resident(
        name="Dana Reyes",
        email="dana@example.com",
        type="primary_tenant",
        role="leaseholder",
    )
    db.add(resident)
    db.commit()
    db.refresh(resident)
    return resident


@pytest.fixture
def funders(db):
    rows = [
        Funder(name="City Housing Voucher"),
        Funder(name="Guarantor"),
        Funder(name="Resident Share"),
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


@pytest.fixture
def lease_payload(resident, space):
    """Builds a POST /api/leases-with-funding body."""
    def _build(funders, start="2025-01-15", end="2025-03-02", market_value="1200.00"):
        return {
            "lease": {
                "residentId": resident.id,
                "spaceId": space.id,
                "rentalAmount": "350.00",
                "marketValue": market_value,
                "startDate": start,
                "endDate": end,
            },
            "funders": funders,
        }
    return _build
