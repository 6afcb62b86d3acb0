# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from decimal import Decimal
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from campaign_guard.core.settings import Settings
from campaign_guard.db.session import Base
from campaign_guard.db.session import get_db as app_get_session
from campaign_guard.main import app as fastapi_app
from campaign_guard.models import Campaign
from campaign_guard.moderation.rules import RuleSet, load_rules

TEST_DB_URL = "sqlite://"

_CAMPAIGN_COUNTER = count(1)
_TEST_SETTINGS_INSTANCE = Settings()

BENIGN_STORY = (
    "Our daughter Maya was diagnosed with a kidney condition last spring. "
    "Her doctor at the regional hospital has scheduled surgery for March and "
    "the remaining cost is not covered by insurance. We will post every receipt "
    "and invoice here so supporters can follow along. Our church and our "
    "neighbors have already cooked meals for us, and we are grateful for any support."
)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    TestingSession = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()

        # Services commit, so every test starts from empty tables.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture(scope="session")
def rules() -> RuleSet:
    """Return the packaged default rule set."""
    return load_rules()


@pytest.fixture()
def benign_campaign_data() -> dict[str, Any]:
    """Return a well documented medical campaign that should be approved."""
    return {
        "id": f"camp-{next(_CAMPAIGN_COUNTER)}",
        "title": "Kidney surgery for my daughter",
        "story": BENIGN_STORY,
        "description": "Covering the hospital deposit and medication after surgery.",
        "need_type": "medical",
        "goal_amount": 4000,
        "budget_breakdown": [
            {"item": "Surgery deposit", "description": "Paid to the hospital", "amount": 850.5},
            {"item": "Medication", "description": "Prescriptions after the operation", "amount": 320.25},
        ],
    }


@pytest.fixture()
def luxury_campaign_data() -> dict[str, Any]:
    """Return a campaign asking for lavish items."""
    return {
        "id": f"camp-{next(_CAMPAIGN_COUNTER)}",
        "title": "Dream car",
        "story": "I need a brand new Mercedes and a Rolex to feel like myself again.",
        "need_type": "other",
        "goal_amount": 120000,
        "budget_breakdown": [{"item": "Car", "amount": 80000}],
    }


@pytest.fixture()
def scam_campaign_data() -> dict[str, Any]:
    """Return a campaign that trips every negative dimension."""
    return {
        "id": f"camp-{next(_CAMPAIGN_COUNTER)}",
        "title": "Quick money",
        "story": (
            "Not a scam or fraud or fake ponzi. Guaranteed returns on bitcoin, "
            "send a wire transfer for a brand new Ferrari."
        ),
        "need_type": "other",
        "goal_amount": 200000,
        "budget_breakdown": [],
    }


@pytest.fixture()
def make_campaign(db_session: Session) -> Callable[..., Campaign]:
    """Return a factory that stores Campaign rows."""

    def _make(**overrides: Any) -> Campaign:
        values: dict[str, Any] = {
            "id": f"camp-{next(_CAMPAIGN_COUNTER)}",
            "creator_id": "creator-1",
            "title": "Kidney surgery for my daughter",
            "story": BENIGN_STORY,
            "need_type": "medical",
            "goal_amount": Decimal("4000"),
            "budget_breakdown": [
                {"item": "Surgery deposit", "description": "Paid to the hospital", "amount": 850.5},
                {"item": "Medication", "amount": 320.25},
            ],
        }
        values.update(overrides)
        campaign = Campaign(**values)
        db_session.add(campaign)
        db_session.commit()
        return campaign

    return _make
