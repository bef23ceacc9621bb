"""Shared fixtures for CopilotRM tests."""

from datetime import datetime, timedelta, timezone

import pytest

from copilotrm.common.config import reset_config
from copilotrm.common.runtime import FixedClock, SequentialIdGenerator
from copilotrm.data.schemas import (
    ConsentState,
    CustomerProfile,
    DomainEvent,
    EventType,
    ManagerObjective,
    ProductOffer,
)
from copilotrm.orchestration import OrchestratorContext


NOW = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test starts from the environment, not a cached config."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def ids():
    """Deterministic id generator."""
    return SequentialIdGenerator()


@pytest.fixture
def clock():
    """Clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture
def customer():
    """Gamer customer with WhatsApp consent and low saturation."""
    return CustomerProfile(
        id="cust_1",
        full_name="Mario Rossi",
        phone="+393331112222",
        email="mario@example.com",
        segments=["gamer"],
        consents=ConsentState(whatsapp=True, email=False, telegram=True),
        commercial_saturation_score=20,
    )


@pytest.fixture
def offers():
    """Active offers, one per category used by the rules."""
    return [
        ProductOffer(
            id="off_nb", category="hardware", title="Notebook gaming RTX 4060",
            suggested_price=1199, margin_pct=20, stock_qty=10,
        ),
        ProductOffer(
            id="off_mon", category="hardware", title="Monitor 27 144Hz",
            suggested_price=249.9, margin_pct=25, stock_qty=4,
        ),
        ProductOffer(
            id="off_fibra", category="connectivity", title="Fibra 2.5 Gbit gaming",
            suggested_price=29.9, margin_pct=40, stock_qty=100,
        ),
        ProductOffer(
            id="off_luce", category="energy", title="Luce e gas casa",
            margin_pct=12,
        ),
        ProductOffer(
            id="off_phone", category="smartphone", title="Samsung Galaxy S25 bundle",
            suggested_price=899, margin_pct=10, stock_qty=0,
        ),
    ]


@pytest.fixture
def objectives():
    """One active objective preferring the fibre offer."""
    return [
        ManagerObjective(
            id="obj_fibra",
            name="Spingi fibra",
            period_start=NOW - timedelta(days=1),
            period_end=NOW + timedelta(days=30),
            preferred_offer_ids=["off_fibra"],
        )
    ]


def make_event(event_type: EventType, payload=None, customer_id="cust_1", event_id="evt_1"):
    return DomainEvent(
        id=event_id,
        type=event_type,
        occurred_at=NOW,
        customer_id=customer_id,
        payload=payload or {},
    )


@pytest.fixture
def event_factory():
    """Build an event from a type and a camelCase payload dict."""
    return make_event


@pytest.fixture
def ticket_outcome_event():
    """Not-worth-repairing outcome for a gamer."""
    return make_event(
        EventType.TICKET_OUTCOME,
        {"ticketId": "t1", "outcome": "not-worth-repairing", "inferredSignals": ["gamer"]},
    )


@pytest.fixture
def ticket_context(ticket_outcome_event, customer, offers, objectives):
    """Full context for the ticket outcome event."""
    return OrchestratorContext(
        event=ticket_outcome_event,
        customer=customer,
        active_offers=offers,
        active_objectives=objectives,
    )
