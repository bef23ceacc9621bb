"""Tests for in-memory repositories and context assembly."""

from datetime import timedelta

from copilotrm.data.repositories import (
    AssistanceRepository,
    CustomerRepository,
    ObjectiveRepository,
    OfferRepository,
    assemble_context,
)
from copilotrm.data.schemas import AssistanceTicket, EventType, ManagerObjective, ProductOffer


class TestRepositories:
    """Tests for keyed repositories."""
    
    def test_upsert_replaces_by_id(self, customer):
        repo = CustomerRepository()
        repo.upsert(customer)
        repo.upsert(customer.model_copy(update={"full_name": "Mario R."}))
        
        assert len(repo) == 1
        assert repo.get_by_id("cust_1").full_name == "Mario R."
        assert repo.get_by_id("missing") is None
    
    def test_customer_lookups(self, customer):
        repo = CustomerRepository([customer])
        
        assert repo.find_by_phone("+393331112222") == customer
        assert repo.find_by_phone("000") is None
        assert repo.list_by_segment("gamer") == [customer]
        assert repo.list_by_segment("business") == []
    
    def test_offer_filters(self, offers):
        repo = OfferRepository(offers)
        repo.upsert(ProductOffer(id="old", category="hardware", title="Vecchio PC", active=False))
        
        assert "old" not in [o.id for o in repo.list_active()]
        assert [o.id for o in repo.list_by_category("hardware")] == ["off_nb", "off_mon"]
        assert len(repo.list()) == 6
    
    def test_replace_all(self, offers):
        repo = OfferRepository(offers)
        repo.replace_all(offers[:1])
        
        assert [o.id for o in repo.list()] == ["off_nb"]
    
    def test_objectives_active_in_period(self, objectives, clock):
        now = clock.now()
        repo = ObjectiveRepository(objectives)
        repo.upsert(ManagerObjective(
            id="past", name="Q4", period_start=now - timedelta(days=90), period_end=now - timedelta(days=1),
        ))
        repo.upsert(objectives[0].model_copy(update={"id": "off", "active": False}))
        
        assert [o.id for o in repo.list_active(now)] == ["obj_fibra"]
    
    def test_tickets(self, clock):
        ticket = AssistanceTicket(id="t1", created_at=clock.now(), updated_at=clock.now())
        
        assert AssistanceRepository([ticket]).get_by_id("t1") == ticket


class TestAssembleContext:
    """Tests for assemble_context."""
    
    def test_joins_repositories(self, ticket_outcome_event, customer, offers, objectives):
        context = assemble_context(
            ticket_outcome_event,
            CustomerRepository([customer]),
            OfferRepository(offers),
            ObjectiveRepository(objectives),
        )
        
        assert context.event == ticket_outcome_event
        assert context.customer == customer
        assert len(context.active_offers) == len(offers)
        assert [o.id for o in context.active_objectives] == ["obj_fibra"]
        assert dict(context.enriched_data) == {}
    
    def test_reference_instant(self, ticket_outcome_event, objectives):
        later = ticket_outcome_event.occurred_at + timedelta(days=60)
        context = assemble_context(
            ticket_outcome_event,
            CustomerRepository(),
            OfferRepository(),
            ObjectiveRepository(objectives),
            at=later,
        )
        
        assert context.customer is None
        assert context.active_objectives == ()
    
    def test_event_without_customer(self, event_factory, customer):
        event = event_factory(EventType.INVOICE_INGESTED, {}, customer_id=None)
        context = assemble_context(event, CustomerRepository([customer]), OfferRepository(), ObjectiveRepository())
        
        assert context.customer is None
