"""Unit tests for the default rule-candidate generator."""

import pytest

from copilotrm.common.runtime import SequentialIdGenerator
from copilotrm.data.schemas import EventType
from copilotrm.rules import derive_rule_candidates


def _by_agent(candidates):
    return {c.agent: c for c in candidates}


class TestTicketOutcomeRules:
    """Rules for assistance.ticket.outcome."""
    
    def test_not_worth_repairing_gamer(self, ticket_outcome_event, offers, ids):
        candidates = derive_rule_candidates(ticket_outcome_event, offers, ids=ids)
        
        assert [c.agent for c in candidates] == ["preventivi", "telephony"]
        quote, connectivity = candidates
        
        assert quote.action_type == "quote"
        assert quote.offer_id == "off_nb"
        assert quote.channel == "whatsapp"
        assert quote.confidence == 0.82
        assert quote.metadata == {
            "trigger": "not-worth-repairing", "contextFit": 0.95, "profileFit": 0.7,
        }
        assert quote.needs_approval is True
        assert quote.score_breakdown is None
        
        assert connectivity.offer_id == "off_fibra"
        assert connectivity.trigger == "gamer-lag"
    
    def test_profile_fit_without_gamer_signal(self, event_factory, offers):
        event = event_factory(EventType.TICKET_OUTCOME, {"outcome": "not-worth-repairing"})
        (quote,) = derive_rule_candidates(event, offers)
        
        assert quote.metadata["profileFit"] == 0.6
    
    def test_energy_signal(self, event_factory, offers):
        event = event_factory(EventType.TICKET_OUTCOME, {"outcome": "repair", "inferredSignals": ["energia"]})
        (energy,) = derive_rule_candidates(event, offers)
        
        assert energy.agent == "energy"
        assert energy.offer_id == "off_luce"
        assert energy.trigger == "energy-signal"
    
    def test_no_matching_offer(self, ticket_outcome_event):
        candidates = derive_rule_candidates(ticket_outcome_event, [])
        
        assert all(c.offer_id is None for c in candidates)
    
    def test_ids_come_from_generator(self, ticket_outcome_event, offers):
        candidates = derive_rule_candidates(ticket_outcome_event, offers, ids=SequentialIdGenerator())
        
        assert [c.id for c in candidates] == ["act_1", "act_2"]
    
    def test_customer_id_is_carried(self, ticket_outcome_event, offers):
        candidates = derive_rule_candidates(ticket_outcome_event, offers)
        
        assert {c.customer_id for c in candidates} == {"cust_1"}


class TestIngestRules:
    """Rules for invoices, promos and inbound email."""
    
    def test_hardware_invoice(self, event_factory, offers):
        event = event_factory(EventType.INVOICE_INGESTED, {
            "invoiceNumber": "F-12",
            "lines": [{"description": "Scheda video RTX 4070", "qty": 3}],
        })
        candidates = _by_agent(derive_rule_candidates(event, offers))
        
        assert set(candidates) == {"content", "hardware"}
        assert candidates["content"].channel == "telegram"
        assert candidates["content"].offer_id == "off_nb"
        assert candidates["hardware"].trigger == "invoice-hardware-playbook"
    
    def test_invoice_without_hardware_lines(self, event_factory, offers):
        event = event_factory(EventType.INVOICE_INGESTED, {"lines": [{"description": "Cavo USB"}]})
        
        assert derive_rule_candidates(event, offers) == []
    
    @pytest.mark.parametrize("title", ["Promo Samsung A56", "OPPO Reno", "smartphone day"])
    def test_smartphone_promo(self, event_factory, offers, title):
        event = event_factory(EventType.PROMO_INGESTED, {"title": title, "offerId": "off_phone"})
        (campaign,) = derive_rule_candidates(event, offers)
        
        assert campaign.agent == "telephony"
        assert campaign.action_type == "campaign"
        assert campaign.offer_id == "off_phone"
    
    def test_other_promo(self, event_factory, offers):
        event = event_factory(EventType.PROMO_INGESTED, {"title": "Sconto luce"})
        
        assert derive_rule_candidates(event, offers) == []
    
    def test_post_sale_complaint(self, event_factory, offers):
        event = event_factory(EventType.INBOUND_EMAIL, {
            "subject": "Ordine",
            "body": "Non ho ricevuto il pacco",
        })
        (care,) = derive_rule_candidates(event, offers)
        
        assert care.agent == "customer-care"
        assert care.channel == "email"
        assert care.needs_approval is False
    
    def test_neutral_email(self, event_factory, offers):
        event = event_factory(EventType.INBOUND_EMAIL, {"subject": "Info", "body": "Orari di apertura?"})
        
        assert derive_rule_candidates(event, offers) == []
    
    def test_unhandled_event_type(self, event_factory, offers):
        event = event_factory(EventType.OBJECTIVE_UPDATED, {"objectiveId": "obj_1"})
        
        assert derive_rule_candidates(event, offers) == []
