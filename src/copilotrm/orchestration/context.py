"""Orchestrator Context - The Immutable Input and Output of One Run.

The context is a snapshot joined by the caller before the run starts.
The core never re-reads repositories mid-run and never mutates the
context; enrichment produces a new context value.

Design principles:
- Frozen dataclasses for immutability
- Sequences stored as tuples so agents cannot append to shared state
- Output owned by the caller once returned
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from copilotrm.audit.schemas import AuditRecord
from copilotrm.data.schemas import (
    ActionCandidate,
    CommunicationDraft,
    CustomerProfile,
    DomainEvent,
    ManagerObjective,
    ProductOffer,
    TaskItem,
)


@dataclass(frozen=True)
class OrchestratorContext:
    """The full decision input for one run."""
    event: DomainEvent
    customer: Optional[CustomerProfile] = None
    active_offers: Sequence[ProductOffer] = ()
    active_objectives: Sequence[ManagerObjective] = ()
    enriched_data: Mapping[str, Any] = field(default_factory=dict)
    
    def __post_init__(self):
        object.__setattr__(self, "active_offers", tuple(self.active_offers))
        object.__setattr__(self, "active_objectives", tuple(self.active_objectives))
        object.__setattr__(self, "enriched_data", MappingProxyType(dict(self.enriched_data)))
    
    def find_offer(self, offer_id: Optional[str]) -> Optional[ProductOffer]:
        """Active offer with the given id, if any."""
        if not offer_id:
            return None
        for offer in self.active_offers:
            if offer.id == offer_id:
                return offer
        return None
    
    def with_enriched_data(self, enriched_data: Mapping[str, Any]) -> "OrchestratorContext":
        """Return new context carrying provider results."""
        return replace(self, enriched_data=enriched_data)


@dataclass(frozen=True)
class OrchestratorOutput:
    """The sole return value of one orchestration run."""
    ranked_actions: Sequence[ActionCandidate]
    tasks: Sequence[TaskItem]
    drafts: Sequence[CommunicationDraft]
    audit_records: Sequence[AuditRecord]
    
    def __post_init__(self):
        object.__setattr__(self, "ranked_actions", tuple(self.ranked_actions))
        object.__setattr__(self, "tasks", tuple(self.tasks))
        object.__setattr__(self, "drafts", tuple(self.drafts))
        object.__setattr__(self, "audit_records", tuple(self.audit_records))
    
    def records_of_type(self, record_type: str) -> list[AuditRecord]:
        """Audit records of one type, in trail order."""
        return [r for r in self.audit_records if r.type == record_type]
