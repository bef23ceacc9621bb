"""In-memory repositories and context assembly.

Repositories are keyed by record id and safe to share between threads.
The orchestrator never reads them; callers join them into an
OrchestratorContext snapshot with ``assemble_context`` before a run.
"""

import threading
from datetime import datetime
from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from copilotrm.data.schemas import (
    AssistanceTicket,
    CustomerProfile,
    DomainEvent,
    ManagerObjective,
    OfferCategory,
    ProductOffer,
    Segment,
)
from copilotrm.orchestration.context import OrchestratorContext


T = TypeVar("T", CustomerProfile, ProductOffer, ManagerObjective, AssistanceTicket)


class _KeyedRepository(Generic[T]):
    """Insertion-ordered map of records by id."""

    def __init__(self, records: Iterable[T] = ()):
        self._records: Dict[str, T] = {}
        self._lock = threading.Lock()
        for record in records:
            self._records[record.id] = record

    def upsert(self, record: T) -> None:
        with self._lock:
            self._records[record.id] = record

    def get_by_id(self, record_id: str) -> Optional[T]:
        with self._lock:
            return self._records.get(record_id)

    def list(self) -> List[T]:
        with self._lock:
            return list(self._records.values())

    def replace_all(self, records: Iterable[T]) -> None:
        with self._lock:
            self._records = {record.id: record for record in records}

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class CustomerRepository(_KeyedRepository[CustomerProfile]):

    def find_by_phone(self, phone: str) -> Optional[CustomerProfile]:
        return next((c for c in self.list() if c.phone == phone), None)

    def list_by_segment(self, segment: Segment) -> List[CustomerProfile]:
        return [c for c in self.list() if segment in c.segments]


class OfferRepository(_KeyedRepository[ProductOffer]):
    """Offers from invoices, promos and manual entry."""

    def list_active(self) -> List[ProductOffer]:
        return [o for o in self.list() if o.active]

    def list_by_category(self, category: OfferCategory) -> List[ProductOffer]:
        return [o for o in self.list_active() if o.category == category]

    def list_by_segment(self, segment: Segment) -> List[ProductOffer]:
        return [o for o in self.list_active() if segment in o.target_segments]


class ObjectiveRepository(_KeyedRepository[ManagerObjective]):

    def list_active(self, at: datetime) -> List[ManagerObjective]:
        """Objectives flagged active whose period contains ``at``."""
        return [o for o in self.list() if o.is_active_at(at)]


class AssistanceRepository(_KeyedRepository[AssistanceTicket]):
    pass


def assemble_context(
    event: DomainEvent,
    customers: CustomerRepository,
    offers: OfferRepository,
    objectives: ObjectiveRepository,
    at: Optional[datetime] = None,
) -> OrchestratorContext:
    """Join repositories into the snapshot one run works on.

    Args:
        event: The event to process
        customers: Looked up by ``event.customer_id``
        offers: Only active offers are included
        objectives: Only objectives active at ``at`` are included
        at: Reference instant, defaults to ``event.occurred_at``

    Returns:
        OrchestratorContext with no enriched data
    """
    at = at or event.occurred_at
    customer = customers.get_by_id(event.customer_id) if event.customer_id else None
    return OrchestratorContext(
        event=event,
        customer=customer,
        active_offers=offers.list_active(),
        active_objectives=objectives.list_active(at),
    )
