"""Audit Trail Builder - per-run, append-only record factory."""

from typing import Any, Dict, Optional, Tuple

from copilotrm.audit.schemas import AuditRecord
from copilotrm.common.constants import IdPrefixes
from copilotrm.common.runtime import Clock, IdGenerator, SystemClock, UuidIdGenerator


class AuditTrailBuilder:
    """Creates audit records and keeps them in strict call order.
    
    One builder per run. Records are never removed, reordered or
    changed after they are appended.
    """
    
    def __init__(
        self,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ):
        self._ids = ids or UuidIdGenerator()
        self._clock = clock or SystemClock()
        self._records: list[AuditRecord] = []
    
    def record(self, actor: str, record_type: str, payload: Optional[Dict[str, Any]] = None) -> AuditRecord:
        """Create, append and return a fresh record."""
        entry = AuditRecord(
            id=self._ids.new_id(IdPrefixes.AUDIT),
            timestamp=self._clock.now(),
            actor=actor,
            type=record_type,
            payload=dict(payload or {}),
        )
        self._records.append(entry)
        return entry
    
    @property
    def records(self) -> Tuple[AuditRecord, ...]:
        """Snapshot of the trail so far."""
        return tuple(self._records)
    
    def __len__(self) -> int:
        return len(self._records)
