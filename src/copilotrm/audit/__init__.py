"""Audit module - ordered, immutable trail of every decision in a run.

Components:
- AuditRecord: One immutable, timestamped trail entry
- AuditTrailBuilder: Per-run, append-only record factory
- AuditTrail: Thread-safe in-memory collection across runs
- FileAuditStore: Append-only JSONL persistence with hash chain integrity
"""

from copilotrm.audit.schemas import AuditRecord, StoredAuditRecord
from copilotrm.audit.trail import AuditTrailBuilder
from copilotrm.audit.store import (
    AuditTrail,
    FileAuditStore,
    AuditLogIntegrityError,
)

__all__ = [
    "AuditRecord",
    "StoredAuditRecord",
    "AuditTrailBuilder",
    "AuditTrail",
    "FileAuditStore",
    "AuditLogIntegrityError",
]
