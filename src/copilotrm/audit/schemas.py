"""Audit schemas - type definitions for the decision trail."""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuditRecord(BaseModel):
    """One step of a run: who did what, when, with which data.
    
    Immutable. Payloads hold JSON-safe values only.
    """
    
    model_config = ConfigDict(frozen=True)
    
    id: str = Field(..., description="Unique record identifier")
    timestamp: datetime = Field(..., description="When the record was made (UTC)")
    actor: str = Field(..., description="Orchestrator or agent name")
    type: str = Field(..., description="Event name, e.g. actions.ranked")
    payload: Dict[str, Any] = Field(default_factory=dict)
    
    def to_jsonl(self) -> str:
        """Serialize to a single JSON line."""
        return json.dumps(self.model_dump(mode="json"), sort_keys=True, ensure_ascii=False)


class StoredAuditRecord(AuditRecord):
    """An audit record as persisted, with run id and hash chain fields."""
    run_id: Optional[str] = Field(default=None, description="Event id of the run")
    previous_hash: Optional[str] = Field(default=None)
    entry_hash: Optional[str] = Field(default=None)
    
    @classmethod
    def from_jsonl(cls, line: str) -> "StoredAuditRecord":
        """Parse a stored record from one JSON line."""
        return cls.model_validate(json.loads(line))
