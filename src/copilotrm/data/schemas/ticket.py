"""AssistanceTicket schema - canonical definition."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from copilotrm.data.schemas.base import DomainModel


TicketOutcome = Literal["repair", "not-worth-repairing", "pending"]


class AssistanceTicket(DomainModel):
    """Repair/assistance ticket opened at the counter."""
    id: str = Field(..., description="Unique ticket identifier")
    customer_id: Optional[str] = Field(default=None)
    provisional_customer: bool = Field(default=False)
    phone_lookup: str = Field(default="")
    device_type: str = Field(default="")
    issue: str = Field(default="")
    diagnosis: Optional[str] = Field(default=None)
    outcome: Optional[TicketOutcome] = Field(default=None)
    inferred_signals: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
