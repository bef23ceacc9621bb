"""CommunicationDraft schema - canonical definition."""

from typing import Literal, Optional

from pydantic import Field

from copilotrm.data.schemas.base import DomainModel
from copilotrm.data.schemas.customer import Channel


class CommunicationDraft(DomainModel):
    """An unsent message awaiting optional approval before dispatch."""
    id: str = Field(..., description="Unique draft identifier, fresh per creation")
    customer_id: Optional[str] = Field(default=None)
    channel: Channel = Field(..., description="Delivery channel")
    audience: Literal["one-to-one", "one-to-many"] = Field(...)
    subject: Optional[str] = Field(default=None)
    body: str = Field(..., description="Message text")
    related_offer_id: Optional[str] = Field(default=None)
    needs_approval: bool = Field(
        ...,
        description="If true, a publisher may not auto-send the draft"
    )
    reason: str = Field(..., description="Why the draft was created")
    recipient_ref: Optional[str] = Field(default=None, description="Phone, email or handle")
