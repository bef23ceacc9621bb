"""ManagerObjective schema - canonical definition."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from copilotrm.data.schemas.base import DomainModel
from copilotrm.data.schemas.customer import Channel


class ChannelWindow(DomainModel):
    """Hours of the day in which a channel may be used."""
    channel: Channel
    from_hour: int = Field(..., ge=0, le=24)
    to_hour: int = Field(..., ge=0, le=24)


class ManagerObjective(DomainModel):
    """A commercial objective set by a store manager for a period."""
    id: str = Field(..., description="Unique objective identifier")
    name: str = Field(..., description="Objective name")
    period_start: datetime = Field(..., description="Start of the objective period")
    period_end: datetime = Field(..., description="End of the objective period")
    category_weights: Dict[str, float] = Field(default_factory=dict)
    preferred_offer_ids: List[str] = Field(
        default_factory=list,
        description="Offers that earn an objective boost when proposed"
    )
    stock_clearance_offer_ids: List[str] = Field(default_factory=list)
    min_margin_pct: Optional[float] = Field(default=None)
    channel_windows: List[ChannelWindow] = Field(default_factory=list)
    daily_contact_capacity: Optional[int] = Field(default=None, ge=0)
    active: bool = Field(default=True)
    
    def is_active_at(self, at: datetime) -> bool:
        """Check whether the objective applies at the given instant."""
        return self.active and self.period_start <= at <= self.period_end
    
    def prefers(self, offer_id: Optional[str]) -> bool:
        """Check whether an offer is in the preferred set. Empty ids never match."""
        return bool(offer_id) and offer_id in self.preferred_offer_ids
