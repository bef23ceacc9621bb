"""ProductOffer schema - canonical definition."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from copilotrm.data.schemas.base import DomainModel
from copilotrm.data.schemas.customer import Segment


OfferCategory = Literal["hardware", "smartphone", "connectivity", "energy", "service", "accessory"]


class ProductOffer(DomainModel):
    """A sellable offer, sourced from invoices, promos or manual entry."""
    id: str = Field(..., description="Unique offer identifier")
    source_type: Literal["invoice", "promo", "manual"] = Field(default="manual")
    category: OfferCategory = Field(..., description="Commercial category")
    title: str = Field(..., description="Offer title")
    conditions: Optional[str] = Field(default=None)
    cost: Optional[float] = Field(default=None, ge=0)
    suggested_price: Optional[float] = Field(default=None, ge=0)
    margin_pct: Optional[float] = Field(default=None, description="Gross margin percentage")
    stock_qty: Optional[float] = Field(default=None, description="Units in stock")
    expires_at: Optional[datetime] = Field(default=None)
    target_segments: List[Segment] = Field(default_factory=list)
    active: bool = Field(default=True)
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "off_notebook_01",
                "sourceType": "invoice",
                "category": "hardware",
                "title": "Notebook gaming RTX 4060",
                "suggestedPrice": 1199.0,
                "marginPct": 18.0,
                "stockQty": 6,
                "targetSegments": ["gamer"],
                "active": True,
            }
        }
    }
