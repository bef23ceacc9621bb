"""CustomerProfile schema - canonical definition."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from copilotrm.data.schemas.base import DomainModel


Channel = Literal["whatsapp", "email", "telegram", "facebook", "instagram", "x", "blog"]
Segment = Literal[
    "gamer", "business", "famiglia", "risparmio", "smartphone-upgrade", "fibra", "energia"
]


class ConsentState(DomainModel):
    """Marketing consent flags per direct channel."""
    whatsapp: bool = Field(default=False, description="Consent to WhatsApp contact")
    email: bool = Field(default=False, description="Consent to email contact")
    telegram: bool = Field(default=False, description="Consent to Telegram contact")
    updated_at: Optional[datetime] = Field(default=None, description="Last consent change")


class CustomerProfile(DomainModel):
    """Customer entity schema.
    
    Joined into the orchestrator context by the caller; the decision
    core only reads it.
    """
    id: str = Field(..., description="Unique customer identifier")
    full_name: str = Field(..., description="Display name")
    phone: Optional[str] = Field(default=None, description="Phone number, used as WhatsApp recipient")
    email: Optional[str] = Field(default=None, description="Email address")
    age_hint: Optional[int] = Field(default=None, ge=0, description="Approximate age")
    segments: List[Segment] = Field(default_factory=list, description="Marketing segments")
    interests: List[str] = Field(default_factory=list)
    spend_band: Optional[Literal["low", "mid", "high"]] = Field(default=None)
    purchase_history: List[str] = Field(default_factory=list)
    assistance_history: List[str] = Field(default_factory=list)
    conversation_notes: List[str] = Field(default_factory=list)
    consents: ConsentState = Field(default_factory=ConsentState)
    commercial_saturation_score: float = Field(
        default=0.0,
        description="Commercial pressure already applied, nominally 0-100"
    )
    
    def consent_for(self, channel: str) -> bool:
        """Consent flag for a channel; channels without a flag count as no consent."""
        if channel in ("whatsapp", "email", "telegram"):
            return bool(getattr(self.consents, channel))
        return False
