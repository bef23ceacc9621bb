"""ActionCandidate and ScoreBreakdown schemas."""

from typing import Any, Dict, Literal, Optional

from pydantic import Field

from copilotrm.data.schemas.base import DomainModel
from copilotrm.data.schemas.customer import Channel


ActionType = Literal["quote", "cross-sell", "customer-care", "campaign", "content", "followup"]


class ScoreBreakdown(DomainModel):
    """Named components and weighted total of a candidate's fitness score.
    
    contextFit and profileFit are taken verbatim from candidate hints;
    every other component is clamped to [0, 1] by the score engine.
    """
    context_fit: float = Field(..., description="How well the action fits the event context")
    profile_fit: float = Field(..., description="How well the action fits the customer profile")
    objective_boost: float = Field(..., ge=0.0, le=1.0)
    margin_score: float = Field(..., ge=0.0, le=1.0)
    stock_score: float = Field(..., ge=0.0, le=1.0)
    channel_consent_score: float = Field(..., ge=0.0, le=1.0)
    saturation_penalty: float = Field(..., ge=0.0, le=1.0)
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    total: float = Field(..., description="Weighted sum, rounded to 4 decimals")


class ActionCandidate(DomainModel):
    """A proposed business action, before or after scoring.
    
    Created by the rule-candidate generator. The ranker is the only
    component that attaches score_breakdown, and it does so on a copy.
    """
    id: str = Field(..., description="Unique action identifier")
    title: str = Field(..., description="Human-readable action title")
    agent: str = Field(..., description="Name of the component that proposed the action")
    action_type: Optional[ActionType] = Field(default=None)
    offer_id: Optional[str] = Field(default=None)
    customer_id: Optional[str] = Field(default=None)
    channel: Optional[Channel] = Field(default=None)
    confidence: float = Field(
        ...,
        description="Generator confidence; nominally 0-1, clamped when scored"
    )
    needs_approval: bool = Field(default=True)
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Named hints such as contextFit, profileFit and trigger"
    )
    score_breakdown: Optional[ScoreBreakdown] = Field(default=None)
    
    @property
    def total_score(self) -> Optional[float]:
        """Total score, or None if the candidate has not been ranked."""
        return self.score_breakdown.total if self.score_breakdown else None
    
    @property
    def trigger(self) -> Optional[str]:
        """Rule trigger that produced the candidate, if recorded."""
        value = self.metadata.get("trigger")
        return str(value) if value is not None else None
