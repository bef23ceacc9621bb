"""Score Engine - Multi-Factor Fitness of an Action Candidate.

Pure function of (context, candidate). No state, no clock, no
randomness: identical inputs always give an identical breakdown.
Missing inputs degrade to fixed defaults, never to an error.
"""

import math
from typing import TYPE_CHECKING, Any, Mapping, Optional

from copilotrm.common.constants import ScoringConstants as S
from copilotrm.data.schemas import ActionCandidate, ScoreBreakdown

if TYPE_CHECKING:
    from copilotrm.orchestration.context import OrchestratorContext


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp value into [lo, hi]."""
    return max(lo, min(hi, value))


def _hint(metadata: Mapping[str, Any], key: str, default: float) -> float:
    """Read a float-like hint.

    Absent, zero, empty, unparseable and non-finite hints use the default.
    """
    value = metadata.get(key)
    if not value:
        return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if math.isfinite(parsed) else default


def _channel_consent(context: "OrchestratorContext", channel: Optional[str]) -> float:
    customer = context.customer
    if channel is None or customer is None:
        return S.DEFAULT_CHANNEL_CONSENT
    return 1.0 if customer.consent_for(channel) else 0.0


def score_action(context: "OrchestratorContext", candidate: ActionCandidate) -> ScoreBreakdown:
    """Compute the score breakdown of one candidate.
    
    Args:
        context: Run context; offers and objectives may be empty, customer may be absent
        candidate: Candidate to score; its confidence is clamped before use
        
    Returns:
        ScoreBreakdown with every component and the rounded weighted total
    """
    customer = context.customer
    offer = context.find_offer(candidate.offer_id)
    
    context_fit = _hint(candidate.metadata, "contextFit", S.DEFAULT_CONTEXT_FIT)
    profile_fit = _hint(candidate.metadata, "profileFit", S.DEFAULT_PROFILE_FIT)
    
    objective_boost = (
        S.OBJECTIVE_BOOST
        if any(obj.prefers(candidate.offer_id) for obj in context.active_objectives)
        else 0.0
    )
    
    if offer is not None and offer.margin_pct is not None:
        margin_score = clamp(offer.margin_pct / S.MARGIN_PCT_FULL_SCORE)
    else:
        margin_score = S.DEFAULT_MARGIN_SCORE
    
    if offer is not None and offer.stock_qty:
        stock_score = clamp(min(offer.stock_qty / S.STOCK_QTY_FULL_SCORE, 1.0))
    else:
        stock_score = S.DEFAULT_STOCK_SCORE
    
    channel_consent_score = _channel_consent(context, candidate.channel)
    
    if customer is not None:
        saturation_penalty = clamp(customer.commercial_saturation_score / S.SATURATION_SCALE)
    else:
        saturation_penalty = S.DEFAULT_SATURATION_PENALTY
    
    confidence_score = clamp(candidate.confidence)
    
    total = (
        context_fit * S.WEIGHT_CONTEXT_FIT
        + profile_fit * S.WEIGHT_PROFILE_FIT
        + objective_boost * S.WEIGHT_OBJECTIVE_BOOST
        + margin_score * S.WEIGHT_MARGIN
        + stock_score * S.WEIGHT_STOCK
        + channel_consent_score * S.WEIGHT_CHANNEL_CONSENT
        + (1 - saturation_penalty) * S.WEIGHT_SATURATION
        + confidence_score * S.WEIGHT_CONFIDENCE
    )
    
    return ScoreBreakdown(
        context_fit=context_fit,
        profile_fit=profile_fit,
        objective_boost=objective_boost,
        margin_score=margin_score,
        stock_score=stock_score,
        channel_consent_score=channel_consent_score,
        saturation_penalty=saturation_penalty,
        confidence_score=confidence_score,
        total=round(total, S.TOTAL_PRECISION),
    )
