"""Ranker - scores every candidate and orders them best first."""

from typing import TYPE_CHECKING, List, Sequence

from copilotrm.data.schemas import ActionCandidate
from copilotrm.scoring.engine import score_action

if TYPE_CHECKING:
    from copilotrm.orchestration.context import OrchestratorContext


def rank_actions(
    context: "OrchestratorContext",
    candidates: Sequence[ActionCandidate],
) -> List[ActionCandidate]:
    """Score candidates and sort them by total, highest first.
    
    Each returned candidate is a copy carrying a fresh score_breakdown;
    the inputs are left untouched. The sort is stable, so equal totals
    keep their input order.
    """
    scored = [
        candidate.model_copy(update={"score_breakdown": score_action(context, candidate)})
        for candidate in candidates
    ]
    return sorted(scored, key=lambda c: c.score_breakdown.total, reverse=True)
