"""Scoring - multi-factor scoring and ranking of action candidates."""

from copilotrm.scoring.engine import clamp, score_action
from copilotrm.scoring.ranker import rank_actions

__all__ = [
    "clamp",
    "score_action",
    "rank_actions",
]
