"""Rules - default candidate generation and hand-off derivation.

Both are collaborators of the orchestrator: it only depends on their
call signatures, so either can be replaced at wiring time.
"""

from copilotrm.rules.candidates import RuleCandidateGenerator, derive_rule_candidates
from copilotrm.rules.handoffs import HandoffDeriver, HandoffEdge, derive_handoffs

__all__ = [
    "RuleCandidateGenerator",
    "derive_rule_candidates",
    "HandoffDeriver",
    "HandoffEdge",
    "derive_handoffs",
]
