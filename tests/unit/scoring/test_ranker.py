"""Unit tests for the Ranker."""

import math

from copilotrm.data.schemas import ActionCandidate
from copilotrm.scoring import rank_actions, score_action


def _candidate(action_id, confidence=0.5, **overrides):
    return ActionCandidate(
        id=action_id, title=f"Azione {action_id}", agent="content", confidence=confidence, **overrides
    )


class TestRankActions:
    """Tests for rank_actions."""
    
    def test_empty_input(self, ticket_context):
        assert rank_actions(ticket_context, []) == []
    
    def test_sorted_by_total_descending(self, ticket_context):
        candidates = [
            _candidate("a", confidence=0.1),
            _candidate("b", confidence=0.9),
            _candidate("c", confidence=0.5),
        ]
        ranked = rank_actions(ticket_context, candidates)
        
        assert [a.id for a in ranked] == ["b", "c", "a"]
        totals = [a.total_score for a in ranked]
        assert totals == sorted(totals, reverse=True)
    
    def test_output_is_permutation_with_scores(self, ticket_context):
        candidates = [_candidate(str(i), confidence=i / 10) for i in range(5)]
        ranked = rank_actions(ticket_context, candidates)
        
        assert sorted(a.id for a in ranked) == sorted(c.id for c in candidates)
        assert all(a.score_breakdown is not None for a in ranked)
    
    def test_ties_keep_input_order(self, ticket_context):
        candidates = [_candidate("first"), _candidate("second"), _candidate("third")]
        ranked = rank_actions(ticket_context, candidates)
        
        assert [a.id for a in ranked] == ["first", "second", "third"]
    
    def test_inputs_are_not_modified(self, ticket_context):
        candidate = _candidate("a")
        rank_actions(ticket_context, [candidate])
        
        assert candidate.score_breakdown is None
    
    def test_attached_score_matches_engine(self, ticket_context):
        candidate = _candidate("a", offer_id="off_nb", channel="whatsapp")
        ranked = rank_actions(ticket_context, [candidate])
        
        assert ranked[0].score_breakdown == score_action(ticket_context, candidate)
    
    def test_reranking_is_idempotent(self, ticket_context):
        candidates = [_candidate("a", 0.3), _candidate("b", 0.7), _candidate("c", 0.3)]
        once = rank_actions(ticket_context, candidates)
        twice = rank_actions(ticket_context, once)
        
        assert [a.id for a in twice] == [a.id for a in once]
        assert [a.total_score for a in twice] == [a.total_score for a in once]
    
    def test_non_finite_hint_keeps_totals_ordered(self, ticket_context):
        candidates = [
            _candidate("low", metadata={"contextFit": 0.1}),
            _candidate("nan", metadata={"contextFit": "nan"}),
            _candidate("high", metadata={"contextFit": 0.9}),
        ]
        ranked = rank_actions(ticket_context, candidates)
        
        totals = [a.total_score for a in ranked]
        assert all(math.isfinite(t) for t in totals)
        assert totals == sorted(totals, reverse=True)
        assert [a.id for a in ranked] == ["high", "nan", "low"]
