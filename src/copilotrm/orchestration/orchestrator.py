"""Orchestrator - The Only Place a Run Happens.

One run turns one event into ranked actions, tasks, drafts and an
ordered audit trail. The run is strictly sequential:

    Start -> CandidatesGenerated -> Ranked -> HandoffsDerived
          -> AgentsExecuted -> Aggregated -> Done

Design principles:
- No state is kept between runs; every run gets its own audit trail
- Collaborators (rule generator, hand-off deriver, agents) are injected
- Agent failures are isolated by default, collaborator failures abort
- Output order never depends on thread scheduling
"""

import logging
from collections import Counter
from functools import partial
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from copilotrm.agents.registry import AgentRegistry
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.audit.trail import AuditTrailBuilder
from copilotrm.common.config import Config, get_config
from copilotrm.common.constants import AuditConstants
from copilotrm.common.exceptions import AgentError, CollaboratorError, InvariantViolation
from copilotrm.common.runtime import (
    Clock,
    IdGenerator,
    RunDeadline,
    SystemClock,
    UuidIdGenerator,
)
from copilotrm.data.schemas import ActionCandidate
from copilotrm.orchestration.agent_router import AgentOutcome, AgentRouter
from copilotrm.orchestration.context import OrchestratorContext, OrchestratorOutput
from copilotrm.orchestration.extensions import ContextProvider, EvaluationResult, Evaluator
from copilotrm.rules.candidates import RuleCandidateGenerator, derive_rule_candidates
from copilotrm.rules.handoffs import HandoffDeriver, derive_handoffs
from copilotrm.scoring import rank_actions


logger = logging.getLogger(__name__)

ACTOR = AuditConstants.ORCHESTRATOR_ACTOR


def _descriptor_payload(descriptor: Any) -> Any:
    """JSON form of one opaque hand-off descriptor."""
    if hasattr(descriptor, "to_payload"):
        return descriptor.to_payload()
    if isinstance(descriptor, BaseModel):
        return descriptor.model_dump(mode="json")
    return descriptor


def _error_text(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _ensure_unique_ids(items: Iterable[Any], kind: str) -> None:
    counts = Counter(item.id for item in items)
    duplicates = sorted(item_id for item_id, n in counts.items() if n > 1)
    if duplicates:
        raise InvariantViolation(
            f"Duplicate {kind} ids in one run: {duplicates}",
            details={"kind": kind, "ids": duplicates},
        )


class Orchestrator:
    """Runs the decision pipeline for one event at a time.

    Instances hold only configuration and collaborators, so one
    orchestrator can serve concurrent runs for different events as long
    as the injected collaborators are safe to share.

    Error Handling:
    - Rule generator or hand-off deriver failure -> CollaboratorError
    - Agent failure -> ``agent.failed`` record, or AgentError when
      isolation is off
    - Deadline passed before a stage -> RunDeadlineExceeded
    - Provider and evaluator failures are recorded, never raised
    """

    def __init__(
        self,
        registry: AgentRegistry,
        rule_generator: Optional[RuleCandidateGenerator] = None,
        handoff_deriver: Optional[HandoffDeriver] = None,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
        router: Optional[AgentRouter] = None,
        isolate_agent_failures: bool = True,
        run_timeout_seconds: Optional[float] = None,
        providers: Sequence[ContextProvider] = (),
        evaluators: Sequence[Evaluator] = (),
    ):
        """Initialize orchestrator with its collaborators.

        Args:
            registry: Fixed, ordered agent set
            rule_generator: ``(event, offers) -> candidates``. Defaults to the built-in rules.
            handoff_deriver: ``(ranked) -> descriptors``. Defaults to the built-in rules.
            ids: Id generator for candidates and audit records
            clock: Time source for audit records
            router: Agent router. Creates a parallel router if not provided.
            isolate_agent_failures: Record agent failures and continue instead of aborting
            run_timeout_seconds: Default deadline for each run, None for unbounded
            providers: Context providers run before rule generation
            evaluators: Evaluators run after aggregation
        """
        self.registry = registry
        self._ids = ids or UuidIdGenerator()
        self._clock = clock or SystemClock()
        self.rule_generator = rule_generator or partial(derive_rule_candidates, ids=self._ids)
        self.handoff_deriver = handoff_deriver or derive_handoffs
        self.router = router or AgentRouter()
        self.isolate_agent_failures = isolate_agent_failures
        self.run_timeout_seconds = run_timeout_seconds
        self.providers = tuple(providers)
        self.evaluators = tuple(evaluators)

    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        registry: Optional[AgentRegistry] = None,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
        **kwargs: Any,
    ) -> "Orchestrator":
        """Build an orchestrator wired from configuration.

        The registry is loaded from the configured agents file unless one
        is passed in.
        """
        config = config or get_config()
        ids = ids or UuidIdGenerator()
        clock = clock or SystemClock()
        if registry is None:
            registry = AgentRegistry.from_yaml(config.resolved_agents_file, ids=ids, clock=clock)
        router = AgentRouter(
            max_workers=config.agent_max_workers,
            parallel=config.parallel_agents,
        )
        return cls(
            registry=registry,
            ids=ids,
            clock=clock,
            router=router,
            isolate_agent_failures=config.isolate_agent_failures,
            run_timeout_seconds=config.run_timeout_seconds,
            **kwargs,
        )

    def run(
        self,
        context: OrchestratorContext,
        timeout_seconds: Optional[float] = None,
    ) -> OrchestratorOutput:
        """Process one event through the full pipeline.

        The deadline is checked between stages. The rule generator and the
        hand-off deriver run in the caller thread and are not interrupted;
        an overrun inside either surfaces at the next stage check.

        Args:
            context: Immutable snapshot joined by the caller
            timeout_seconds: Deadline for this run; falls back to the configured one

        Returns:
            OrchestratorOutput with ranked actions, tasks, drafts and audit trail

        Raises:
            CollaboratorError: Rule generator or hand-off deriver failed
            AgentError: An agent failed and failures are not isolated
            RunDeadlineExceeded: The run overran its deadline
            InvariantViolation: Agents produced clashing task or draft ids
        """
        if timeout_seconds is None:
            timeout_seconds = self.run_timeout_seconds
        deadline = RunDeadline(timeout_seconds)
        trail = AuditTrailBuilder(ids=self._ids, clock=self._clock)
        event = context.event
        log_extra = {"event_id": event.id, "event_type": event.type.value}

        logger.info("Orchestration run started", extra=log_extra)

        # Start
        trail.record(ACTOR, AuditConstants.EVENT_RECEIVED, {
            "eventType": event.type.value,
            "eventId": event.id,
        })

        if self.providers:
            context = self._run_providers(context, trail)

        # CandidatesGenerated
        deadline.check("rules")
        candidates = self._call_collaborator(
            "rule_generator", self.rule_generator, event, context.active_offers
        )
        trail.record(ACTOR, AuditConstants.CANDIDATES_GENERATED, {"count": len(candidates)})

        # Ranked
        deadline.check("ranking")
        ranked = rank_actions(context, candidates)
        top = ranked[0] if ranked else None
        trail.record(ACTOR, AuditConstants.ACTIONS_RANKED, {
            "topAction": top.title if top else None,
            "topScore": top.total_score if top else None,
            "count": len(ranked),
        })

        # HandoffsDerived
        deadline.check("handoffs")
        handoffs = self._call_collaborator(
            "handoff_deriver", self.handoff_deriver, tuple(ranked)
        )
        trail.record(ACTOR, AuditConstants.HANDOFFS_DERIVED, {
            "handoffs": [_descriptor_payload(h) for h in handoffs],
        })

        # AgentsExecuted
        deadline.check("agents")
        selected = self.registry.select(event.type)
        routed = self.router.route(selected, context, deadline)
        if routed.failures and not self.isolate_agent_failures:
            self._raise_agent_failure(routed.failures[0], log_extra)
        trail.record(ACTOR, AuditConstants.AGENTS_EXECUTED, {
            "agents": [result.agent for result in routed.results],
        })

        # Aggregated
        tasks, drafts = self._aggregate(routed.outcomes, trail)
        for action in ranked:
            trail.record(ACTOR, AuditConstants.CANDIDATE_SCORED, self._scored_payload(action))

        if self.evaluators:
            self._run_evaluators(context, routed.results, trail)

        logger.info(
            f"Orchestration run finished: {len(ranked)} actions, "
            f"{len(tasks)} tasks, {len(drafts)} drafts, {len(routed.failures)} agent failures",
            extra=log_extra,
        )

        # Done
        return OrchestratorOutput(
            ranked_actions=ranked,
            tasks=tasks,
            drafts=drafts,
            audit_records=trail.records,
        )

    def _call_collaborator(self, name: str, collaborator: Any, *args: Any) -> List[Any]:
        """Call a critical-path collaborator, wrapping its failures."""
        try:
            return list(collaborator(*args))
        except Exception as e:
            logger.error(f"Collaborator {name} failed: {type(e).__name__}: {e}")
            raise CollaboratorError(
                f"{name} failed: {_error_text(e)}",
                collaborator=name,
                details={"error_type": type(e).__name__},
            ) from e

    def _raise_agent_failure(self, failure: AgentOutcome, log_extra: Dict[str, Any]) -> None:
        logger.error(
            f"Aborting run: agent {failure.agent} failed ({failure.error_type})",
            extra=log_extra,
        )
        raise AgentError(
            f"Agent {failure.agent} failed: {failure.error_message}",
            agent_name=failure.agent,
            details={"error_type": failure.error_type},
        ) from failure.exception

    def _aggregate(self, outcomes: Sequence[AgentOutcome], trail: AuditTrailBuilder):
        """Flatten results in selection order and record per-agent notes."""
        tasks = []
        drafts = []
        for outcome in outcomes:
            if outcome.result is None:
                trail.record(ACTOR, AuditConstants.AGENT_FAILED, {
                    "agent": outcome.agent,
                    "error": f"{outcome.error_type}: {outcome.error_message}",
                })
                continue
            result = outcome.result
            tasks.extend(result.tasks)
            drafts.extend(result.drafts)
            trail.record(result.agent, AuditConstants.AGENT_NOTES, {"notes": list(result.notes)})

        _ensure_unique_ids(tasks, "task")
        _ensure_unique_ids(drafts, "draft")
        return tasks, drafts

    @staticmethod
    def _scored_payload(action: ActionCandidate) -> Dict[str, Any]:
        return {
            "actionId": action.id,
            "title": action.title,
            "agent": action.agent,
            "score": action.score_breakdown.to_payload() if action.score_breakdown else None,
        }

    def _run_providers(
        self,
        context: OrchestratorContext,
        trail: AuditTrailBuilder,
    ) -> OrchestratorContext:
        enriched = dict(context.enriched_data)
        for provider in self.providers:
            try:
                enriched[provider.name] = provider.provide(context)
            except Exception as e:
                logger.warning(f"Context provider {provider.name} failed: {type(e).__name__}: {e}")
                trail.record(ACTOR, AuditConstants.PROVIDER_ERROR, {
                    "provider": provider.name,
                    "error": _error_text(e),
                })
        trail.record(ACTOR, AuditConstants.PROVIDERS_RUN, {
            "providers": [p.name for p in self.providers],
        })
        return context.with_enriched_data(enriched)

    def _run_evaluators(
        self,
        context: OrchestratorContext,
        executions: Sequence[AgentExecutionResult],
        trail: AuditTrailBuilder,
    ) -> None:
        for evaluator in self.evaluators:
            try:
                result = evaluator.evaluate(context, executions)
                if not isinstance(result, EvaluationResult):
                    result = EvaluationResult.model_validate(result)
            except Exception as e:
                logger.warning(f"Evaluator {evaluator.name} failed: {type(e).__name__}: {e}")
                trail.record(ACTOR, AuditConstants.EVALUATOR_ERROR, {
                    "evaluator": evaluator.name,
                    "error": _error_text(e),
                })
                continue
            trail.record(ACTOR, AuditConstants.EVALUATOR_RESULT, {
                "evaluator": evaluator.name,
                "shouldContinue": result.should_continue,
                "notes": list(result.notes),
            })


def run_orchestration(
    context: OrchestratorContext,
    orchestrator: Optional[Orchestrator] = None,
) -> OrchestratorOutput:
    """Run one event through a configured orchestrator.

    Builds an orchestrator from the active configuration when none is
    given.
    """
    orchestrator = orchestrator or Orchestrator.from_config()
    return orchestrator.run(context)
