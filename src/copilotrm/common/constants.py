"""Centralized constants for the CopilotRM decision core."""


# ===== SCORING =====
class ScoringConstants:
    # Component weights (sum to 1.0)
    WEIGHT_CONTEXT_FIT = 0.20
    WEIGHT_PROFILE_FIT = 0.20
    WEIGHT_OBJECTIVE_BOOST = 0.15
    WEIGHT_MARGIN = 0.10
    WEIGHT_STOCK = 0.10
    WEIGHT_CHANNEL_CONSENT = 0.10
    WEIGHT_SATURATION = 0.05
    WEIGHT_CONFIDENCE = 0.10

    # Defaults when an input is missing
    DEFAULT_CONTEXT_FIT = 0.6
    DEFAULT_PROFILE_FIT = 0.5
    DEFAULT_MARGIN_SCORE = 0.3
    DEFAULT_STOCK_SCORE = 0.2
    DEFAULT_CHANNEL_CONSENT = 0.4
    DEFAULT_SATURATION_PENALTY = 0.1

    # Normalisation
    OBJECTIVE_BOOST = 0.25
    MARGIN_PCT_FULL_SCORE = 40.0
    STOCK_QTY_FULL_SCORE = 20.0
    SATURATION_SCALE = 100.0

    TOTAL_PRECISION = 4


# ===== IDENTIFIERS =====
class IdPrefixes:
    ACTION = "act"
    TASK = "task"
    DRAFT = "draft"
    AUDIT = "audit"


# ===== AUDIT =====
class AuditConstants:
    ORCHESTRATOR_ACTOR = "orchestrator"
    HASH_ALGORITHM = "sha256"
    LOG_FILENAME_PATTERN = "copilotrm_audit_{date}.jsonl"

    # Record types emitted by one orchestration run
    EVENT_RECEIVED = "event.received"
    CANDIDATES_GENERATED = "rules.candidates.generated"
    ACTIONS_RANKED = "actions.ranked"
    HANDOFFS_DERIVED = "handoffs.derived"
    AGENTS_EXECUTED = "agents.executed"
    AGENT_NOTES = "agent.notes"
    AGENT_FAILED = "agent.failed"
    CANDIDATE_SCORED = "candidate.scored"
    PROVIDERS_RUN = "providers.run"
    PROVIDER_ERROR = "provider.error"
    EVALUATOR_RESULT = "evaluator.result"
    EVALUATOR_ERROR = "evaluator.error"


# ===== AGENT EXECUTION =====
class ExecutionConstants:
    DEFAULT_MAX_WORKERS = 4
    THREAD_NAME_PREFIX = "AgentWorker"


# ===== CUSTOMER POLICY =====
class CustomerConstants:
    HIGH_SATURATION_THRESHOLD = 80
