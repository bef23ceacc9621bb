"""Agent Router - Isolated, Order-Preserving Agent Invocation."""

import atexit
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from copilotrm.agents.base import BusinessAgent
from copilotrm.agents.schema import AgentExecutionResult
from copilotrm.common.constants import ExecutionConstants
from copilotrm.common.runtime import RunDeadline

if TYPE_CHECKING:
    from copilotrm.orchestration.context import OrchestratorContext


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentOutcome:
    """What happened to one selected agent.

    Exactly one of ``result`` or ``error_type`` is set.
    """
    agent: str
    result: Optional[AgentExecutionResult] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    exception: Optional[BaseException] = field(default=None, compare=False, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.result is not None


@dataclass
class RouterResult:
    """Outcomes of one fan-out, in selection order."""
    outcomes: List[AgentOutcome] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(o.succeeded for o in self.outcomes)

    @property
    def results(self) -> List[AgentExecutionResult]:
        return [o.result for o in self.outcomes if o.result is not None]

    @property
    def failures(self) -> List[AgentOutcome]:
        return [o for o in self.outcomes if not o.succeeded]


# Module-level shared executors for performance, one per worker count
_shared_executors: Dict[int, ThreadPoolExecutor] = {}
_executor_lock = threading.Lock()
_atexit_registered = False


def _get_shared_executor(max_workers: int = ExecutionConstants.DEFAULT_MAX_WORKERS) -> ThreadPoolExecutor:
    """Get or create the shared thread pool executor for ``max_workers``.

    Reuses a module-level executor to avoid thread creation overhead per run.
    Routers configured with different worker counts get different pools.
    """
    global _atexit_registered

    with _executor_lock:
        executor = _shared_executors.get(max_workers)
        if executor is None:
            executor = ThreadPoolExecutor(
                max_workers=max_workers,
                thread_name_prefix=ExecutionConstants.THREAD_NAME_PREFIX
            )
            _shared_executors[max_workers] = executor
            if not _atexit_registered:
                atexit.register(_shutdown_shared_executor)
                _atexit_registered = True
            logger.info(f"Created shared agent executor with {max_workers} workers")

    return executor


def _shutdown_shared_executor() -> None:
    """Shutdown the shared executors on process exit."""
    with _executor_lock:
        executors = list(_shared_executors.values())
        _shared_executors.clear()
    for executor in executors:
        executor.shutdown(wait=True, cancel_futures=False)
    if executors:
        logger.info("Shared agent executors shutdown complete")


def _failure(agent: BusinessAgent, exc: BaseException) -> AgentOutcome:
    return AgentOutcome(
        agent=agent.name,
        error_type=type(exc).__name__,
        error_message=str(exc) or type(exc).__name__,
        exception=exc,
    )


class AgentRouter:
    """Runs the selected agents against one context and collects outcomes.

    Execution model:
    - Agents have no data dependency on each other, so they are submitted
      together to a worker pool (or run one by one when ``parallel`` is off)
    - Outcomes are always collected in selection order, never completion
      order, so both modes produce the same output
    - Every agent failure, including a deadline overrun, is captured as an
      AgentOutcome; the router itself never raises for an agent

    Features:
    - Reuses a shared thread pool executor for performance
    - Injectable executor for testing
    """

    def __init__(
        self,
        max_workers: int = ExecutionConstants.DEFAULT_MAX_WORKERS,
        executor: Optional[ThreadPoolExecutor] = None,
        parallel: bool = True,
    ):
        """Initialize router.

        Args:
            max_workers: Maximum parallel agent executions. Selects the shared
                executor of that size when no executor is given.
            executor: Custom executor. Uses shared executor if not provided.
            parallel: Run agents on the executor; False runs them in the caller thread
        """
        self.max_workers = max_workers
        self.parallel = parallel
        self._executor = executor

    def _get_executor(self) -> ThreadPoolExecutor:
        """Get the executor to use for parallel agent execution."""
        if self._executor is not None:
            return self._executor
        return _get_shared_executor(self.max_workers)

    def route(
        self,
        agents: Sequence[BusinessAgent],
        context: "OrchestratorContext",
        deadline: Optional[RunDeadline] = None,
    ) -> RouterResult:
        """Execute every agent and join on all of them.

        Args:
            agents: Selected agents, in selection order
            context: Read-only context shared by all agents
            deadline: Run deadline bounding the whole fan-out

        Returns:
            RouterResult with one outcome per agent, in selection order
        """
        deadline = deadline or RunDeadline()
        if not agents:
            return RouterResult()

        if self.parallel:
            outcomes = self._route_parallel(agents, context, deadline)
        else:
            outcomes = self._route_sequential(agents, context, deadline)

        result = RouterResult(outcomes=outcomes)
        for failure in result.failures:
            logger.warning(
                f"Agent {failure.agent} failed: {failure.error_type}: {failure.error_message}"
            )
        return result

    def _route_parallel(
        self,
        agents: Sequence[BusinessAgent],
        context: "OrchestratorContext",
        deadline: RunDeadline,
    ) -> List[AgentOutcome]:
        executor = self._get_executor()
        futures: List[Future] = [executor.submit(agent.execute, context) for agent in agents]

        outcomes = []
        for agent, future in zip(agents, futures):
            try:
                outcomes.append(self._collect(agent, future.result(timeout=deadline.remaining())))
            except FutureTimeoutError:
                # A running thread cannot be stopped; its result is discarded
                future.cancel()
                outcomes.append(AgentOutcome(
                    agent=agent.name,
                    error_type="RunDeadlineExceeded",
                    error_message=f"Agent {agent.name} did not finish before the run deadline",
                ))
            except Exception as e:
                outcomes.append(_failure(agent, e))
        return outcomes

    def _route_sequential(
        self,
        agents: Sequence[BusinessAgent],
        context: "OrchestratorContext",
        deadline: RunDeadline,
    ) -> List[AgentOutcome]:
        outcomes = []
        for agent in agents:
            if deadline.expired:
                outcomes.append(AgentOutcome(
                    agent=agent.name,
                    error_type="RunDeadlineExceeded",
                    error_message=f"Agent {agent.name} skipped: run deadline exceeded",
                ))
                continue
            try:
                outcomes.append(self._collect(agent, agent.execute(context)))
            except Exception as e:
                outcomes.append(_failure(agent, e))
        return outcomes

    @staticmethod
    def _collect(agent: BusinessAgent, result: object) -> AgentOutcome:
        if not isinstance(result, AgentExecutionResult):
            raise TypeError(
                f"Agent {agent.name} returned {type(result).__name__}, expected AgentExecutionResult"
            )
        return AgentOutcome(agent=agent.name, result=result)


def shutdown_executor() -> None:
    """Explicitly shutdown the shared executors.

    Call this during application shutdown for clean termination.
    """
    _shutdown_shared_executor()
