#!/usr/bin/env python3
"""Main entry point for CopilotRM."""

from datetime import datetime, timezone

from copilotrm.audit import FileAuditStore
from copilotrm.common.config import get_config
from copilotrm.common.logging import configure_logging, get_logger
from copilotrm.data.schemas import CustomerProfile, DomainEvent, EventType
from copilotrm.orchestration import Orchestrator, OrchestratorContext

logger = get_logger(__name__)


def main():
    """Wire the orchestrator from configuration and run one sample event."""
    configure_logging()
    config = get_config()
    logger.info(f"CopilotRM initialized in {config.environment.value} mode")
    logger.info(f"Agents file: {config.resolved_agents_file}")

    orchestrator = Orchestrator.from_config(config)
    context = OrchestratorContext(
        event=DomainEvent(
            id="evt_demo",
            type=EventType.TICKET_OUTCOME,
            occurred_at=datetime.now(timezone.utc),
            customer_id="cust_demo",
            payload={"ticketId": "t_demo", "outcome": "not-worth-repairing"},
        ),
        customer=CustomerProfile(id="cust_demo", full_name="Cliente Demo", phone="+390000000000"),
    )
    output = orchestrator.run(context)
    FileAuditStore.from_config(config).append_records(output.audit_records, run_id=context.event.id)

    logger.info(
        f"Run complete: {len(output.ranked_actions)} actions, "
        f"{len(output.tasks)} tasks, {len(output.drafts)} drafts, "
        f"{len(output.audit_records)} audit records written to {config.audit_log_dir}"
    )


if __name__ == "__main__":
    main()
