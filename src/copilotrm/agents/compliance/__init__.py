"""Compliance Agent - module init."""

from copilotrm.agents.compliance.agent import ComplianceAgent

__all__ = ["ComplianceAgent"]
