"""Telephony Agent - module init."""

from copilotrm.agents.telephony.agent import TelephonyAgent

__all__ = ["TelephonyAgent"]
