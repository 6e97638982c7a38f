"""
Check-in agent worker: per-account flow, run report, and run entrypoint.
"""

from daily_checkin.agent_worker.flow import AccountOutcome, CheckInFlow, FlowState, OutcomeStatus
from daily_checkin.agent_worker.report import RunReport
from daily_checkin.agent_worker.runner import main, run_checkin

__all__ = [
    "AccountOutcome",
    "CheckInFlow",
    "FlowState",
    "OutcomeStatus",
    "RunReport",
    "main",
    "run_checkin",
]
