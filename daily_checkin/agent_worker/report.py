"""
Run report: fold per-account outcomes into counts and render the summary.

Skipped accounts count towards neither successes nor failures.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import reduce
from pathlib import Path
from typing import Any, Iterable

from daily_checkin.agent_worker.flow import AccountOutcome, OutcomeStatus

SUMMARY_TITLE = "*Daily Login*"


@dataclass(frozen=True)
class RunReport:
    outcomes: tuple[AccountOutcome, ...] = ()
    success: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def add(self, outcome: AccountOutcome) -> "RunReport":
        """Return a new report with one more outcome."""
        return RunReport(
            outcomes=self.outcomes + (outcome,),
            success=self.success + (outcome.status is OutcomeStatus.SUCCESS),
            failed=self.failed + (outcome.status is OutcomeStatus.FAILED),
            skipped=self.skipped + (outcome.status is OutcomeStatus.SKIPPED),
        )

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[AccountOutcome]) -> "RunReport":
        return reduce(RunReport.add, outcomes, cls())

    def summary_message(self) -> str:
        return f"{SUMMARY_TITLE}\nSukses: {self.success} Akun\nGagal: {self.failed} Akun\n"

    def to_dict(self, generated_at: datetime | None = None) -> dict[str, Any]:
        generated_at = generated_at or datetime.now(timezone.utc)
        return {
            "summaryMessage": self.summary_message(),
            "success": self.success,
            "failed": self.failed,
            "skipped": self.skipped,
            "total": self.total,
            "generated_at": generated_at.isoformat(),
        }

    def write_summary(self, path: str | Path, generated_at: datetime | None = None) -> Path:
        """Write the summary JSON, replacing any previous run's file."""
        path = Path(path)
        path.write_text(json.dumps(self.to_dict(generated_at), ensure_ascii=False), encoding="utf-8")
        return path
