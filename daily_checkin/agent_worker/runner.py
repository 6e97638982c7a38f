"""
Agent runner: one pass over all accounts, then summary and notification.

- run_checkin(): processes accounts sequentially in input order, one outcome each.
- execute(): wires chain + API clients from settings, runs, closes clients.
- main(): process entrypoint. Exit code is non-zero only for ConfigError at
  startup; per-account failures only show up in the summary.
"""

from __future__ import annotations

import asyncio
import sys
from contextlib import AsyncExitStack
from typing import Iterable

from daily_checkin.agent_worker.flow import AccountOutcome, CheckInFlow
from daily_checkin.agent_worker.report import RunReport
from daily_checkin.alerts.notifier import notifier_from_settings
from daily_checkin.chain.activity_gate import ActivityGate
from daily_checkin.chain.client import ChainClient
from daily_checkin.chain.submitter import TransactionSubmitter
from daily_checkin.checkin_logging import get_logger
from daily_checkin.config.env import mask_url
from daily_checkin.config.settings import CheckinSettings, get_settings
from daily_checkin.core.exceptions import ConfigError
from daily_checkin.rewards_api.auth import AuthSession
from daily_checkin.rewards_api.client import RewardsApiClient
from daily_checkin.wallets.keystore import Account, load_accounts

logger = get_logger(__name__)


async def run_checkin(accounts: Iterable[Account], flow: CheckInFlow) -> tuple[AccountOutcome, ...]:
    """Run the flow for each account, one at a time. Never raises for per-account failures."""
    return tuple([await flow.run(account) for account in accounts])


async def execute(settings: CheckinSettings, accounts: list[Account]) -> RunReport:
    """Build clients from settings, process all accounts, and return the folded report."""
    async with AsyncExitStack() as stack:
        chain = ChainClient(settings.solana_rpc_url, timeout_sec=settings.http_timeout_sec)
        stack.push_async_callback(chain.close)
        api = RewardsApiClient(settings.rewards_api_url, timeout_sec=settings.http_timeout_sec)
        stack.push_async_callback(api.close)
        flow = CheckInFlow(
            gate=ActivityGate(
                chain,
                quota=settings.daily_tx_quota,
                fetch_limit=settings.signature_fetch_limit,
            ),
            auth=AuthSession(api),
            api=api,
            submitter=TransactionSubmitter(
                chain,
                max_attempts=settings.tx_max_attempts,
                retry_interval_sec=settings.tx_retry_interval_sec,
            ),
        )
        outcomes = await run_checkin(accounts, flow)
    return RunReport.from_outcomes(outcomes)


async def publish(report: RunReport, settings: CheckinSettings) -> None:
    """Write the summary file and send the optional notification."""
    message = report.summary_message()
    logger.info(
        "run_summary",
        success=report.success,
        failed=report.failed,
        skipped=report.skipped,
        total=report.total,
        summary=message,
    )
    try:
        report.write_summary(settings.summary_path)
    except OSError as e:
        logger.error("summary_write_failed", path=str(settings.summary_path), error=str(e))

    notifier = notifier_from_settings(settings)
    if notifier is not None:
        await notifier.send(message)


def main() -> int:
    try:
        settings = get_settings()
        accounts = load_accounts(settings.private_keys_path)
    except ConfigError as e:
        logger.error("startup_config_error", error=e.message)
        return 1

    logger.info(
        "run_started",
        account_count=len(accounts),
        rpc_url=mask_url(settings.solana_rpc_url),
        rewards_api_url=settings.rewards_api_url,
    )

    async def _run() -> RunReport:
        report = await execute(settings, accounts)
        await publish(report, settings)
        return report

    asyncio.run(_run())
    return 0


if __name__ == "__main__":
    sys.exit(main())
