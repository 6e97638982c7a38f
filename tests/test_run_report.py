"""
Tests for RunReport folding, summary file, and run publishing.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import base58
import pytest
from solders.keypair import Keypair

from daily_checkin.agent_worker import runner
from daily_checkin.agent_worker.flow import AccountOutcome, FlowState
from daily_checkin.agent_worker.report import RunReport
from daily_checkin.agent_worker.runner import execute, main, publish
from daily_checkin.config.settings import CheckinSettings

OUTCOMES = [
    AccountOutcome.succeeded("addr1", "sig1", "success"),
    AccountOutcome.failed("addr2", "Invalid signature", FlowState.GATE_CHECKED),
    AccountOutcome.skipped("addr3"),
    AccountOutcome.succeeded("addr4", "sig4"),
]


def test_fold_counts():
    report = RunReport.from_outcomes(OUTCOMES)
    assert report.success == 2
    assert report.failed == 1
    assert report.skipped == 1
    assert report.total == 4
    assert report.success + report.failed == report.total - report.skipped
    assert report.outcomes == tuple(OUTCOMES)


def test_add_returns_new_report():
    empty = RunReport()
    one = empty.add(OUTCOMES[0])
    assert empty.total == 0
    assert one.total == 1 and one.success == 1


def test_summary_message_format():
    report = RunReport.from_outcomes(OUTCOMES)
    assert report.summary_message() == "*Daily Login*\nSukses: 2 Akun\nGagal: 1 Akun\n"


def test_write_summary_overwrites(tmp_path):
    path = tmp_path / "summary_daily.json"
    path.write_text('{"stale": true, "more": "data that is longer than the new file"}', encoding="utf-8")
    at = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)
    RunReport.from_outcomes(OUTCOMES).write_summary(path, generated_at=at)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {
        "summaryMessage": "*Daily Login*\nSukses: 2 Akun\nGagal: 1 Akun\n",
        "success": 2,
        "failed": 1,
        "skipped": 1,
        "total": 4,
        "generated_at": "2026-10-19T08:00:00+00:00",
    }


def test_outcome_to_dict():
    assert OUTCOMES[1].to_dict() == {
        "address": "addr2",
        "status": "failed",
        "signature": None,
        "checkin_status": None,
        "error": "Invalid signature",
        "failed_at": "gate_checked",
    }


def test_publish_writes_summary_without_notifier(tmp_path):
    settings = CheckinSettings(summary_path=tmp_path / "out.json", telegram_bot_token="", telegram_chat_id="")
    asyncio.run(publish(RunReport.from_outcomes(OUTCOMES), settings))
    assert json.loads((tmp_path / "out.json").read_text(encoding="utf-8"))["success"] == 2


def test_publish_survives_unwritable_summary(tmp_path):
    settings = CheckinSettings(
        summary_path=tmp_path / "missing-dir" / "out.json",
        telegram_bot_token="",
        telegram_chat_id="",
    )
    asyncio.run(publish(RunReport.from_outcomes(OUTCOMES), settings))


def test_main_exits_nonzero_on_bad_key_file(tmp_path, monkeypatch):
    keys = tmp_path / "privateKeys.json"
    keys.write_text("[]", encoding="utf-8")
    monkeypatch.setenv("PRIVATE_KEYS_PATH", str(keys))
    assert main() == 1


def test_main_exits_nonzero_on_missing_key_file(tmp_path, monkeypatch):
    monkeypatch.setenv("PRIVATE_KEYS_PATH", str(tmp_path / "absent.json"))
    assert main() == 1


def test_main_exits_zero_when_accounts_fail(tmp_path, monkeypatch):
    """Per-account failures show up in the summary, not in the exit code."""
    kp = Keypair()
    keys = tmp_path / "privateKeys.json"
    keys.write_text(json.dumps([base58.b58encode(bytes(kp)).decode()]), encoding="utf-8")
    summary = tmp_path / "summary_daily.json"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PRIVATE_KEYS_PATH", str(keys))
    monkeypatch.setenv("SUMMARY_PATH", str(summary))
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "")
    monkeypatch.setenv("TELEGRAM_CHAT_ID", "")

    seen_accounts = []

    async def failing_execute(settings, accounts):
        seen_accounts.extend(accounts)
        return RunReport.from_outcomes(
            [AccountOutcome.failed(a.address, "Invalid signature", FlowState.GATE_CHECKED) for a in accounts]
        )

    monkeypatch.setattr(runner, "execute", failing_execute)

    assert main() == 0
    assert [a.address for a in seen_accounts] == [str(kp.pubkey())]
    data = json.loads(summary.read_text(encoding="utf-8"))
    assert (data["success"], data["failed"], data["total"]) == (0, 1, 1)
    assert data["summaryMessage"] == "*Daily Login*\nSukses: 0 Akun\nGagal: 1 Akun\n"


def test_execute_closes_chain_client_when_api_client_fails(monkeypatch):
    chain = AsyncMock()

    def broken_api(*args, **kwargs):
        raise RuntimeError("bad rewards api config")

    monkeypatch.setattr(runner, "ChainClient", lambda *args, **kwargs: chain)
    monkeypatch.setattr(runner, "RewardsApiClient", broken_api)
    settings = CheckinSettings(telegram_bot_token="", telegram_chat_id="")

    with pytest.raises(RuntimeError, match="bad rewards api config"):
        asyncio.run(execute(settings, []))
    chain.close.assert_awaited_once()


def test_execute_closes_both_clients(monkeypatch):
    chain, api = AsyncMock(), AsyncMock()
    monkeypatch.setattr(runner, "ChainClient", lambda *args, **kwargs: chain)
    monkeypatch.setattr(runner, "RewardsApiClient", lambda *args, **kwargs: api)
    settings = CheckinSettings(telegram_bot_token="", telegram_chat_id="")

    report = asyncio.run(execute(settings, []))
    assert report.total == 0
    chain.close.assert_awaited_once()
    api.close.assert_awaited_once()
