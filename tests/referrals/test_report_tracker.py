from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from referrals_report.core.chains import ARBITRUM, AVALANCHE
from referrals_report.referrals.errors import RetrievalError
from referrals_report.referrals.models import (
    EMPTY_CUMULATIVE_STATS,
    EMPTY_REFERRAL_TOTAL_STATS,
    ReferralsReport,
)
from referrals_report.referrals.tracker import ReferralsReportTracker, ReportRequestKey


def _report(label: str) -> ReferralsReport:
    return ReferralsReport(
        rebate_distributions=(),
        discount_distributions=(),
        referrer_total_stats=(),
        referrer_last_day_stats=(),
        cumulative_stats=EMPTY_CUMULATIVE_STATS,
        codes=(label,),
        referral_total_stats=EMPTY_REFERRAL_TOTAL_STATS,
    )


class _ScriptedAssembler:
    """Answers calls in order; a step with a gate waits until the test opens it."""

    def __init__(self, steps: list[tuple[asyncio.Event | None, ReferralsReport | Exception]]) -> None:
        self._steps = list(steps)
        self.calls: list[tuple[int, str | None]] = []

    async def fetch_report(
        self,
        chain_id: int,
        account: str | None,
        *,
        now_utc: datetime | None = None,
    ) -> ReferralsReport:
        del now_utc
        self.calls.append((chain_id, account))
        gate, result = self._steps.pop(0)
        if gate is not None:
            await gate.wait()
        if isinstance(result, Exception):
            raise result
        return result


@pytest.mark.asyncio
async def test_refresh_applies_report_for_current_selection() -> None:
    report = _report("A")
    tracker = ReferralsReportTracker(_ScriptedAssembler([(None, report)]))

    applied = await tracker.refresh(ARBITRUM, "0xABC")

    assert applied is report
    assert tracker.report is report
    assert tracker.current_key == ReportRequestKey(chain_id=ARBITRUM, account="0xabc")
    assert tracker.generation == 1


@pytest.mark.asyncio
async def test_late_response_for_old_account_is_discarded() -> None:
    gate = asyncio.Event()
    old_report, new_report = _report("old"), _report("new")
    tracker = ReferralsReportTracker(_ScriptedAssembler([(gate, old_report), (None, new_report)]))

    first = asyncio.create_task(tracker.refresh(ARBITRUM, "0xaaa"))
    await asyncio.sleep(0)
    second = await tracker.refresh(ARBITRUM, "0xbbb")
    gate.set()
    first_result = await first

    assert second is new_report
    assert first_result is None
    assert tracker.report is new_report


@pytest.mark.asyncio
async def test_older_overlapping_request_for_same_account_is_discarded() -> None:
    gate = asyncio.Event()
    older, newer = _report("older"), _report("newer")
    tracker = ReferralsReportTracker(_ScriptedAssembler([(gate, older), (None, newer)]))

    first = asyncio.create_task(tracker.refresh(ARBITRUM, "0xaaa"))
    await asyncio.sleep(0)
    await tracker.refresh(ARBITRUM, "0xaaa")
    gate.set()

    assert await first is None
    assert tracker.report is newer


@pytest.mark.asyncio
async def test_response_is_discarded_when_selection_changes_mid_flight() -> None:
    gate = asyncio.Event()
    tracker = ReferralsReportTracker(_ScriptedAssembler([(gate, _report("A"))]))

    pending = asyncio.create_task(tracker.refresh(ARBITRUM, "0xaaa"))
    await asyncio.sleep(0)
    tracker.select(AVALANCHE, "0xaaa")
    gate.set()

    assert await pending is None
    assert tracker.report is None


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_report_and_reraises() -> None:
    report = _report("A")
    failure = RetrievalError("subgraph down", chain_id=ARBITRUM)
    tracker = ReferralsReportTracker(_ScriptedAssembler([(None, report), (None, failure)]))

    await tracker.refresh(ARBITRUM, "0xaaa")
    with pytest.raises(RetrievalError):
        await tracker.refresh(ARBITRUM, "0xaaa")

    assert tracker.report is report


@pytest.mark.asyncio
async def test_report_is_hidden_while_another_selection_is_active() -> None:
    report = _report("A")
    tracker = ReferralsReportTracker(_ScriptedAssembler([(None, report)]))
    await tracker.refresh(ARBITRUM, "0xaaa")

    tracker.select(ARBITRUM, "0xbbb")
    assert tracker.report is None

    tracker.select(ARBITRUM, "0xAAA")
    assert tracker.report is report
