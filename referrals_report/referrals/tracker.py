from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import structlog

from .errors import ReferralsReportError
from .models import ReferralsReport
from .report import ReferralsReportAssembler

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ReportRequestKey:
    chain_id: int
    account: str


def _request_key(chain_id: int, account: str | None) -> ReportRequestKey:
    return ReportRequestKey(chain_id=chain_id, account=(account or "").lower())


class ReferralsReportTracker:
    """Holds the latest report for the currently selected chain and account.

    Every refresh is tagged with a generation number and the parameters it was
    issued for. A response is applied only when it belongs to the newest refresh
    and the selection has not moved on since; anything else is dropped.
    """

    def __init__(self, assembler: ReferralsReportAssembler) -> None:
        self._assembler = assembler
        self._generation = 0
        self._current_key: ReportRequestKey | None = None
        self._applied_key: ReportRequestKey | None = None
        self._applied_report: ReferralsReport | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current_key(self) -> ReportRequestKey | None:
        return self._current_key

    @property
    def report(self) -> ReferralsReport | None:
        if self._applied_key is None or self._applied_key != self._current_key:
            return None
        return self._applied_report

    def select(self, chain_id: int, account: str | None) -> ReportRequestKey:
        self._current_key = _request_key(chain_id, account)
        return self._current_key

    async def refresh(
        self,
        chain_id: int,
        account: str | None,
        *,
        now_utc: datetime | None = None,
    ) -> ReferralsReport | None:
        key = self.select(chain_id, account)
        self._generation += 1
        generation = self._generation

        try:
            report = await self._assembler.fetch_report(chain_id, account, now_utc=now_utc)
        except ReferralsReportError as exc:
            logger.warning(
                "referrals_report_refresh_failed",
                chain_id=key.chain_id,
                account=key.account,
                generation=generation,
                error_type=type(exc).__name__,
            )
            raise

        if generation != self._generation or key != self._current_key:
            logger.info(
                "referrals_report_stale_discarded",
                chain_id=key.chain_id,
                account=key.account,
                generation=generation,
                latest_generation=self._generation,
            )
            return None

        self._applied_key = key
        self._applied_report = report
        return report
