from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

import structlog
from eth_utils import to_checksum_address

from referrals_report.core.chains import chain_name

from .aggregation import aggregate_period_stats
from .codes import decode_referral_code
from .errors import RetrievalError, UnsupportedChainError
from .models import DistributionEvent, ReferralsReport
from .queries import build_referrals_report_query, start_of_utc_day
from .stats import normalize_period_stat, normalize_referral_total_stats, parse_exact_int

logger = structlog.get_logger(__name__)


class QueryExecutor(Protocol):
    async def query(self, query: str) -> dict[str, Any]: ...


def partition_distributions(
    events: Iterable[DistributionEvent],
) -> tuple[tuple[DistributionEvent, ...], tuple[DistributionEvent, ...]]:
    """Splits events into (rebates, discounts), keeping upstream order in each.

    Anything that is not a rebate lands in discounts, unknown type ids included.
    """
    rebates: list[DistributionEvent] = []
    discounts: list[DistributionEvent] = []
    for event in events:
        if event.is_rebate:
            rebates.append(event)
        else:
            discounts.append(event)
    return tuple(rebates), tuple(discounts)


class ReferralsReportAssembler:
    def __init__(
        self,
        clients: Mapping[int, QueryExecutor],
        *,
        checksum_address: Callable[[str], str] = to_checksum_address,
    ) -> None:
        self._clients = dict(clients)
        self._checksum_address = checksum_address

    @property
    def supported_chain_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self._clients))

    def _client_for(self, chain_id: int) -> QueryExecutor:
        client = self._clients.get(chain_id)
        if client is None:
            raise UnsupportedChainError(chain_id)
        return client

    async def fetch_report(
        self,
        chain_id: int,
        account: str | None,
        *,
        now_utc: datetime | None = None,
    ) -> ReferralsReport:
        client = self._client_for(chain_id)
        account_filter = (account or "").lower()
        day_start = start_of_utc_day(now_utc or datetime.now(timezone.utc))
        query = build_referrals_report_query(account=account_filter, day_start_timestamp=day_start)

        try:
            data = await client.query(query)
        except RetrievalError:
            logger.warning(
                "referrals_report_fetch_failed",
                chain=chain_name(chain_id),
                account=account_filter,
            )
            raise
        except Exception as exc:
            logger.warning(
                "referrals_report_fetch_failed",
                chain=chain_name(chain_id),
                account=account_filter,
                error_type=type(exc).__name__,
            )
            raise RetrievalError(f"subgraph query failed: {exc}", chain_id=chain_id) from exc

        try:
            report = self._assemble(data)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "referrals_report_payload_invalid",
                chain=chain_name(chain_id),
                account=account_filter,
                error_type=type(exc).__name__,
            )
            raise RetrievalError(f"malformed referrals payload: {exc!r}", chain_id=chain_id) from exc

        logger.info(
            "referrals_report_assembled",
            chain=chain_name(chain_id),
            account=account_filter,
            day_start=day_start,
            rebate_distributions=len(report.rebate_distributions),
            discount_distributions=len(report.discount_distributions),
            codes=len(report.codes),
        )
        return report

    def _normalize_distribution(self, raw: Mapping[str, Any]) -> DistributionEvent:
        return DistributionEvent(
            timestamp=parse_exact_int(raw["timestamp"]),
            transaction_hash=str(raw["transactionHash"]),
            receiver=self._checksum_address(raw["receiver"]),
            amount=parse_exact_int(raw["amount"]),
            type_id=str(raw["typeId"]),
            token=self._checksum_address(raw["token"]),
        )

    def _assemble(self, data: Mapping[str, Any]) -> ReferralsReport:
        rebates, discounts = partition_distributions(
            self._normalize_distribution(item) for item in data["distributions"]
        )
        total_stats = tuple(normalize_period_stat(item) for item in data["referrerTotalStats"])
        last_day_stats = tuple(normalize_period_stat(item) for item in data["referrerLastDayStats"])
        return ReferralsReport(
            rebate_distributions=rebates,
            discount_distributions=discounts,
            referrer_total_stats=total_stats,
            referrer_last_day_stats=last_day_stats,
            cumulative_stats=aggregate_period_stats(total_stats),
            codes=tuple(decode_referral_code(item["code"]) for item in data["referralCodes"]),
            referral_total_stats=normalize_referral_total_stats(data.get("referralTotalStats")),
        )
