from __future__ import annotations

from functools import lru_cache

import structlog
from fastapi import APIRouter, HTTPException

from referrals_report.referrals import (
    CumulativeStats,
    DistributionEvent,
    PeriodStat,
    ReferralsReport,
    ReferralsReportAssembler,
    RetrievalError,
    UnsupportedChainError,
)
from referrals_report.services.subgraph_client import get_subgraph_clients

from .referrals_models import (
    CumulativeStatsResponse,
    DistributionResponse,
    PeriodStatResponse,
    ReferralsReportResponse,
    ReferralTotalStatsResponse,
)

router = APIRouter(tags=["referrals"])
logger = structlog.get_logger(__name__)


@lru_cache(maxsize=1)
def get_report_assembler() -> ReferralsReportAssembler:
    return ReferralsReportAssembler(get_subgraph_clients())


def _as_distribution(event: DistributionEvent) -> DistributionResponse:
    return DistributionResponse(
        timestamp=event.timestamp,
        transaction_hash=event.transaction_hash,
        receiver=event.receiver,
        amount=str(event.amount),
        type_id=event.type_id,
        token=event.token,
    )


def _as_period_stat(stat: PeriodStat) -> PeriodStatResponse:
    return PeriodStatResponse(
        referral_code=stat.referral_code,
        volume=str(stat.volume),
        trades=stat.trades,
        traded_referrals_count=stat.traded_referrals_count,
        total_rebate_usd=str(stat.total_rebate_usd),
        discount_usd=str(stat.discount_usd),
    )


def _as_cumulative_stats(stats: CumulativeStats) -> CumulativeStatsResponse:
    return CumulativeStatsResponse(
        rebates=str(stats.rebates),
        volume=str(stats.volume),
        discount_usd=str(stats.discount_usd),
        trades=stats.trades,
        referrals_count=stats.referrals_count,
    )


def _as_report_response(*, chain_id: int, account: str, report: ReferralsReport) -> ReferralsReportResponse:
    return ReferralsReportResponse(
        chain_id=chain_id,
        account=account,
        rebate_distributions=[_as_distribution(event) for event in report.rebate_distributions],
        discount_distributions=[_as_distribution(event) for event in report.discount_distributions],
        referrer_total_stats=[_as_period_stat(stat) for stat in report.referrer_total_stats],
        referrer_last_day_stats=[_as_period_stat(stat) for stat in report.referrer_last_day_stats],
        cumulative_stats=_as_cumulative_stats(report.cumulative_stats),
        codes=list(report.codes),
        referral_total_stats=ReferralTotalStatsResponse(
            volume=str(report.referral_total_stats.volume),
            discount_usd=str(report.referral_total_stats.discount_usd),
        ),
    )


@router.get("/referrals/{chain_id}/{account}", response_model=ReferralsReportResponse)
async def get_referrals_report(chain_id: int, account: str) -> ReferralsReportResponse:
    assembler = get_report_assembler()
    try:
        report = await assembler.fetch_report(chain_id, account)
    except UnsupportedChainError:
        logger.info("referrals_report_unsupported_chain", chain_id=chain_id)
        raise HTTPException(status_code=404, detail={"code": "E_UNSUPPORTED_CHAIN"})
    except RetrievalError:
        raise HTTPException(status_code=502, detail={"code": "E_RETRIEVAL_FAILED"})

    return _as_report_response(chain_id=chain_id, account=account.lower(), report=report)
