from __future__ import annotations

from .aggregation import aggregate_period_stats, combine_cumulative_stats
from .codes import decode_referral_code, encode_referral_code, encode_referral_code_hex
from .constants import DISTRIBUTION_TYPE_DISCOUNT, DISTRIBUTION_TYPE_REBATES
from .errors import CodeTooLongError, ReferralsReportError, RetrievalError, UnsupportedChainError
from .models import (
    EMPTY_CUMULATIVE_STATS,
    EMPTY_REFERRAL_TOTAL_STATS,
    CumulativeStats,
    DistributionEvent,
    PeriodStat,
    ReferralsReport,
    ReferralTotalStats,
)
from .report import QueryExecutor, ReferralsReportAssembler, partition_distributions
from .stats import normalize_period_stat, normalize_referral_total_stats
from .tracker import ReferralsReportTracker, ReportRequestKey

__all__ = [
    "DISTRIBUTION_TYPE_DISCOUNT",
    "DISTRIBUTION_TYPE_REBATES",
    "EMPTY_CUMULATIVE_STATS",
    "EMPTY_REFERRAL_TOTAL_STATS",
    "CodeTooLongError",
    "CumulativeStats",
    "DistributionEvent",
    "PeriodStat",
    "QueryExecutor",
    "ReferralTotalStats",
    "ReferralsReport",
    "ReferralsReportAssembler",
    "ReferralsReportError",
    "ReferralsReportTracker",
    "ReportRequestKey",
    "RetrievalError",
    "UnsupportedChainError",
    "aggregate_period_stats",
    "combine_cumulative_stats",
    "decode_referral_code",
    "encode_referral_code",
    "encode_referral_code_hex",
    "normalize_period_stat",
    "normalize_referral_total_stats",
    "partition_distributions",
]
