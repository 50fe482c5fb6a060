from __future__ import annotations

from collections.abc import Iterable
from functools import reduce

from .models import EMPTY_CUMULATIVE_STATS, CumulativeStats, PeriodStat


def _add_period_stat(acc: CumulativeStats, stat: PeriodStat) -> CumulativeStats:
    return CumulativeStats(
        rebates=acc.rebates + stat.total_rebate_usd,
        volume=acc.volume + stat.volume,
        discount_usd=acc.discount_usd + stat.discount_usd,
        trades=acc.trades + stat.trades,
        referrals_count=acc.referrals_count + stat.traded_referrals_count,
    )


def aggregate_period_stats(stats: Iterable[PeriodStat]) -> CumulativeStats:
    return reduce(_add_period_stat, stats, EMPTY_CUMULATIVE_STATS)


def combine_cumulative_stats(left: CumulativeStats, right: CumulativeStats) -> CumulativeStats:
    return CumulativeStats(
        rebates=left.rebates + right.rebates,
        volume=left.volume + right.volume,
        discount_usd=left.discount_usd + right.discount_usd,
        trades=left.trades + right.trades,
        referrals_count=left.referrals_count + right.referrals_count,
    )
