from __future__ import annotations

from referrals_report.referrals.aggregation import aggregate_period_stats, combine_cumulative_stats
from referrals_report.referrals.models import EMPTY_CUMULATIVE_STATS, CumulativeStats, PeriodStat


def _stat(
    *,
    volume: int = 0,
    trades: int = 0,
    referrals: int = 0,
    rebate: int = 0,
    discount: int = 0,
    code: str = "REF",
) -> PeriodStat:
    return PeriodStat(
        volume=volume,
        trades=trades,
        traded_referrals_count=referrals,
        total_rebate_usd=rebate,
        discount_usd=discount,
        referral_code=code,
    )


def test_aggregate_empty_returns_identity() -> None:
    assert aggregate_period_stats([]) == EMPTY_CUMULATIVE_STATS
    assert EMPTY_CUMULATIVE_STATS == CumulativeStats(
        rebates=0,
        volume=0,
        discount_usd=0,
        trades=0,
        referrals_count=0,
    )


def test_aggregate_sums_every_field() -> None:
    totals = aggregate_period_stats(
        [
            _stat(volume=100, trades=1, referrals=2, rebate=10, discount=3),
            _stat(volume=200, trades=4, referrals=5, rebate=20, discount=6, code="OTHER"),
        ]
    )

    assert totals == CumulativeStats(
        rebates=30,
        volume=300,
        discount_usd=9,
        trades=5,
        referrals_count=7,
    )


def test_aggregate_is_exact_beyond_float_safe_integers() -> None:
    big = 2**53 + 1
    totals = aggregate_period_stats([_stat(volume=big, rebate=10**30), _stat(volume=big, rebate=1)])

    assert totals.volume == 2 * big
    assert totals.rebates == 10**30 + 1


def test_aggregate_ignores_input_order() -> None:
    stats = [_stat(volume=value, trades=value % 7, rebate=value * 3) for value in (5, 11, 2, 40)]
    assert aggregate_period_stats(stats) == aggregate_period_stats(list(reversed(stats)))


def test_aggregate_of_concatenation_equals_combined_parts() -> None:
    left = [_stat(volume=1, trades=2, referrals=3, rebate=4, discount=5)]
    right = [
        _stat(volume=10, trades=20, referrals=30, rebate=40, discount=50),
        _stat(volume=100, trades=200, referrals=300, rebate=400, discount=500),
    ]

    assert aggregate_period_stats(left + right) == combine_cumulative_stats(
        aggregate_period_stats(left),
        aggregate_period_stats(right),
    )


def test_combine_with_identity_is_noop() -> None:
    totals = aggregate_period_stats([_stat(volume=9, trades=1)])
    assert combine_cumulative_stats(totals, EMPTY_CUMULATIVE_STATS) == totals
    assert combine_cumulative_stats(EMPTY_CUMULATIVE_STATS, totals) == totals
