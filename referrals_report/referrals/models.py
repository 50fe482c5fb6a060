from __future__ import annotations

from dataclasses import dataclass

from .constants import DISTRIBUTION_TYPE_REBATES


@dataclass(frozen=True, slots=True)
class DistributionEvent:
    timestamp: int
    transaction_hash: str
    receiver: str
    amount: int
    type_id: str
    token: str

    @property
    def is_rebate(self) -> bool:
        return self.type_id == DISTRIBUTION_TYPE_REBATES


@dataclass(frozen=True, slots=True)
class PeriodStat:
    volume: int
    trades: int
    traded_referrals_count: int
    total_rebate_usd: int
    discount_usd: int
    referral_code: str


@dataclass(frozen=True, slots=True)
class CumulativeStats:
    rebates: int
    volume: int
    discount_usd: int
    trades: int
    referrals_count: int


EMPTY_CUMULATIVE_STATS = CumulativeStats(
    rebates=0,
    volume=0,
    discount_usd=0,
    trades=0,
    referrals_count=0,
)


@dataclass(frozen=True, slots=True)
class ReferralTotalStats:
    volume: int
    discount_usd: int


EMPTY_REFERRAL_TOTAL_STATS = ReferralTotalStats(volume=0, discount_usd=0)


@dataclass(frozen=True, slots=True)
class ReferralsReport:
    rebate_distributions: tuple[DistributionEvent, ...]
    discount_distributions: tuple[DistributionEvent, ...]
    referrer_total_stats: tuple[PeriodStat, ...]
    referrer_last_day_stats: tuple[PeriodStat, ...]
    cumulative_stats: CumulativeStats
    codes: tuple[str, ...]
    referral_total_stats: ReferralTotalStats
