from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .codes import decode_referral_code
from .models import EMPTY_REFERRAL_TOTAL_STATS, PeriodStat, ReferralTotalStats


def parse_exact_int(value: Any) -> int:
    """Parses base-10 integer text without going through float."""
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer amount")
    if isinstance(value, int):
        return value
    return int(str(value).strip(), 10)


def normalize_period_stat(raw: Mapping[str, Any]) -> PeriodStat:
    return PeriodStat(
        volume=parse_exact_int(raw["volume"]),
        trades=parse_exact_int(raw["trades"]),
        traded_referrals_count=parse_exact_int(raw["tradedReferralsCount"]),
        total_rebate_usd=parse_exact_int(raw["totalRebateUsd"]),
        discount_usd=parse_exact_int(raw["discountUsd"]),
        referral_code=decode_referral_code(raw["referralCode"]),
    )


def normalize_referral_total_stats(raw: Mapping[str, Any] | None) -> ReferralTotalStats:
    if raw is None:
        return EMPTY_REFERRAL_TOTAL_STATS
    return ReferralTotalStats(
        volume=parse_exact_int(raw["volume"]),
        discount_usd=parse_exact_int(raw["discountUsd"]),
    )
