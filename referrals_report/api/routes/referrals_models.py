from __future__ import annotations

from pydantic import BaseModel, Field

# Token amounts and USD values are exact integers that overflow JSON doubles,
# so they travel as decimal strings.


class DistributionResponse(BaseModel):
    timestamp: int = Field(ge=0)
    transaction_hash: str
    receiver: str
    amount: str
    type_id: str
    token: str


class PeriodStatResponse(BaseModel):
    referral_code: str
    volume: str
    trades: int = Field(ge=0)
    traded_referrals_count: int = Field(ge=0)
    total_rebate_usd: str
    discount_usd: str


class CumulativeStatsResponse(BaseModel):
    rebates: str
    volume: str
    discount_usd: str
    trades: int = Field(ge=0)
    referrals_count: int = Field(ge=0)


class ReferralTotalStatsResponse(BaseModel):
    volume: str
    discount_usd: str


class ReferralsReportResponse(BaseModel):
    chain_id: int
    account: str
    rebate_distributions: list[DistributionResponse]
    discount_distributions: list[DistributionResponse]
    referrer_total_stats: list[PeriodStatResponse]
    referrer_last_day_stats: list[PeriodStatResponse]
    cumulative_stats: CumulativeStatsResponse
    codes: list[str]
    referral_total_stats: ReferralTotalStatsResponse
