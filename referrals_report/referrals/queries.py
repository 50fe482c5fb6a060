from __future__ import annotations

import json
from datetime import datetime
from string import Template

from .constants import (
    DISTRIBUTION_TYPE_DISCOUNT,
    DISTRIBUTION_TYPE_REBATES,
    QUERY_PAGE_SIZE,
    SECONDS_PER_DAY,
)

_STATS_FIELDS = """referralCode
        volume
        trades
        tradedReferralsCount
        totalRebateUsd
        discountUsd"""

REFERRALS_REPORT_QUERY = Template(
    """{
      distributions(
        first: $first
        orderBy: timestamp
        orderDirection: desc
        where: {receiver: $account, typeId_in: [$rebates_type, $discount_type]}
      ) {
        receiver
        amount
        typeId
        token
        transactionHash
        timestamp
      }
      referrerTotalStats: referrerStats(
        first: $first
        where: {period: total, referrer: $account}
      ) {
        $stats_fields
      }
      referrerLastDayStats: referrerStats(
        first: $first
        where: {period: daily, referrer: $account, timestamp: $timestamp}
      ) {
        $stats_fields
      }
      referralCodes(first: $first, where: {owner: $account}) {
        code
      }
      referralTotalStats: referralStat(id: $referral_stat_id) {
        volume
        discountUsd
      }
    }"""
)


def start_of_utc_day(now_utc: datetime) -> int:
    return int(now_utc.timestamp()) // SECONDS_PER_DAY * SECONDS_PER_DAY


def _graphql_string(value: str) -> str:
    return json.dumps(value)


def build_referrals_report_query(*, account: str, day_start_timestamp: int) -> str:
    """Builds the single subgraph query backing a referrals report.

    `account` must already be lower-cased; the subgraph stores addresses that way
    and filters match exactly.
    """
    return REFERRALS_REPORT_QUERY.substitute(
        first=QUERY_PAGE_SIZE,
        account=_graphql_string(account),
        rebates_type=_graphql_string(DISTRIBUTION_TYPE_REBATES),
        discount_type=_graphql_string(DISTRIBUTION_TYPE_DISCOUNT),
        timestamp=int(day_start_timestamp),
        referral_stat_id=_graphql_string(f"total:0:{account}"),
        stats_fields=_STATS_FIELDS,
    )


SUBGRAPH_META_QUERY = "{ _meta { block { number } } }"
