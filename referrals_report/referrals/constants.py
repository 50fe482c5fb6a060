from __future__ import annotations

DISTRIBUTION_TYPE_REBATES = "1"
DISTRIBUTION_TYPE_DISCOUNT = "2"

ENCODED_CODE_SIZE = 32
MAX_REFERRAL_CODE_LENGTH = ENCODED_CODE_SIZE - 1

SECONDS_PER_DAY = 86400
QUERY_PAGE_SIZE = 1000
