from __future__ import annotations

ARBITRUM = 42161
AVALANCHE = 43114

CHAIN_NAMES = {
    ARBITRUM: "arbitrum",
    AVALANCHE: "avalanche",
}

# Avalanche has no referrals subgraph deployed; configure one explicitly to enable it.
DEFAULT_REFERRALS_SUBGRAPH_URLS = {
    ARBITRUM: "https://api.thegraph.com/subgraphs/name/gmx-io/gmx-arbitrum-referrals",
}


def chain_name(chain_id: int) -> str:
    return CHAIN_NAMES.get(chain_id, str(chain_id))
