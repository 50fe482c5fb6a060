from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from referrals_report.core.chains import chain_name
from referrals_report.services.subgraph_client import SubgraphClient, get_subgraph_clients

router = APIRouter(tags=["health"])


def _ok_check(extra: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"status": "ok"}
    if extra:
        payload.update(extra)
    return payload


def _failed_check(error: str) -> dict[str, str]:
    return {"status": "failed", "error": error}


async def _check_subgraph(client: SubgraphClient) -> dict[str, Any]:
    try:
        block_number = await client.ping()
        return _ok_check({"block": block_number})
    except Exception:
        return _failed_check("subgraph_unavailable")


async def _collect_checks() -> dict[str, dict[str, Any]]:
    clients = get_subgraph_clients()
    chain_ids = sorted(clients)
    checks = await asyncio.gather(*(_check_subgraph(clients[chain_id]) for chain_id in chain_ids))
    return {chain_name(chain_id): check for chain_id, check in zip(chain_ids, checks)}


def _all_checks_ok(checks: dict[str, dict[str, Any]]) -> bool:
    return all(check.get("status") == "ok" for check in checks.values())


@router.get("/live")
async def live() -> dict[str, str]:
    return {"status": "live"}


@router.get("/health")
async def health() -> JSONResponse:
    checks = await _collect_checks()
    is_healthy = _all_checks_ok(checks)
    return JSONResponse(
        status_code=status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if is_healthy else "degraded",
            "checks": checks,
        },
    )
