"""MCP server exposing asset URL resolution tools."""

from __future__ import annotations

import logging
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from .config import ResolverConfig
from .service import AssetUrlService

logger = logging.getLogger("asset_resolver.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="asset-resolver")

_service: Optional[AssetUrlService] = None


def get_service() -> AssetUrlService:
    """Build the service from the environment on first use."""
    global _service
    if _service is None:
        _service = AssetUrlService(ResolverConfig.from_env())
    return _service


@mcp.tool()
async def resolve_image(reference: str = "", fallback: Optional[str] = None) -> str:
    """Resolve a stored image reference (path, filename or URL) to a fetchable URL."""
    return get_service().resolve(reference, fallback)


@mcp.tool()
async def check_image(reference: str) -> dict:
    """Resolve a reference and report whether the image can be fetched."""
    service = get_service()
    result = await service.prober.check(service.resolve(reference))
    return {
        "url": result.url,
        "reachable": result.reachable,
        "outcome": result.outcome.value,
        "status_code": result.status_code,
    }


@mcp.tool()
async def select_best_image(
    candidates: List[str],
    fallback: Optional[str] = None,
) -> str:
    """Return the first reachable candidate in the given order, else the fallback."""
    return await get_service().select_best(candidates, fallback)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
