import pytest

from asset_resolver import mcp_server
from asset_resolver.config import ResolverConfig
from asset_resolver.service import AssetUrlService


@pytest.fixture
def service(monkeypatch, make_prober):
    prober = make_prober(reachable={"http://localhost:8000/uploads/b.jpg"})
    svc = AssetUrlService(ResolverConfig(), prober=prober)
    monkeypatch.setattr(mcp_server, "_service", svc)
    return svc


@pytest.mark.asyncio
async def test_resolve_image_tool(service):
    assert await mcp_server.resolve_image("photo.jpg") == (
        "http://localhost:8000/uploads/photo.jpg"
    )


@pytest.mark.asyncio
async def test_check_image_tool(service):
    payload = await mcp_server.check_image("b.jpg")
    assert payload == {
        "url": "http://localhost:8000/uploads/b.jpg",
        "reachable": True,
        "outcome": "ok",
        "status_code": 200,
    }


@pytest.mark.asyncio
async def test_select_best_image_tool(service):
    assert await mcp_server.select_best_image(["a.jpg", "b.jpg"]) == (
        "http://localhost:8000/uploads/b.jpg"
    )
