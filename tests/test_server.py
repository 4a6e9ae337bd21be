#!/usr/bin/env python3
"""
MCP 工具测试，直接调用工具函数，不启动服务器
"""

import httpx
import pytest
import yaml
from respx import MockRouter

from conftest import RecordingDownloader
from figma_context_mcp import server
from figma_context_mcp.config import FigmaConfig
from figma_context_mcp.models import ExportRequest, FillRequest
from figma_context_mcp.services import FigmaService


@pytest.fixture
def tool_service(config: FigmaConfig, downloader: RecordingDownloader, monkeypatch) -> FigmaService:
    service = FigmaService(config, downloader=downloader)
    monkeypatch.setattr(server, "_service", service)
    return service


def test_image_node_to_request():
    fill = server.ImageNode(node_id="1-2", file_name="hero.jpg", image_ref="ref-a")
    export = server.ImageNode(node_id="3:4", file_name="logo.svg", file_type="svg")

    assert fill.to_request() == FillRequest(node_id="1:2", file_name="hero.jpg", image_ref="ref-a")
    assert export.to_request() == ExportRequest(node_id="3:4", file_name="logo.svg", file_type="svg")


@pytest.mark.asyncio
async def test_get_figma_data_returns_yaml(tool_service, respx_mock: MockRouter):
    route = respx_mock.get(host="api.figma.com", path="/v1/files/abc123/nodes").mock(
        return_value=httpx.Response(
            200,
            json={"name": "Landing", "nodes": {"1:2": {"document": {"id": "1:2", "name": "Card", "type": "FRAME"}}}},
        )
    )

    result = await server.get_figma_data.fn(file_key="abc123", node_id="1-2")

    assert route.calls.last.request.url.params["ids"] == "1:2"
    document = yaml.safe_load(result)
    assert document["name"] == "Landing"
    assert document["nodes"][0]["name"] == "Card"


@pytest.mark.asyncio
async def test_get_figma_data_reports_errors(tool_service, respx_mock: MockRouter):
    respx_mock.get(host="api.figma.com", path="/v1/files/abc123").mock(
        return_value=httpx.Response(404)
    )

    result = await server.get_figma_data.fn(file_key="abc123")

    assert result["success"] is False
    assert result["status_code"] == 404


@pytest.mark.asyncio
async def test_download_figma_images_summary(tool_service, downloader, respx_mock: MockRouter):
    respx_mock.get(host="api.figma.com", path="/v1/images/abc123").mock(
        return_value=httpx.Response(200, json={"images": {"1:1": "https://cdn/icon.svg"}})
    )
    nodes = [
        server.ImageNode(node_id="1:1", file_name="icon.svg", file_type="svg"),
        server.ImageNode(node_id="1:9", file_name="gone.svg", file_type="svg"),
    ]

    result = await server.download_figma_images.fn(file_key="abc123", nodes=nodes, local_path="/out")

    assert result == {"success": True, "downloaded_files": ["/out/icon.svg"], "skipped_count": 1}


@pytest.mark.asyncio
async def test_download_figma_images_reports_download_failure(
    config: FigmaConfig, respx_mock: MockRouter, monkeypatch
):
    service = FigmaService(config, downloader=RecordingDownloader(fail_on=("icon.svg",)))
    monkeypatch.setattr(server, "_service", service)
    respx_mock.get(host="api.figma.com", path="/v1/images/abc123").mock(
        return_value=httpx.Response(200, json={"images": {"1:1": "https://cdn/icon.svg"}})
    )
    nodes = [server.ImageNode(node_id="1:1", file_name="icon.svg", file_type="svg")]

    result = await server.download_figma_images.fn(file_key="abc123", nodes=nodes, local_path="/out")

    assert result["success"] is False
    assert "icon.svg" in result["error"]
