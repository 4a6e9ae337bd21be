#!/usr/bin/env python3
"""
figma-context-mcp 服务器

"""

import logging
from typing import Dict, Any, List, Literal, Optional, Union

import yaml
from fastmcp import FastMCP
from pydantic import BaseModel, Field

from .config import FigmaConfig, load_config
from .models import AssetRequest, ExportRequest, FillRequest
from .services import FigmaService
from .utils import handle_exception

# 配置日志
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# 创建MCP服务实例
mcp = FastMCP("figma-context-mcp")

_service: Optional[FigmaService] = None


def configure(config: FigmaConfig) -> FigmaService:
    """使用指定配置创建 Figma 服务实例"""
    global _service
    _service = FigmaService(config)
    return _service


def get_service() -> FigmaService:
    if _service is None:
        return configure(load_config())
    return _service


class ImageNode(BaseModel):
    """download_figma_images 的单个图像参数"""

    node_id: str = Field(description="Figma 节点ID，例如 1234:5678")
    file_name: str = Field(description="保存的本地文件名，例如 icon.svg")
    image_ref: Optional[str] = Field(
        default=None,
        description="图片填充的 imageRef。节点使用图片作为填充时必填，否则留空",
    )
    file_type: Literal["png", "svg"] = Field(
        default="png", description="渲染导出的格式，仅在没有 image_ref 时使用"
    )

    def to_request(self) -> AssetRequest:
        node_id = self.node_id.replace("-", ":")
        if self.image_ref:
            return FillRequest(node_id=node_id, file_name=self.file_name, image_ref=self.image_ref)
        return ExportRequest(node_id=node_id, file_name=self.file_name, file_type=self.file_type)


@mcp.tool
async def get_figma_data(
    file_key: str,
    node_id: Optional[str] = None,
    depth: Optional[int] = None,
) -> Union[str, Dict[str, Any]]:
    """
    获取 Figma 文件或指定节点的设计数据（精简后的 YAML）。

    **如何从Figma链接中提取参数:**
    例如，对于链接: `https://www.figma.com/design/d5VnH9TP69zb3EyDejwvKs/My-Design?node-id=1348-2218`
    - `file_key` 是 `d5VnH9TP69zb3EyDejwvKs` (位于 `design/` 或 `file/` 之后的部分)
    - `node_id` 是 `1348-2218` (位于 `?node-id=` 之后的部分)

    Args:
        file_key (str): Figma文件的唯一标识符。
        node_id (str, optional): 要获取的节点ID。未提供时获取整个文件。
        depth (int, optional): 节点树的遍历深度。除非用户明确要求，否则不要使用。

    Returns:
        精简后设计文档的 YAML 文本；失败时返回包含错误信息的字典。
    """
    try:
        service = get_service()
        if node_id:
            node_id = node_id.replace("-", ":")
            logger.info(f"正在获取节点 {node_id}，文件 {file_key}")
        else:
            logger.info(f"正在获取整个文件 {file_key}")

        document = await service.fetch_document(file_key, node_id, depth)
        logger.info(f"成功获取文件: {document.get('name')}")
        return yaml.safe_dump(document, allow_unicode=True, sort_keys=False)

    except Exception as e:
        return handle_exception(e, "获取Figma数据")


@mcp.tool
async def download_figma_images(
    file_key: str,
    nodes: List[ImageNode],
    local_path: str,
) -> Dict[str, Any]:
    """
    下载 Figma 文件中使用的 SVG / PNG 图像到本地目录。

    - 节点使用图片作为填充（fills 中 type 为 IMAGE）时，传入其 `image_ref`，从文件图片表下载原图。
    - 否则按 `file_type` 渲染导出节点本身（图标等矢量图用 svg）。
    找不到图像的节点会被跳过；任一图像下载失败时，其余下载仍会完成，最后返回错误信息。

    Args:
        file_key (str): Figma文件的唯一标识符。
        nodes (List[ImageNode]): 要下载的节点列表。
        local_path (str): 保存图像的本地目录绝对路径，不存在时自动创建。

    Returns:
        Dict[str, Any]: 包含 "success"、"downloaded_files"（本地文件路径列表）和
        "skipped_count"（没有找到图像的数量）的字典。
    """
    try:
        service = get_service()
        requests = [node.to_request() for node in nodes]
        paths = await service.download_images(file_key, requests, local_path)

        downloaded_files = [path for path in paths if path]
        logger.info(f"成功下载 {len(downloaded_files)} 个图像到 {local_path}")
        return {
            "success": True,
            "downloaded_files": downloaded_files,
            "skipped_count": len(requests) - len(downloaded_files),
        }

    except Exception as e:
        return handle_exception(e, "下载Figma图像")
