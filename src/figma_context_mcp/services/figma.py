#!/usr/bin/env python3
"""
Figma 服务模块

封装 Figma REST API 的访问：
- request: 带认证头的单次 GET 请求，统一错误分类
- get_file / get_node: 获取设计文档并交给简化器处理
- get_images: 批量渲染导出节点图像（png / svg 各一次请求）
- get_image_fills: 通过文件图片填充表解析图片引用
"""

import asyncio
import logging
import ssl
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Union

import httpx

from ..config import FigmaConfig
from ..models import AssetRequest, ExportRequest, FillRequest
from ..utils.debug_logs import write_logs
from ..utils.exceptions import (
    FigmaAPIError,
    FigmaNoResponseError,
    FigmaRequestError,
    api_error_from_response,
)
from ..utils.image_export import download_figma_image
from .simplify import parse_figma_response

logger = logging.getLogger(__name__)

# 渲染导出时固定使用 2 倍图
EXPORT_SCALE = 2

Simplifier = Callable[[Dict[str, Any]], Dict[str, Any]]
Downloader = Callable[[str, Union[str, Path], str], Awaitable[str]]


def _build_verify(ca_bundle: Optional[str]) -> Union[bool, ssl.SSLContext]:
    if not ca_bundle:
        return True
    context = ssl.create_default_context()
    try:
        context.load_verify_locations(cafile=ca_bundle)
        logger.info(f"已加载 CA 证书包: {ca_bundle}")
    except (OSError, ssl.SSLError) as e:
        logger.error(f"读取 CA 证书包失败 {ca_bundle}: {e}，将使用默认证书")
    return context


class FigmaService:
    """Figma REST API 客户端"""

    def __init__(
        self,
        config: FigmaConfig,
        simplifier: Simplifier = parse_figma_response,
        downloader: Downloader = download_figma_image,
    ):
        self._config = config
        self._simplifier = simplifier
        self._downloader = downloader
        self._verify = _build_verify(config.ca_bundle)

    async def request(self, endpoint: str) -> Dict[str, Any]:
        """
        向 Figma API 发送一次 GET 请求

        Args:
            endpoint: 以 / 开头的资源路径，可包含查询参数

        Returns:
            解析后的 JSON 响应体

        Raises:
            FigmaAPIError: 服务端返回非 2xx 状态码
            FigmaNoResponseError: 请求已发出但没有收到响应
            FigmaRequestError: 请求无法发出
        """
        url = f"{self._config.base_url}{endpoint}"
        logger.info(f"Calling {url}")

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout, verify=self._verify
            ) as client:
                response = await client.get(
                    url,
                    headers={
                        "X-Figma-Token": self._config.api_key,
                        "Accept-Encoding": "gzip, deflate",
                    },
                )
        except (
            httpx.InvalidURL,
            httpx.UnsupportedProtocol,
            httpx.LocalProtocolError,
        ) as e:
            logger.error(f"Figma API 请求构造失败: {e}")
            raise FigmaRequestError(str(e)) from e
        except (
            httpx.TimeoutException,
            httpx.NetworkError,
            httpx.RemoteProtocolError,
            httpx.ProxyError,
        ) as e:
            logger.error(f"Figma API 未响应: {e}")
            raise FigmaNoResponseError(str(e)) from e
        except (httpx.HTTPError, ValueError, TypeError) as e:
            # 其余无法归类的错误统一视为请求构造失败
            logger.error(f"Figma API 请求失败: {e}")
            raise FigmaRequestError(str(e)) from e

        if not response.is_success:
            error = api_error_from_response(response)
            logger.error(f"Figma API 错误状态 {response.status_code}: {response.text}")
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise FigmaAPIError(f"响应不是有效的 JSON: {e}", response.status_code) from e

    async def get_file(self, file_key: str, depth: Optional[int] = None) -> Dict[str, Any]:
        """获取整个文件并返回简化后的设计文档"""
        endpoint = f"/files/{file_key}"
        if depth is not None:
            endpoint += f"?depth={depth}"
        logger.info(f"Retrieving Figma file: {file_key} (depth: {depth if depth is not None else 'default'})")

        response = await self.request(endpoint)
        return self._simplify(response)

    async def get_node(
        self, file_key: str, node_id: str, depth: Optional[int] = None
    ) -> Dict[str, Any]:
        """获取文件中的指定节点（多个节点用逗号分隔）并返回简化后的设计文档"""
        endpoint = f"/files/{file_key}/nodes?ids={node_id}"
        if depth is not None:
            endpoint += f"&depth={depth}"

        response = await self.request(endpoint)
        logger.info("Got response from get_node, now parsing.")
        return self._simplify(response)

    async def fetch_document(
        self,
        file_key: str,
        node_id: Optional[str] = None,
        depth: Optional[int] = None,
    ) -> Dict[str, Any]:
        """传入 node_id 时获取指定节点，否则获取整个文件"""
        if node_id:
            return await self.get_node(file_key, node_id, depth)
        return await self.get_file(file_key, depth)

    def _simplify(self, response: Dict[str, Any]) -> Dict[str, Any]:
        write_logs(self._config, "figma-raw.yml", response)
        simplified = self._simplifier(response)
        write_logs(self._config, "figma-simplified.yml", simplified)
        return simplified

    async def _render_images(
        self, file_key: str, node_ids: List[str], file_type: str
    ) -> Dict[str, Optional[str]]:
        # 空列表不发请求
        if not node_ids:
            return {}
        data = await self.request(
            f"/images/{file_key}?ids={','.join(node_ids)}&scale={EXPORT_SCALE}&format={file_type}"
        )
        return data.get("images") or {}

    async def _download_all(
        self, downloads: Sequence[Tuple[str, Optional[str]]], local_path: Union[str, Path]
    ) -> List[str]:
        """
        并发下载所有图像，等待全部结束后按输入顺序返回路径

        URL 为空的条目不发起下载，返回空字符串。单个下载失败不会中断其他下载；
        全部结束后抛出第一个下载错误。
        """

        async def download(file_name: str, image_url: Optional[str]) -> str:
            if not image_url:
                return ""
            return await self._downloader(file_name, local_path, image_url)

        results = await asyncio.gather(
            *[download(file_name, image_url) for file_name, image_url in downloads],
            return_exceptions=True,
        )

        errors = []
        for (file_name, _), result in zip(downloads, results):
            if isinstance(result, BaseException):
                logger.error(f"下载图像 {file_name} 失败: {result}")
                errors.append(result)
        if errors:
            raise errors[0]
        return list(results)

    async def get_images(
        self,
        file_key: str,
        nodes: Sequence[ExportRequest],
        local_path: Union[str, Path],
    ) -> List[str]:
        """
        渲染导出节点图像并下载到本地

        png 和 svg 节点各发起一次批量请求（并发执行），没有对应节点的格式不发请求。
        接口没有返回 URL 的节点会被跳过。

        Args:
            file_key: Figma文件的唯一标识符
            nodes: 导出请求列表
            local_path: 保存目录

        Returns:
            下载成功的本地文件路径，顺序与输入中有 URL 的请求一致

        Raises:
            FigmaError: 批量渲染请求失败
            Exception: 任一下载失败时，在所有下载结束后抛出第一个错误
        """
        png_ids = [node.node_id for node in nodes if node.file_type == "png"]
        svg_ids = [node.node_id for node in nodes if node.file_type == "svg"]

        png_images, svg_images = await asyncio.gather(
            self._render_images(file_key, png_ids, "png"),
            self._render_images(file_key, svg_ids, "svg"),
        )
        images = {**png_images, **svg_images}

        downloads = [
            (node.file_name, images[node.node_id])
            for node in nodes
            if images.get(node.node_id)
        ]
        return await self._download_all(downloads, local_path)

    async def get_image_fills(
        self,
        file_key: str,
        nodes: Sequence[FillRequest],
        local_path: Union[str, Path],
    ) -> List[str]:
        """
        通过文件的图片填充表下载节点引用的图片

        Args:
            file_key: Figma文件的唯一标识符
            nodes: 图片填充请求列表
            local_path: 保存目录

        Returns:
            与输入一一对应的本地文件路径，找不到图片的位置为空字符串
        """
        if not nodes:
            return []

        data = await self.request(f"/files/{file_key}/images")
        images = (data.get("meta") or {}).get("images") or {}

        downloads = [(node.file_name, images.get(node.image_ref)) for node in nodes]
        return await self._download_all(downloads, local_path)

    async def download_images(
        self,
        file_key: str,
        requests: Sequence[AssetRequest],
        local_path: Union[str, Path],
    ) -> List[str]:
        """下载混合的图像请求，返回图片填充结果在前、渲染导出结果在后"""
        fills = [request for request in requests if isinstance(request, FillRequest)]
        exports = [request for request in requests if isinstance(request, ExportRequest)]

        results = await asyncio.gather(
            self.get_image_fills(file_key, fills, local_path),
            self.get_images(file_key, exports, local_path),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        fill_paths, export_paths = results
        return fill_paths + export_paths
