#!/usr/bin/env python3
"""
Figma 图像下载工具模块

把已经解析出的图像 URL 下载到本地文件。
"""

import asyncio
import logging
from pathlib import Path
from typing import Union

import httpx

logger = logging.getLogger(__name__)


async def download_figma_image(
    file_name: str,
    local_path: Union[str, Path],
    image_url: str,
    max_retries: int = 2,
    timeout: float = 120.0,
) -> str:
    """
    从URL下载图像到本地文件，失败时按指数退避重试

    Args:
        file_name: 保存的文件名
        local_path: 保存目录路径，不存在时自动创建
        image_url: 图像URL
        max_retries: 最大重试次数
        timeout: 单次下载超时时间（秒）

    Returns:
        保存后的完整文件路径

    Raises:
        httpx.HTTPError: 所有尝试都失败时抛出最后一次的错误
    """
    save_path = Path(local_path)
    save_path.mkdir(parents=True, exist_ok=True)
    full_path = save_path / file_name

    for attempt in range(max_retries + 1):
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.get(image_url)
                response.raise_for_status()

            with open(full_path, "wb") as f:
                f.write(response.content)

            logger.info(f"已下载图像 {file_name} ({len(response.content)} 字节)")
            return str(full_path)

        except httpx.HTTPError as e:
            if attempt < max_retries:
                logger.warning(
                    f"下载尝试 {attempt + 1} 失败: {str(e)}，{2 ** attempt} 秒后重试..."
                )
                await asyncio.sleep(2**attempt)  # 指数退避
                continue
            logger.error(f"下载图像 {file_name} 失败: {str(e)}")
            raise
