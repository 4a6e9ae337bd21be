#!/usr/bin/env python3
"""
figma-context-mcp 配置模块

从环境变量（以及 .env 文件）加载 Figma API 访问配置。
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

# 加载 .env 文件中的环境变量
load_dotenv()

DEFAULT_API_BASE_URL = "https://api.figma.com/v1"
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class FigmaConfig:
    """Figma API 访问配置，创建后不可修改"""

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    # 额外信任的 CA 证书包（PEM），用于企业代理等场景
    ca_bundle: Optional[str] = None
    debug_logs: bool = False
    logs_dir: str = "logs"


def load_config(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    ca_bundle: Optional[str] = None,
) -> FigmaConfig:
    """
    加载配置，显式传入的参数优先于环境变量

    Args:
        api_key: Figma 个人访问令牌，默认读取 FIGMA_API_KEY 或 FIGMA_ACCESS_TOKEN
        base_url: API 基础URL，默认读取 FIGMA_API_BASE_URL
        ca_bundle: CA 证书包路径，默认读取 FIGMA_CA_BUNDLE

    Returns:
        FigmaConfig 实例

    Raises:
        ValueError: 未配置访问令牌或超时时间非法
    """
    api_key = api_key or os.getenv("FIGMA_API_KEY") or os.getenv("FIGMA_ACCESS_TOKEN")
    if not api_key:
        raise ValueError(
            "FIGMA_API_KEY environment variable not set. "
            "Use --figma-api-key or set FIGMA_API_KEY / FIGMA_ACCESS_TOKEN."
        )

    timeout_value = os.getenv("FIGMA_TIMEOUT")
    try:
        timeout = float(timeout_value) if timeout_value else DEFAULT_TIMEOUT
    except ValueError:
        raise ValueError(f"无效的超时时间: {timeout_value}")

    return FigmaConfig(
        api_key=api_key,
        base_url=(base_url or os.getenv("FIGMA_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/"),
        timeout=timeout,
        ca_bundle=ca_bundle or os.getenv("FIGMA_CA_BUNDLE") or None,
        debug_logs=os.getenv("FIGMA_MCP_ENV") == "development",
        logs_dir=os.getenv("FIGMA_MCP_LOGS_DIR", "logs"),
    )
