"""
Figma 服务模块

包含 Figma API 客户端和响应简化器。
"""

from .figma import FigmaService, EXPORT_SCALE
from .simplify import parse_figma_response, simplify_node

__all__ = [
    "FigmaService",
    "EXPORT_SCALE",
    "parse_figma_response",
    "simplify_node",
]
