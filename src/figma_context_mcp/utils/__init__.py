"""
Figma Context MCP 工具模块

包含异常处理、图像下载、调试日志等工具功能。
"""

from .exceptions import (
    api_error_from_response,
    handle_exception,
    FigmaError,
    FigmaAPIError,
    FigmaAuthenticationError,
    FigmaNotFoundError,
    FigmaRateLimitError,
    FigmaNoResponseError,
    FigmaRequestError,
)

from .image_export import download_figma_image

from .debug_logs import write_logs

__all__ = [
    # 异常处理
    "api_error_from_response",
    "handle_exception",
    "FigmaError",
    "FigmaAPIError",
    "FigmaAuthenticationError",
    "FigmaNotFoundError",
    "FigmaRateLimitError",
    "FigmaNoResponseError",
    "FigmaRequestError",
    # 图像下载
    "download_figma_image",
    # 调试日志
    "write_logs",
]
