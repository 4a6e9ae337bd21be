#!/usr/bin/env python3
"""
figma-context-mcp 异常处理模块

统一定义 Figma API 请求的三类错误，并提供工具层的错误格式化。

- FigmaAPIError: 服务端返回了非 2xx 状态码
- FigmaNoResponseError: 请求已发出但没有收到响应（网络错误、超时）
- FigmaRequestError: 请求无法发出（URL 非法、本地配置错误）
"""

import json
import logging
from typing import Dict, Any, Optional

import httpx

logger = logging.getLogger(__name__)


class FigmaError(Exception):
    """Figma 请求错误的基类"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class FigmaAPIError(FigmaError):
    """Figma API 返回了错误状态码"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        return f"Figma API 错误 {self.status_code}: {self.message}"


class FigmaAuthenticationError(FigmaAPIError):
    """Figma API 认证错误"""

    def __init__(self, message: str = "访问被拒绝：请检查访问令牌权限", status_code: int = 403):
        super().__init__(message, status_code)


class FigmaNotFoundError(FigmaAPIError):
    """Figma API 资源未找到错误"""

    def __init__(self, message: str = "文件未找到：请检查文件密钥是否正确"):
        super().__init__(message, 404)


class FigmaRateLimitError(FigmaAPIError):
    """Figma API 速率限制错误"""

    def __init__(self, message: str = "请求频率过高：已达到API速率限制，请稍后重试"):
        super().__init__(message, 429)


class FigmaNoResponseError(FigmaError):
    """请求已发出，但没有收到任何响应"""

    def __init__(self, message: str):
        super().__init__(f"请求 Figma API 失败：未收到响应。{message}")


class FigmaRequestError(FigmaError):
    """请求在发出之前就失败了"""

    def __init__(self, message: str):
        super().__init__(f"请求 Figma API 失败：{message}")


def _describe_body(response: httpx.Response) -> str:
    try:
        return json.dumps(response.json(), ensure_ascii=False)
    except ValueError:
        return response.text


def api_error_from_response(response: httpx.Response) -> FigmaAPIError:
    """
    根据错误响应构造 FigmaAPIError

    错误信息优先取状态行的原因短语，没有时使用序列化后的响应体。

    Args:
        response: 状态码不在 2xx 范围内的 HTTP 响应

    Returns:
        对应状态码的 FigmaAPIError 实例
    """
    status_code = response.status_code
    message = response.reason_phrase or _describe_body(response) or "Unknown API error"

    if status_code in (401, 403):
        return FigmaAuthenticationError(message, status_code)
    if status_code == 404:
        return FigmaNotFoundError(message)
    if status_code == 429:
        return FigmaRateLimitError(message)
    return FigmaAPIError(message, status_code)


def handle_exception(e: Exception, operation_name: str) -> Dict[str, Any]:
    """
    统一处理异常，转换为工具层返回的错误字典

    Args:
        e: 异常对象
        operation_name: 操作名称，用于日志记录

    Returns:
        标准化的错误响应字典
    """
    if isinstance(e, FigmaAPIError):
        error_msgs = {
            401: "认证失败：请检查访问令牌是否有效",
            403: "访问被拒绝：请检查访问令牌权限或文件访问权限",
            404: "文件未找到：请检查文件密钥是否正确",
            429: "请求频率过高：已达到API速率限制，请稍后重试",
        }
        error_msg = error_msgs.get(
            e.status_code, f"API请求失败，状态码: {e.status_code}"
        )
        error_msg += f", 错误信息: {e.message}"
        logger.error(f"Figma {operation_name} API错误 {e.status_code}: {error_msg}")
        return {"success": False, "error": error_msg, "status_code": e.status_code}

    elif isinstance(e, FigmaNoResponseError):
        logger.error(e.message)
        return {"success": False, "error": e.message, "status_code": 0}

    elif isinstance(e, FigmaRequestError):
        logger.error(e.message)
        return {"success": False, "error": e.message, "status_code": 400}

    else:
        error_msg = f"{operation_name}时发生未知错误: {str(e)}"
        logger.error(error_msg)
        return {"success": False, "error": error_msg, "status_code": 500}
