#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
figma-context-mcp 启动脚本

用法:
    python run.py                      # stdio 模式（默认）
    python run.py -m http -p 8000      # Streamable-HTTP 模式，端点 /mcp
    python run.py -m sse -p 8001       # SSE 模式，端点 /sse
"""

import sys
import argparse
import logging

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="figma-context-mcp 启动脚本")
    parser.add_argument(
        "--mode", "-m", choices=["stdio", "http", "sse"], default="stdio", help="传输模式"
    )
    parser.add_argument("--port", "-p", type=int, default=8000, help="HTTP/SSE 端口")
    parser.add_argument(
        "--figma-api-key", default=None, help="Figma 访问令牌，默认读取 FIGMA_API_KEY"
    )
    return parser


def serve(mode: str, port: int) -> None:
    """按传输模式启动 MCP 服务"""
    from figma_context_mcp.server import mcp

    if mode == "stdio":
        mcp.run(transport="stdio")
    elif mode == "http":
        logger.info(f"Streamable-HTTP 端点: http://127.0.0.1:{port}/mcp")
        mcp.run(transport="streamable-http", host="127.0.0.1", port=port, path="/mcp")
    else:
        logger.info(f"SSE 端点: http://127.0.0.1:{port}/sse")
        mcp.run(transport="sse", host="127.0.0.1", port=port)


def main() -> None:
    args = build_parser().parse_args()

    try:
        from figma_context_mcp.config import load_config
        from figma_context_mcp.server import configure

        configure(load_config(api_key=args.figma_api_key))
        serve(args.mode, args.port)
    except KeyboardInterrupt:
        logger.info("服务器已停止")
    except Exception as e:
        logger.error(f"启动失败: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
