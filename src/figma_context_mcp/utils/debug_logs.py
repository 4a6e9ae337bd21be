#!/usr/bin/env python3
"""
调试日志模块

开发环境下把原始/简化后的设计文档以 YAML 形式写入磁盘，方便排查问题。
写入失败只记录日志，不影响任何返回值。
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..config import FigmaConfig

logger = logging.getLogger(__name__)


def write_logs(config: FigmaConfig, name: str, value: Any) -> None:
    """
    将数据写入 logs 目录下的 YAML 文件（仅开发环境）

    Args:
        config: 当前配置，debug_logs 为 False 时直接返回
        name: 文件名，例如 figma-raw.yml
        value: 要写入的数据
    """
    if not config.debug_logs:
        return

    try:
        logs_dir = Path(config.logs_dir)
        if not os.access(logs_dir.parent.resolve(), os.W_OK):
            logger.debug(f"日志目录不可写，跳过写入: {logs_dir}")
            return

        logs_dir.mkdir(parents=True, exist_ok=True)
        with open(logs_dir / name, "w", encoding="utf-8") as f:
            yaml.safe_dump(value, f, allow_unicode=True, sort_keys=False)
    except Exception as e:
        logger.debug(f"写入调试日志失败: {e}")
