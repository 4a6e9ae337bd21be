#!/usr/bin/env python3
"""
图像下载请求模型

两种请求分别对应两种解析方式：
- ExportRequest: 通过 /images 接口渲染导出节点
- FillRequest: 通过文件的图片填充表查找节点引用的图片
"""

from dataclasses import dataclass
from typing import Literal, Union

ExportFormat = Literal["png", "svg"]


@dataclass(frozen=True)
class ExportRequest:
    """渲染导出请求"""

    node_id: str
    file_name: str
    file_type: ExportFormat


@dataclass(frozen=True)
class FillRequest:
    """图片填充请求，image_ref 只在所属文件的图片表中有效"""

    node_id: str
    file_name: str
    image_ref: str


AssetRequest = Union[ExportRequest, FillRequest]
