#!/usr/bin/env python3
"""
Figma 响应简化模块

把 Figma API 返回的原始节点树精简为适合 AI 编码助手阅读的结构。
纯函数，不访问网络，也不修改输入。
"""

from typing import Dict, Any, List, Optional


def _format_color(color: Dict[str, Any], opacity: float = 1.0) -> str:
    r = round(color.get("r", 0) * 255)
    g = round(color.get("g", 0) * 255)
    b = round(color.get("b", 0) * 255)
    alpha = round(color.get("a", 1) * opacity, 2)
    if alpha >= 1:
        return f"#{r:02X}{g:02X}{b:02X}"
    return f"rgba({r}, {g}, {b}, {alpha})"


def _simplify_paint(paint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if paint.get("visible") is False:
        return None

    paint_type = paint.get("type")
    if paint_type == "SOLID":
        return {
            "type": "SOLID",
            "color": _format_color(paint.get("color", {}), paint.get("opacity", 1.0)),
        }
    if paint_type == "IMAGE":
        simplified = {"type": "IMAGE", "imageRef": paint.get("imageRef")}
        if paint.get("scaleMode"):
            simplified["scaleMode"] = paint["scaleMode"]
        return simplified
    if paint_type and paint_type.startswith("GRADIENT_"):
        return {
            "type": paint_type,
            "stops": [
                {
                    "position": stop.get("position"),
                    "color": _format_color(stop.get("color", {})),
                }
                for stop in paint.get("gradientStops", [])
            ],
        }
    return {"type": paint_type}


def _simplify_paints(paints: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    simplified = [_simplify_paint(paint) for paint in paints]
    return [paint for paint in simplified if paint]


def simplify_node(node: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    精简单个节点及其子节点

    Args:
        node: 原始节点

    Returns:
        精简后的节点，不可见节点返回 None
    """
    if node.get("visible") is False:
        return None

    simplified: Dict[str, Any] = {
        "id": node.get("id"),
        "name": node.get("name"),
        "type": node.get("type"),
    }

    if node.get("type") == "TEXT" and "characters" in node:
        simplified["text"] = node["characters"]
        style = node.get("style") or {}
        text_style = {
            key: style[key]
            for key in ("fontFamily", "fontWeight", "fontSize", "lineHeightPx", "textAlignHorizontal")
            if key in style
        }
        if text_style:
            simplified["textStyle"] = text_style

    box = node.get("absoluteBoundingBox")
    if box:
        simplified["boundingBox"] = {
            key: box.get(key) for key in ("x", "y", "width", "height")
        }

    fills = _simplify_paints(node.get("fills", []))
    if fills:
        simplified["fills"] = fills

    strokes = _simplify_paints(node.get("strokes", []))
    if strokes:
        simplified["strokes"] = strokes
        if "strokeWeight" in node:
            simplified["strokeWeight"] = node["strokeWeight"]

    if node.get("opacity", 1) != 1:
        simplified["opacity"] = node["opacity"]

    if node.get("cornerRadius"):
        simplified["borderRadius"] = f"{node['cornerRadius']}px"
    elif node.get("rectangleCornerRadii"):
        simplified["borderRadius"] = " ".join(
            f"{radius}px" for radius in node["rectangleCornerRadii"]
        )

    if node.get("layoutMode") in ("HORIZONTAL", "VERTICAL"):
        simplified["layout"] = {
            "mode": "row" if node["layoutMode"] == "HORIZONTAL" else "column",
            "gap": node.get("itemSpacing", 0),
            "padding": [
                node.get("paddingTop", 0),
                node.get("paddingRight", 0),
                node.get("paddingBottom", 0),
                node.get("paddingLeft", 0),
            ],
        }

    children = [simplify_node(child) for child in node.get("children", [])]
    children = [child for child in children if child]
    if children:
        simplified["children"] = children

    return simplified


def parse_figma_response(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    精简 Figma 文件或节点接口的响应

    支持 GET /files/{key}（包含 document）和 GET /files/{key}/nodes（包含 nodes）两种响应。

    Args:
        data: Figma API 原始响应

    Returns:
        包含 name、lastModified、thumbnailUrl 和 nodes 的精简文档
    """
    if "nodes" in data:
        raw_nodes = [
            node_info["document"]
            for node_info in data["nodes"].values()
            if node_info and "document" in node_info
        ]
    else:
        raw_nodes = data.get("document", {}).get("children", [])

    nodes = [simplify_node(node) for node in raw_nodes]

    return {
        "name": data.get("name"),
        "lastModified": data.get("lastModified"),
        "thumbnailUrl": data.get("thumbnailUrl", ""),
        "nodes": [node for node in nodes if node],
    }
