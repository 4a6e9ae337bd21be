#!/usr/bin/env python3
"""
响应简化测试
"""

from figma_context_mcp.services.simplify import parse_figma_response, simplify_node


def test_parse_file_response():
    raw = {
        "name": "Landing Page",
        "lastModified": "2024-05-01T10:00:00Z",
        "thumbnailUrl": "https://s3.example.com/thumb.png",
        "document": {
            "id": "0:0",
            "type": "DOCUMENT",
            "children": [
                {"id": "0:1", "name": "Page 1", "type": "CANVAS"},
                {"id": "0:2", "name": "Hidden", "type": "CANVAS", "visible": False},
            ],
        },
    }

    document = parse_figma_response(raw)

    assert document["name"] == "Landing Page"
    assert document["lastModified"] == "2024-05-01T10:00:00Z"
    assert document["nodes"] == [{"id": "0:1", "name": "Page 1", "type": "CANVAS"}]


def test_parse_nodes_response():
    raw = {
        "name": "Landing Page",
        "nodes": {
            "1:2": {"document": {"id": "1:2", "name": "Button", "type": "FRAME"}},
            "1:3": None,
        },
    }

    document = parse_figma_response(raw)

    assert [node["id"] for node in document["nodes"]] == ["1:2"]


def test_parse_does_not_mutate_input():
    node = {"id": "1:1", "name": "Box", "type": "RECTANGLE", "fills": [{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0, "a": 1}}]}
    raw = {"name": "File", "document": {"children": [node]}}
    snapshot = repr(raw)

    parse_figma_response(raw)

    assert repr(raw) == snapshot


def test_simplify_text_and_paints():
    node = {
        "id": "2:1",
        "name": "Title",
        "type": "TEXT",
        "characters": "Hello",
        "style": {"fontFamily": "Inter", "fontSize": 24, "letterSpacing": 0},
        "absoluteBoundingBox": {"x": 0, "y": 10, "width": 100, "height": 30},
        "fills": [
            {"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0, "a": 1}, "opacity": 0.5},
            {"type": "SOLID", "visible": False, "color": {"r": 1, "g": 1, "b": 1, "a": 1}},
        ],
        "opacity": 0.8,
    }

    simplified = simplify_node(node)

    assert simplified["text"] == "Hello"
    assert simplified["textStyle"] == {"fontFamily": "Inter", "fontSize": 24}
    assert simplified["boundingBox"] == {"x": 0, "y": 10, "width": 100, "height": 30}
    assert simplified["fills"] == [{"type": "SOLID", "color": "rgba(0, 0, 0, 0.5)"}]
    assert simplified["opacity"] == 0.8


def test_simplify_image_fill_keeps_image_ref():
    node = {
        "id": "3:1",
        "name": "Hero",
        "type": "RECTANGLE",
        "fills": [{"type": "IMAGE", "imageRef": "abc123ref", "scaleMode": "FILL"}],
        "cornerRadius": 8,
    }

    simplified = simplify_node(node)

    assert simplified["fills"] == [{"type": "IMAGE", "imageRef": "abc123ref", "scaleMode": "FILL"}]
    assert simplified["borderRadius"] == "8px"


def test_simplify_solid_color_hex():
    node = {
        "id": "4:1",
        "name": "Frame",
        "type": "FRAME",
        "fills": [{"type": "SOLID", "color": {"r": 1, "g": 0.5, "b": 0, "a": 1}}],
        "layoutMode": "VERTICAL",
        "itemSpacing": 12,
        "children": [{"id": "4:2", "name": "Child", "type": "RECTANGLE", "visible": False}],
    }

    simplified = simplify_node(node)

    assert simplified["fills"] == [{"type": "SOLID", "color": "#FF8000"}]
    assert simplified["layout"]["mode"] == "column"
    assert simplified["layout"]["gap"] == 12
    assert "children" not in simplified
