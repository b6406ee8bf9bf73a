"""
SVG文档层 - 文档树、解析后端、序列化

子模块：
- tree: 与解析库无关的文档树（SvgElement/SvgDocument）
- backends: xml.etree / lxml 解析后端
- writer: 共用的确定性序列化
"""

from .backends import EtreeBackend, LxmlBackend, get_backend
from .tree import (
    SVG_NS,
    XLINK_NS,
    SvgDocument,
    SvgElement,
    parse_length,
    parse_view_box,
    qname,
    split_qname,
)
from .writer import serialize

__all__ = [
    "SvgDocument",
    "SvgElement",
    "SVG_NS",
    "XLINK_NS",
    "qname",
    "split_qname",
    "parse_length",
    "parse_view_box",
    "EtreeBackend",
    "LxmlBackend",
    "get_backend",
    "serialize",
]
