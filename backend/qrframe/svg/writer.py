"""
SVG序列化 - 所有文档后端共用的确定性输出

文档树先重建为 lxml 元素树，再由 etree.tostring 输出，
转义与命名空间前缀都交给 lxml 处理。

规则：
1. 只输出根元素（不带XML声明）
2. 命名空间声明留在原来声明它的元素上（根元素声明取自 SvgDocument.namespaces）
3. 属性保持文档顺序
4. 无子节点且无文本的元素自闭合
"""

from __future__ import annotations

from lxml import etree

from .tree import SvgDocument, SvgElement


def _ordered(nsmap: dict[str | None, str]) -> dict[str | None, str]:
    """按前缀排序（与解析库无关的固定顺序）"""
    ordered: dict[str | None, str] = {}
    if None in nsmap:
        ordered[None] = nsmap[None]
    for prefix in sorted(p for p in nsmap if p is not None):
        ordered[prefix] = nsmap[prefix]
    return ordered


def _fill(target: etree._Element, node: SvgElement) -> None:
    for key, value in node.attrib.items():
        target.set(key, value)
    target.text = node.text
    for child in node.children:
        sub = etree.SubElement(target, child.tag, nsmap=_ordered(child.nsmap) or None)
        _fill(sub, child)
        sub.tail = child.tail


def serialize(document: SvgDocument) -> str:
    """序列化文档为SVG文本"""
    root = document.root
    nsmap = _ordered({**document.namespaces, **root.nsmap})
    element = etree.Element(root.tag, nsmap=nsmap or None)
    _fill(element, root)
    return etree.tostring(element, encoding="unicode")
