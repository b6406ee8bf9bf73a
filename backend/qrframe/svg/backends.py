"""
文档后端 - 把SVG文本解析为统一文档树

两种实现：
- EtreeBackend: 标准库 xml.etree（默认，无额外依赖）
- LxmlBackend:  lxml（加固解析器：只展开文档内部实体、不加载外部DTD、不访问网络）

两者都丢弃注释与处理指令，记录每个元素自己的命名空间声明，
并共用 writer.serialize 输出，因此同一输入在两个后端上得到逐字节一致的结果。

测试要点：
- test_backends_agree: 两个后端解析+序列化结果一致
- test_internal_entity_expanded: 内部实体在两个后端上都被展开
- test_parse_invalid_markup: 非法XML抛 ValueError
"""

from __future__ import annotations

import io
from xml.etree import ElementTree as ET

from lxml import etree

from ..interfaces import IDocumentBackend
from .tree import SvgDocument, SvgElement
from .writer import serialize


def _to_bytes(markup: str | bytes) -> bytes:
    return markup.encode("utf-8") if isinstance(markup, str) else markup


def _append_text(element: SvgElement, text: str | None) -> None:
    """把被跳过节点后的文本并入前一个兄弟的 tail（没有则并入父节点 text）"""
    if not text:
        return
    if element.children:
        last = element.children[-1]
        last.tail = (last.tail or "") + text
    else:
        element.text = (element.text or "") + text


def _convert(node, declared, parent: SvgElement | None = None) -> SvgElement:
    """ElementTree 风格节点 → SvgElement（两个库API一致）"""
    element = SvgElement(
        tag=node.tag,
        attrib=dict(node.attrib),
        text=node.text,
        tail=node.tail,
        nsmap=declared(node),
    )
    element.parent = parent
    for child in node:
        if not isinstance(child.tag, str):
            # 未展开的实体引用等非元素节点：丢弃节点本身，保留其后文本
            _append_text(element, child.tail)
            continue
        element.children.append(_convert(child, declared, element))
    return element


def _document(root: SvgElement) -> SvgDocument:
    root.tail = None
    return SvgDocument(root=root, namespaces=dict(root.nsmap))


class _TreeBackend(IDocumentBackend):
    """公共部分：序列化统一走 writer"""

    def serialize(self, document: SvgDocument) -> str:
        return serialize(document)


class EtreeBackend(_TreeBackend):
    """xml.etree 后端"""

    name = "etree"

    def parse(self, markup: str, label: str = "document") -> SvgDocument:
        declarations: dict = {}
        pending: dict[str | None, str] = {}
        root = None
        try:
            for event, item in ET.iterparse(
                io.BytesIO(_to_bytes(markup)), events=("start-ns", "start", "end")
            ):
                if event == "start-ns":
                    prefix, uri = item
                    if uri:
                        pending[prefix or None] = uri
                elif event == "start":
                    # start-ns 事件紧接在声明它们的元素的 start 之前
                    if pending:
                        declarations[item] = pending
                        pending = {}
                else:
                    root = item
        except ET.ParseError as e:
            raise ValueError(f"{label}: XML解析失败: {e}") from e

        if root is None:
            raise ValueError(f"{label}: 缺少根元素")
        return _document(_convert(root, lambda node: dict(declarations.get(node, {}))))


def _lxml_declared(node) -> dict[str | None, str]:
    parent = node.getparent()
    inherited = parent.nsmap if parent is not None else {}
    return {
        prefix: uri
        for prefix, uri in node.nsmap.items()
        if uri and inherited.get(prefix) != uri
    }


class LxmlBackend(_TreeBackend):
    """lxml 后端"""

    name = "lxml"

    def __init__(self) -> None:
        self._parser = etree.XMLParser(
            resolve_entities="internal",
            load_dtd=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
        )

    def parse(self, markup: str, label: str = "document") -> SvgDocument:
        try:
            root = etree.fromstring(_to_bytes(markup), self._parser)
        except (etree.XMLSyntaxError, ValueError) as e:
            raise ValueError(f"{label}: XML解析失败: {e}") from e

        if root is None:
            raise ValueError(f"{label}: 缺少根元素")
        return _document(_convert(root, _lxml_declared))


_BACKENDS: dict[str, type[IDocumentBackend]] = {
    EtreeBackend.name: EtreeBackend,
    LxmlBackend.name: LxmlBackend,
}


def get_backend(name: str) -> IDocumentBackend:
    """按名称创建文档后端"""
    try:
        return _BACKENDS[name]()
    except KeyError:
        raise ValueError(f"未知的文档后端: {name}（可选: {', '.join(sorted(_BACKENDS))}）") from None
