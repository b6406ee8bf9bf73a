"""
文档树 - 与解析库无关的最小SVG节点结构

合成算法只操作这里的节点（标签/属性/子节点/文本），
xml.etree 与 lxml 只负责把文本转换成这棵树。

标签与属性名使用 Clark 记法：{namespace}local
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"

_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_LENGTH_RE = re.compile(rf"^\s*({_NUMBER})\s*(px|pt|pc|mm|cm|in|em|ex)?\s*$")
_VIEWBOX_SPLIT_RE = re.compile(r"[\s,]+")


def split_qname(name: str) -> tuple[str | None, str]:
    """{ns}local → (ns, local)"""
    if name.startswith("{"):
        uri, _, local = name[1:].partition("}")
        return uri, local
    return None, name


def qname(namespace: str | None, local: str) -> str:
    return f"{{{namespace}}}{local}" if namespace else local


def parse_length(value: str | None) -> float | None:
    """解析 width/height（允许绝对单位后缀，百分比视为无效）"""
    if value is None:
        return None
    m = _LENGTH_RE.match(value)
    if not m:
        return None
    number = float(m.group(1))
    return number if number > 0 else None


def parse_view_box(value: str | None) -> tuple[float, float, float, float] | None:
    """解析 viewBox（空白或逗号分隔的4个数）"""
    if not value:
        return None
    parts = [p for p in _VIEWBOX_SPLIT_RE.split(value.strip()) if p]
    if len(parts) != 4:
        return None
    try:
        min_x, min_y, width, height = (float(p) for p in parts)
    except ValueError:
        return None
    if width <= 0 or height <= 0:
        return None
    return min_x, min_y, width, height


@dataclass(eq=False)
class SvgElement:
    """文档树节点（按身份比较）"""
    tag: str
    attrib: dict[str, str] = field(default_factory=dict)
    text: str | None = None
    tail: str | None = None
    children: list[SvgElement] = field(default_factory=list, repr=False)
    parent: SvgElement | None = field(default=None, repr=False)
    # 本元素上声明的命名空间（不含继承的）
    nsmap: dict[str | None, str] = field(default_factory=dict, repr=False)

    @property
    def namespace(self) -> str | None:
        return split_qname(self.tag)[0]

    @property
    def local_name(self) -> str:
        return split_qname(self.tag)[1]

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attrib.get(key, default)

    def set(self, key: str, value: str) -> None:
        self.attrib[key] = value

    # === 结构操作 ===

    def index(self, child: SvgElement) -> int:
        for i, c in enumerate(self.children):
            if c is child:
                return i
        raise ValueError(f"不是子节点: {child!r}")

    def append(self, child: SvgElement) -> None:
        child.parent = self
        self.children.append(child)

    def insert(self, index: int, child: SvgElement) -> None:
        child.parent = self
        self.children.insert(index, child)

    def remove(self, child: SvgElement) -> None:
        del self.children[self.index(child)]
        child.parent = None

    @property
    def next_sibling(self) -> SvgElement | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        pos = self.parent.index(self) + 1
        return siblings[pos] if pos < len(siblings) else None

    @property
    def previous_sibling(self) -> SvgElement | None:
        if self.parent is None:
            return None
        pos = self.parent.index(self)
        return self.parent.children[pos - 1] if pos > 0 else None

    # === 遍历 ===

    def iter(self) -> Iterator[SvgElement]:
        """先序遍历（含自身）"""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_by_id(self, element_id: str) -> SvgElement | None:
        for node in self.iter():
            if node.attrib.get("id") == element_id:
                return node
        return None

    def clone(self) -> SvgElement:
        """深拷贝（新子树无父节点）"""
        copy = SvgElement(
            tag=self.tag,
            attrib=dict(self.attrib),
            text=self.text,
            tail=self.tail,
            nsmap=dict(self.nsmap),
        )
        for child in self.children:
            copy.append(child.clone())
        return copy


@dataclass(eq=False)
class SvgDocument:
    """SVG文档：根节点 + 根元素上的命名空间声明"""
    root: SvgElement
    namespaces: dict[str | None, str] = field(default_factory=dict)

    def find_by_id(self, element_id: str) -> SvgElement | None:
        return self.root.find_by_id(element_id)

    def intrinsic_size(self) -> tuple[float, float] | None:
        """
        读取根节点坐标声明

        优先 viewBox 的宽高；没有时退回 width/height 属性。
        """
        view_box = parse_view_box(self.root.get("viewBox"))
        if view_box:
            return view_box[2], view_box[3]
        width = parse_length(self.root.get("width"))
        height = parse_length(self.root.get("height"))
        if width and height:
            return width, height
        return None

    def view_box_origin(self) -> tuple[float, float]:
        """viewBox 的 min-x/min-y（没有 viewBox 时为原点）"""
        view_box = parse_view_box(self.root.get("viewBox"))
        if view_box:
            return view_box[0], view_box[1]
        return 0.0, 0.0

    @property
    def has_coordinate_declaration(self) -> bool:
        return self.intrinsic_size() is not None

    def clone(self) -> SvgDocument:
        return SvgDocument(root=self.root.clone(), namespaces=dict(self.namespaces))
