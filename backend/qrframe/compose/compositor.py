"""
文档合成器 - 把二维码SVG放进框架SVG的占位区域

流程：
1. 解析框架SVG（根元素必须有 viewBox 或 width/height）
2. 读取二维码文档固有尺寸
3. 查找占位标记（id=qr-placeholder）确定插入点；没有标记则追加到根元素末尾
4. 几何计算（缩放+居中，折算二维码 viewBox 原点）
5. 新建 <g transform="translate(x, y) scale(s)">，深拷贝二维码根节点下的全部元素
6. 插入
7. 删除占位标记（插入之后再删，避免影响兄弟节点定位）
8. 序列化

插入与删除逻辑只有这一份，解析/序列化差异全部封装在文档后端里。

测试要点：
- test_compose_with_marker: 有占位标记时原位插入并删除标记
- test_compose_without_marker: 无标记时追加到根元素
- test_containment: 二维码 viewBox 四角变换后落在占位区域内
- test_backends_agree: 不同后端输出一致
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import RuntimeConfig, get_config
from ..interfaces import (
    CompositionError,
    ICompositor,
    IDocumentBackend,
    IGeometryResolver,
    MalformedSourceError,
    MalformedTargetError,
)
from ..models import Placement, TemplateDescriptor
from ..svg import SvgDocument, SvgElement, get_backend, qname
from .geometry import GeometryResolver

logger = logging.getLogger(__name__)

DEFAULT_MARKER_ID = "qr-placeholder"


# ============================================================================
# 插入点
# ============================================================================

@dataclass(frozen=True)
class BeforeSibling:
    """插入到 parent 内、sibling 之前（sibling 为 None 时追加到 parent 末尾）"""
    parent: SvgElement
    sibling: SvgElement | None


@dataclass(frozen=True)
class AppendToRoot:
    """追加为根元素最后一个子节点"""
    root: SvgElement


InsertionPoint = BeforeSibling | AppendToRoot


@dataclass
class CompositionResult:
    """合成结果（序列化前）"""
    document: SvgDocument
    group: SvgElement
    placement: Placement
    source_size: tuple[float, float]
    marker_found: bool


class FrameCompositor(ICompositor):
    """文档合成器实现"""

    def __init__(
        self,
        backend: IDocumentBackend | None = None,
        resolver: IGeometryResolver | None = None,
        marker_id: str | None = None,
        config: RuntimeConfig | None = None,
    ) -> None:
        if backend is None or marker_id is None:
            cfg = config or get_config()
            backend = backend or get_backend(cfg.compositing.document_backend)
            marker_id = marker_id or cfg.compositing.marker_id
        self.backend = backend
        self.resolver = resolver or GeometryResolver()
        self.marker_id = marker_id

    def compose(
        self,
        source: SvgDocument | str,
        target_markup: str,
        descriptor: TemplateDescriptor,
    ) -> str:
        result = self.compose_document(source, target_markup, descriptor)
        try:
            return self.backend.serialize(result.document)
        except Exception as e:
            raise CompositionError(f"模板 {descriptor.id}: 序列化失败: {e}") from e

    def compose_document(
        self,
        source: SvgDocument | str,
        target_markup: str,
        descriptor: TemplateDescriptor,
    ) -> CompositionResult:
        """执行合成，返回序列化前的文档树"""
        # 1. 框架
        target = self._parse_target(target_markup, descriptor)

        # 2. 二维码
        source_doc = self._parse_source(source, descriptor)
        source_size = source_doc.intrinsic_size()
        if source_size is None:
            raise MalformedSourceError(
                f"模板 {descriptor.id}: 二维码SVG缺少坐标声明（viewBox 或 width/height）"
            )

        try:
            # 3. 插入点
            marker = target.find_by_id(self.marker_id)
            if marker is target.root:
                marker = None
            point = self._locate(target, marker)

            # 4. 几何计算（viewBox 原点不为0时平移量随之修正）
            placement = self.resolver.resolve(
                descriptor.placeholder,
                descriptor.qr_scale,
                source_size[0],
                source_size[1],
            ).shifted(*source_doc.view_box_origin())

            # 5. 二维码组
            group = self._build_group(source_doc, target, placement)

            # 6. 插入
            self._insert(point, group)

            # 7. 删除占位标记
            if marker is not None:
                self._remove_marker(marker, group)
        except CompositionError:
            raise
        except Exception as e:
            raise CompositionError(f"模板 {descriptor.id}: 合成失败: {e}") from e

        logger.debug(
            f"[{descriptor.id}] 合成: placeholder={descriptor.placeholder.model_dump()} "
            f"qr_scale={descriptor.qr_scale} source={source_size[0]}x{source_size[1]} "
            f"transform='{placement.transform}' marker={'yes' if marker is not None else 'no'}"
        )

        return CompositionResult(
            document=target,
            group=group,
            placement=placement,
            source_size=source_size,
            marker_found=marker is not None,
        )

    # === 步骤实现 ===

    def _parse_target(self, markup: str, descriptor: TemplateDescriptor) -> SvgDocument:
        try:
            document = self.backend.parse(markup, label=f"框架SVG({descriptor.id})")
        except ValueError as e:
            raise MalformedTargetError(f"模板 {descriptor.id}: {e}") from e
        if not document.has_coordinate_declaration:
            raise MalformedTargetError(
                f"模板 {descriptor.id}: 框架SVG根元素缺少坐标声明（viewBox 或 width/height）"
            )
        return document

    def _parse_source(self, source: SvgDocument | str, descriptor: TemplateDescriptor) -> SvgDocument:
        if isinstance(source, SvgDocument):
            return source
        try:
            return self.backend.parse(source, label="二维码SVG")
        except ValueError as e:
            raise MalformedSourceError(f"模板 {descriptor.id}: {e}") from e

    def _locate(self, target: SvgDocument, marker: SvgElement | None) -> InsertionPoint:
        if marker is not None:
            return BeforeSibling(parent=marker.parent, sibling=marker.next_sibling)
        return AppendToRoot(root=target.root)

    def _build_group(
        self,
        source: SvgDocument,
        target: SvgDocument,
        placement: Placement,
    ) -> SvgElement:
        target_ns = target.root.namespace
        group = SvgElement(tag=qname(target_ns, "g"), attrib={"transform": placement.transform})
        # 二维码根元素上的前缀声明随内容一起带过来（框架根元素已有的除外）
        group.nsmap = {
            prefix: uri
            for prefix, uri in source.namespaces.items()
            if prefix is not None and uri != target_ns and target.namespaces.get(prefix) != uri
        }
        adopt = source.root.namespace is None and target_ns is not None
        for child in source.root.children:
            copy = child.clone()
            copy.tail = None
            if adopt:
                # 无命名空间的二维码内容并入框架的命名空间
                for node in copy.iter():
                    if node.namespace is None:
                        node.tag = qname(target_ns, node.local_name)
            group.append(copy)
        return group

    def _insert(self, point: InsertionPoint, group: SvgElement) -> None:
        if isinstance(point, BeforeSibling):
            if point.sibling is None:
                point.parent.append(group)
            else:
                point.parent.insert(point.parent.index(point.sibling), group)
        else:
            point.root.append(group)

    def _remove_marker(self, marker: SvgElement, group: SvgElement) -> None:
        parent = marker.parent
        if parent is None:
            raise CompositionError("占位标记已脱离文档树")
        # 二维码组紧跟在标记之后，接管标记后的空白文本
        group.tail = marker.tail
        parent.remove(marker)
