"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 合成算法只依赖接口，不关心SVG从哪里来、用哪个XML库解析
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from qrframe.interfaces import IArtworkLoader

    class MyLoader(IArtworkLoader):
        def load(self, asset_ref: str) -> str:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Placement, Placeholder, TemplateDescriptor
    from .svg import SvgDocument


# ============================================================================
# 文档解析/序列化接口
# ============================================================================

class IDocumentBackend(ABC):
    """文档后端接口 - 解析SVG文本为文档树，并序列化回文本"""

    name: str = ""

    @abstractmethod
    def parse(self, markup: str, label: str = "document") -> SvgDocument:
        """
        解析SVG文本

        Args:
            markup: SVG文本
            label: 文档标识（用于错误信息）

        Returns:
            解析后的文档树

        Raises:
            ValueError: 文本不是合法XML
        """
        ...

    @abstractmethod
    def serialize(self, document: SvgDocument) -> str:
        """序列化文档树为SVG文本"""
        ...


# ============================================================================
# 框架素材加载接口
# ============================================================================

class IArtworkLoader(ABC):
    """框架SVG加载器接口 - 按 asset_ref 取回原始SVG文本"""

    @abstractmethod
    def load(self, asset_ref: str) -> str:
        """
        加载框架SVG

        Args:
            asset_ref: 模板目录中的素材引用（相对路径）

        Returns:
            SVG文本

        Raises:
            ArtworkLoadError: 文件不存在/网络失败
        """
        ...

    def load_for(self, descriptor: TemplateDescriptor) -> str:
        """按模板描述加载框架SVG"""
        return self.load(descriptor.asset_ref)


# ============================================================================
# 合成模块接口
# ============================================================================

class IGeometryResolver(ABC):
    """几何计算接口 - 计算缩放与居中偏移"""

    @abstractmethod
    def resolve(
        self,
        placeholder: Placeholder,
        qr_scale: float,
        source_width: float,
        source_height: float,
    ) -> Placement:
        """
        计算二维码放入占位区域的缩放与偏移

        Args:
            placeholder: 占位区域（框架坐标系）
            qr_scale: 占位区域最大填充比例 (0, 1]
            source_width: 二维码固有宽度
            source_height: 二维码固有高度

        Returns:
            放置结果（scale, offset_x, offset_y）
        """
        ...


class ICompositor(ABC):
    """文档合成器接口"""

    @abstractmethod
    def compose(
        self,
        source: SvgDocument | str,
        target_markup: str,
        descriptor: TemplateDescriptor,
    ) -> str:
        """
        将二维码SVG合成进框架SVG

        Args:
            source: 二维码文档（已解析的文档树或SVG文本）
            target_markup: 框架SVG文本
            descriptor: 模板描述

        Returns:
            合成后的SVG文本

        Raises:
            MalformedSourceError: 二维码文档缺少坐标声明
            MalformedTargetError: 框架文档无法解析或缺少坐标声明
            CompositionError: 其他树操作失败
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class QRFrameError(Exception):
    """基础异常"""
    pass


class CatalogLoadError(QRFrameError):
    """模板目录加载错误（启动期致命）"""
    pass


class TemplateNotFoundError(QRFrameError):
    """模板不存在"""

    def __init__(self, template_id: str):
        super().__init__(f"模板不存在: {template_id}")
        self.template_id = template_id


class ArtworkLoadError(QRFrameError):
    """框架素材加载错误"""
    pass


class CompositionError(QRFrameError):
    """合成错误"""
    pass


class MalformedSourceError(CompositionError):
    """二维码文档不合法"""
    pass


class MalformedTargetError(CompositionError):
    """框架文档不合法"""
    pass
