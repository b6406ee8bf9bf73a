"""
合成模块 - 几何计算/文档合成/尺寸建议

子模块：
- geometry: 缩放与居中偏移计算
- compositor: 框架与二维码文档合成
- sizing: 二维码生成尺寸建议
"""

from .compositor import (
    AppendToRoot,
    BeforeSibling,
    CompositionResult,
    FrameCompositor,
    InsertionPoint,
)
from .geometry import NEAR_FIT_MIN_SCALE, NEAR_FIT_SIZE_DIFF, GeometryResolver
from .sizing import SizingAdvisor, advise_source_size

__all__ = [
    "FrameCompositor",
    "CompositionResult",
    "InsertionPoint",
    "BeforeSibling",
    "AppendToRoot",
    "GeometryResolver",
    "NEAR_FIT_SIZE_DIFF",
    "NEAR_FIT_MIN_SCALE",
    "SizingAdvisor",
    "advise_source_size",
]
