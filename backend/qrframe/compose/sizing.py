"""
尺寸建议 - 决定生成二维码SVG时请求的分辨率

规则：
- 模板配置了 qr_size：原样返回
- 否则 floor(min(占位宽, 占位高) * 1.2)，再夹到 [min_size, max_size]
  client 场景 [200, 1000]，preview 场景 [200, 800]

1.2 倍过采样保证缩放后模块边缘不发虚。
"""

from __future__ import annotations

import math

from ..config import RuntimeConfig, get_config
from ..models import TemplateDescriptor


class SizingAdvisor:
    """二维码生成尺寸建议器"""

    def __init__(
        self,
        min_size: int = 200,
        max_size: int = 1000,
        oversample: float = 1.2,
        default_size: int = 400,
    ) -> None:
        if min_size > max_size:
            raise ValueError(f"尺寸下限大于上限: {min_size} > {max_size}")
        self.min_size = min_size
        self.max_size = max_size
        self.oversample = oversample
        self.default_size = default_size

    @classmethod
    def for_profile(cls, profile: str = "client", config: RuntimeConfig | None = None) -> SizingAdvisor:
        """按场景（client/preview）从配置构建"""
        cfg = config or get_config()
        size_range = cfg.size_range(profile)
        return cls(
            min_size=size_range.min_size,
            max_size=size_range.max_size,
            oversample=cfg.sizing.oversample,
            default_size=cfg.sizing.default_size,
        )

    def advise(self, descriptor: TemplateDescriptor) -> int:
        if descriptor.qr_size:
            return descriptor.qr_size
        placeholder = descriptor.placeholder
        size = math.floor(min(placeholder.width, placeholder.height) * self.oversample)
        return max(self.min_size, min(self.max_size, size))

    def advise_optional(self, descriptor: TemplateDescriptor | None) -> int:
        """未选择框架时返回默认尺寸"""
        if descriptor is None:
            return self.default_size
        return self.advise(descriptor)


def advise_source_size(descriptor: TemplateDescriptor, profile: str = "client") -> int:
    """便捷函数：按场景给出二维码生成尺寸"""
    return SizingAdvisor.for_profile(profile).advise(descriptor)
