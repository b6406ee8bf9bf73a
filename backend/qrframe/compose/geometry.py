"""
几何计算器 - 计算二维码放入占位区域的缩放与居中偏移

计算策略：
1. size_diff = |W_src - W_ph| + |H_src - H_ph|
2. 尺寸接近且填充比例很大（size_diff < 50 且 qr_scale >= 0.98）：
   scale = min(W_ph / W_src, H_ph / H_src) * qr_scale
3. 其余情况按留白缩放：
   scale = min(W_ph * qr_scale / W_src, H_ph * qr_scale / H_src)
4. 居中：offset = ph.xy + (ph.size - src.size * scale) / 2

两个阈值是经验值，可按视觉验收结果调整。
"""

from __future__ import annotations

from ..interfaces import IGeometryResolver
from ..models import Placement, Placeholder

NEAR_FIT_SIZE_DIFF = 50.0
NEAR_FIT_MIN_SCALE = 0.98


class GeometryResolver(IGeometryResolver):
    """几何计算器（纯函数，无状态）"""

    def __init__(
        self,
        near_fit_size_diff: float = NEAR_FIT_SIZE_DIFF,
        near_fit_min_scale: float = NEAR_FIT_MIN_SCALE,
    ) -> None:
        self.near_fit_size_diff = near_fit_size_diff
        self.near_fit_min_scale = near_fit_min_scale

    def resolve(
        self,
        placeholder: Placeholder,
        qr_scale: float,
        source_width: float,
        source_height: float,
    ) -> Placement:
        if source_width <= 0 or source_height <= 0:
            raise ValueError(f"二维码尺寸必须为正: {source_width}x{source_height}")

        if self.is_near_fit(placeholder, qr_scale, source_width, source_height):
            scale = min(
                placeholder.width / source_width,
                placeholder.height / source_height,
            ) * qr_scale
        else:
            scale_x = placeholder.width * qr_scale / source_width
            scale_y = placeholder.height * qr_scale / source_height
            scale = min(scale_x, scale_y)

        offset_x = placeholder.x + (placeholder.width - source_width * scale) / 2
        offset_y = placeholder.y + (placeholder.height - source_height * scale) / 2
        return Placement(scale=scale, offset_x=offset_x, offset_y=offset_y)

    def is_near_fit(
        self,
        placeholder: Placeholder,
        qr_scale: float,
        source_width: float,
        source_height: float,
    ) -> bool:
        """是否走精确匹配分支"""
        size_diff = (
            abs(source_width - placeholder.width) +
            abs(source_height - placeholder.height)
        )
        return size_diff < self.near_fit_size_diff and qr_scale >= self.near_fit_min_scale
