"""
放置结果模型 - 几何计算的输出

transform 字符串格式与前端运行时一致：
    translate(<x>, <y>) scale(<s>)
整数值不带小数部分，其余取最短可往返表示。
"""

from __future__ import annotations

import math

from pydantic import BaseModel


def format_number(value: float) -> str:
    """数值格式化（整数去掉 .0，其余用 repr）"""
    if math.isfinite(value) and value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(float(value))


class Placement(BaseModel):
    """二维码在框架中的放置结果"""
    scale: float
    offset_x: float
    offset_y: float

    model_config = {"frozen": True}

    @property
    def transform(self) -> str:
        """SVG transform 属性值（先平移后缩放）"""
        return (
            f"translate({format_number(self.offset_x)}, {format_number(self.offset_y)}) "
            f"scale({format_number(self.scale)})"
        )

    def scaled_size(self, width: float, height: float) -> tuple[float, float]:
        """缩放后的尺寸"""
        return width * self.scale, height * self.scale

    def shifted(self, min_x: float, min_y: float) -> Placement:
        """把源坐标系原点 (min_x, min_y) 折算进平移量"""
        if not min_x and not min_y:
            return self
        return Placement(
            scale=self.scale,
            offset_x=self.offset_x - min_x * self.scale,
            offset_y=self.offset_y - min_y * self.scale,
        )

    def bounds(
        self,
        width: float,
        height: float,
        min_x: float = 0.0,
        min_y: float = 0.0,
    ) -> tuple[float, float, float, float]:
        """源 viewBox (min_x, min_y, width, height) 缩放平移后的外接框 (x, y, width, height)"""
        w, h = self.scaled_size(width, height)
        return self.offset_x + min_x * self.scale, self.offset_y + min_y * self.scale, w, h
