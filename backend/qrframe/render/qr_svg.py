"""
二维码SVG生成 - 为合成提供源文档

使用 qrcode 的 SvgPathFillImage（白色背景 rect + 单条 path）：
- 背景保证深色框架上也能扫码；其百分比尺寸改写为 viewBox 数值，
  否则放进框架后会按框架视口铺满
- 带框架时边距1个模块，不带框架时2个模块
- viewBox 保持库输出的坐标系，width/height 改写为建议尺寸
"""

from __future__ import annotations

import io

import qrcode
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)
from qrcode.image.svg import SvgPathFillImage

from ..config import RuntimeConfig, get_config
from ..interfaces import IDocumentBackend
from ..models import format_number
from ..svg import SvgDocument, get_backend, parse_view_box

_ERROR_CORRECTION = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


class QRSvgRenderer:
    """二维码SVG生成器"""

    def __init__(
        self,
        backend: IDocumentBackend | None = None,
        error_correction: str = "M",
        config: RuntimeConfig | None = None,
    ):
        if backend is None:
            backend = get_backend((config or get_config()).compositing.document_backend)
        if error_correction not in _ERROR_CORRECTION:
            raise ValueError(f"未知的纠错等级: {error_correction}")
        self.backend = backend
        self.error_correction = error_correction

    def render(self, content: str, size: int, framed: bool = True) -> SvgDocument:
        """
        生成二维码文档

        Args:
            content: 二维码内容（URL或文本）
            size: 建议尺寸（写入根元素 width/height）
            framed: 是否用于框架合成（决定边距）

        Returns:
            二维码文档树
        """
        if not content:
            raise ValueError("二维码内容不能为空")

        qr = qrcode.QRCode(
            error_correction=_ERROR_CORRECTION[self.error_correction],
            border=1 if framed else 2,
            image_factory=SvgPathFillImage,
        )
        qr.add_data(content)
        qr.make(fit=True)

        buffer = io.BytesIO()
        qr.make_image().save(buffer)

        document = self.backend.parse(buffer.getvalue().decode("utf-8"), label="二维码SVG")
        _pin_background(document)
        document.root.set("width", str(size))
        document.root.set("height", str(size))
        return document



def _pin_background(document: SvgDocument) -> None:
    """背景 rect 的 100% 尺寸改为 viewBox 坐标"""
    view_box = parse_view_box(document.root.get("viewBox"))
    if view_box is None:
        return
    min_x, min_y, width, height = view_box
    for child in document.root.children:
        if child.local_name == "rect" and child.get("width", "").endswith("%"):
            child.set("x", format_number(min_x))
            child.set("y", format_number(min_y))
            child.set("width", format_number(width))
            child.set("height", format_number(height))
