"""
二维码生成模块
"""

from .qr_svg import QRSvgRenderer

__all__ = ["QRSvgRenderer"]
