"""
框架素材模块 - 本地/网络两种加载方式，一个契约
"""

from .loaders import (
    CachingArtworkLoader,
    FileArtworkLoader,
    HttpArtworkLoader,
    build_artwork_loader,
)

__all__ = [
    "FileArtworkLoader",
    "HttpArtworkLoader",
    "CachingArtworkLoader",
    "build_artwork_loader",
]
