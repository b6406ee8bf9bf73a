"""
框架素材加载器 - 按 asset_ref 取回框架SVG文本

实现：
- FileArtworkLoader: 服务端，读本地素材目录
- HttpArtworkLoader: 客户端，按 base_url 网络获取（requests）
- CachingArtworkLoader: 按 asset_ref 缓存（部署期内素材不变）

合成算法只关心拿到的文本，不关心来源；失败统一抛 ArtworkLoadError。

测试要点：
- test_file_loader_reads_svg: 本地读取
- test_file_loader_rejects_escape: 拒绝越出素材目录的引用
- test_http_loader_status_error: 非2xx抛错
- test_caching_loader: 命中缓存、失败不缓存
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from urllib.parse import quote

import requests

from ..config import RuntimeConfig, get_config
from ..interfaces import ArtworkLoadError, IArtworkLoader

logger = logging.getLogger(__name__)


class FileArtworkLoader(IArtworkLoader):
    """本地文件加载器"""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir).resolve()

    def load(self, asset_ref: str) -> str:
        path = (self.base_dir / asset_ref).resolve()
        if not path.is_relative_to(self.base_dir):
            raise ArtworkLoadError(f"素材引用越出素材目录: {asset_ref}")
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ArtworkLoadError(f"框架SVG不存在: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"框架SVG读取失败: {path}: {e}")
            raise ArtworkLoadError(f"框架SVG读取失败: {path}: {e}") from e


class HttpArtworkLoader(IArtworkLoader):
    """网络加载器"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        if not base_url:
            raise ValueError("HttpArtworkLoader 需要 base_url")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def url_for(self, asset_ref: str) -> str:
        return f"{self.base_url}/{quote(asset_ref.lstrip('/'), safe='/')}"

    def load(self, asset_ref: str) -> str:
        url = self.url_for(asset_ref)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"框架SVG获取失败: {url}: {e}")
            raise ArtworkLoadError(f"框架SVG获取失败: {url}: {e}") from e

        if not response.ok:
            raise ArtworkLoadError(
                f"框架SVG获取失败: {url}: HTTP {response.status_code} {response.reason}"
            )
        # 素材统一按UTF-8解码，与本地读取保持一致
        response.encoding = "utf-8"
        return response.text


class CachingArtworkLoader(IArtworkLoader):
    """带缓存的加载器（失败不缓存）"""

    def __init__(self, inner: IArtworkLoader):
        self.inner = inner
        self._cache: dict[str, str] = {}
        self._lock = threading.Lock()

    def load(self, asset_ref: str) -> str:
        with self._lock:
            cached = self._cache.get(asset_ref)
        if cached is not None:
            return cached

        markup = self.inner.load(asset_ref)
        with self._lock:
            self._cache.setdefault(asset_ref, markup)
        return markup

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


def build_artwork_loader(config: RuntimeConfig | None = None) -> IArtworkLoader:
    """按配置创建加载器"""
    cfg = config or get_config()
    source = cfg.artwork.source
    if source == "file":
        loader: IArtworkLoader = FileArtworkLoader(cfg.artwork.svg_dir)
    elif source == "http":
        loader = HttpArtworkLoader(cfg.artwork.base_url, timeout=cfg.timeouts.artwork_fetch_sec)
    else:
        raise ValueError(f"未知的素材来源: {source}")
    return CachingArtworkLoader(loader) if cfg.artwork.cache else loader
