"""
框架二维码服务 - 编排各模块完成一次合成

流程：
1. 尺寸建议（按场景）
2. 生成二维码SVG
3. 目录取模板
4. 加载框架SVG
5. 合成

预览场景：合成失败时记录错误并回退为普通二维码（不带框架）。
核心合成器本身从不做这种替换，回退只发生在这一层。

测试要点：
- test_render_framed: 端到端合成
- test_render_preview_fallback: 合成失败回退普通二维码
- test_unknown_template: 模板不存在直接抛错
"""

from __future__ import annotations

import logging

from .artwork import build_artwork_loader
from .compose import FrameCompositor, SizingAdvisor
from .config import RuntimeConfig, TemplateCatalog, get_catalog, get_config
from .interfaces import IArtworkLoader, ICompositor, QRFrameError
from .render import QRSvgRenderer
from .svg import SvgDocument, get_backend

logger = logging.getLogger(__name__)


class FramedQRService:
    """框架二维码服务"""

    def __init__(
        self,
        catalog: TemplateCatalog | None = None,
        loader: IArtworkLoader | None = None,
        compositor: ICompositor | None = None,
        renderer: QRSvgRenderer | None = None,
        config: RuntimeConfig | None = None,
    ):
        self.config = config or get_config()
        self.catalog = catalog or get_catalog()
        self.loader = loader or build_artwork_loader(self.config)

        backend = get_backend(self.config.compositing.document_backend)
        self.compositor = compositor or FrameCompositor(
            backend=backend,
            marker_id=self.config.compositing.marker_id,
        )
        self.renderer = renderer or QRSvgRenderer(backend=backend)

    def advisor(self, profile: str) -> SizingAdvisor:
        return SizingAdvisor.for_profile(profile, self.config)

    def compose_with_template(self, source: SvgDocument | str, template_id: str) -> str:
        """已有二维码文档 + 模板ID → 合成SVG"""
        template = self.catalog.get(template_id)
        markup = self.loader.load_for(template)
        return self.compositor.compose(source, markup, template)

    def render_framed(self, content: str, template_id: str, profile: str = "client") -> str:
        """生成带框架的二维码SVG（错误直接抛出）"""
        template = self.catalog.get(template_id)
        size = self.advisor(profile).advise(template)
        source = self.renderer.render(content, size, framed=True)
        markup = self.loader.load_for(template)
        return self.compositor.compose(source, markup, template)

    def render_preview(self, content: str, template_id: str | None = None) -> str:
        """
        生成预览SVG

        选了框架但合成失败时回退为普通二维码。
        """
        template = self.catalog.find(template_id) if template_id else None
        size = self.advisor("preview").advise_optional(template)
        source = self.renderer.render(content, size, framed=bool(template_id))
        if not template_id:
            return self.renderer.backend.serialize(source)

        try:
            return self.compose_with_template(source, template_id)
        except QRFrameError:
            logger.exception(f"[{template_id}] 框架合成失败，回退为普通二维码")
            return self.renderer.backend.serialize(source)
