"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(catalog, compositor):
        assert catalog.get("envelope-style").qr_scale == 0.95
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from qrframe.compose import FrameCompositor, GeometryResolver
from qrframe.config import RuntimeConfig, TemplateCatalog
from qrframe.config.runtime_config import ASSETS_DIR
from qrframe.interfaces import IDocumentBackend
from qrframe.models import TemplateDescriptor
from qrframe.svg import get_backend

# ============================================================================
# SVG 样例
# ============================================================================

QR_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 200">'
    '<rect width="200" height="200" fill="#fff"/>'
    '<path d="M0 0h10v10h-10z"/>'
    "</svg>"
)

FRAME_WITH_MARKER = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 500 500">'
    '<rect id="bg" width="500" height="500"/>'
    '<rect id="qr-placeholder" x="100" y="100" width="200" height="200"/>'
    '<text x="10" y="20">Hi</text>'
    "</svg>"
)

FRAME_WITHOUT_MARKER = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="500" height="500">'
    '<rect id="bg" width="500" height="500"/>'
    '<text x="10" y="20">Hi</text>'
    "</svg>"
)


@pytest.fixture
def qr_svg() -> str:
    """二维码样例（viewBox 200x200）"""
    return QR_SVG


@pytest.fixture
def frame_with_marker() -> str:
    """带占位标记的框架（标记后还有兄弟节点）"""
    return FRAME_WITH_MARKER


@pytest.fixture
def frame_without_marker() -> str:
    """无占位标记的框架（只有 width/height）"""
    return FRAME_WITHOUT_MARKER


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture(scope="session")
def catalog() -> TemplateCatalog:
    """随包发布的模板目录"""
    return TemplateCatalog.load(ASSETS_DIR / "templates.yaml")


@pytest.fixture(scope="session")
def svg_dir() -> Path:
    return ASSETS_DIR / "svg"


# ============================================================================
# 模型 Fixtures
# ============================================================================

def _template_record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": "test-frame",
        "name": "Test Frame",
        "category": "test",
        "description": "测试框架",
        "assetRef": "test-frame.svg",
        "placeholder": {"x": 100, "y": 100, "width": 200, "height": 200},
        "tags": ["test"],
    }
    record.update(overrides)
    return record


@pytest.fixture
def template_record() -> Callable[..., dict[str, Any]]:
    """原始模板记录工厂（catalog 文件中的写法）"""
    return _template_record


@pytest.fixture
def make_descriptor() -> Callable[..., TemplateDescriptor]:
    """模板描述工厂"""

    def _make(**overrides: Any) -> TemplateDescriptor:
        return TemplateDescriptor.model_validate(_template_record(**overrides))

    return _make


@pytest.fixture
def descriptor(make_descriptor) -> TemplateDescriptor:
    """示例模板：占位区域 (100,100,200,200)，qr_scale 默认 0.95"""
    return make_descriptor()


# ============================================================================
# 合成 Fixtures
# ============================================================================

@pytest.fixture(params=["etree", "lxml"])
def backend(request) -> IDocumentBackend:
    """两个文档后端各跑一遍"""
    return get_backend(request.param)


@pytest.fixture
def compositor(backend: IDocumentBackend) -> FrameCompositor:
    return FrameCompositor(
        backend=backend,
        resolver=GeometryResolver(),
        marker_id="qr-placeholder",
    )


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
