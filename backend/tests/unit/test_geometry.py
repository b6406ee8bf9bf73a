"""
几何计算单元测试

每个模块完成后必须运行：pytest tests/unit/test_geometry.py -v
"""

import pytest

from qrframe.compose import NEAR_FIT_MIN_SCALE, NEAR_FIT_SIZE_DIFF, GeometryResolver
from qrframe.models import Placeholder


@pytest.fixture
def resolver() -> GeometryResolver:
    return GeometryResolver()


class TestGeometryResolver:
    """几何计算测试"""

    def test_same_size_default_scale(self, resolver: GeometryResolver):
        """测试二维码与占位区域同尺寸（0.95 留白）"""
        ph = Placeholder(x=100, y=100, width=200, height=200)
        p = resolver.resolve(ph, 0.95, 200, 200)
        assert p.scale == pytest.approx(0.95)
        assert p.offset_x == pytest.approx(105)
        assert p.offset_y == pytest.approx(105)
        assert p.transform == "translate(105, 105) scale(0.95)"

    def test_large_source_small_placeholder(self, resolver: GeometryResolver):
        """测试大二维码缩进小占位区域（居中公式）"""
        ph = Placeholder(x=100, y=100, width=100, height=100)
        p = resolver.resolve(ph, 1.0, 400, 400)
        assert p.scale == pytest.approx(0.25)
        assert p.offset_x == pytest.approx(100)
        assert p.offset_y == pytest.approx(100)
        assert p.transform == "translate(100, 100) scale(0.25)"

    def test_offset_follows_centering_formula(self, resolver: GeometryResolver):
        """测试偏移 = 占位原点 + (占位尺寸 - 缩放后尺寸) / 2"""
        ph = Placeholder(x=100, y=100, width=200, height=200)
        p = resolver.resolve(ph, 1.0, 400, 400)
        assert p.scale == pytest.approx(0.5)
        assert p.offset_x == pytest.approx(100)

        ph = Placeholder(x=100, y=100, width=100, height=100)
        p = resolver.resolve(ph, 0.5, 400, 400)
        assert p.scale == pytest.approx(0.125)
        assert p.offset_x == pytest.approx(125)
        assert p.offset_y == pytest.approx(125)

    def test_non_square_placeholder_centers_on_long_axis(self, resolver: GeometryResolver):
        """测试非正方形占位区域：取短边，长边方向居中"""
        ph = Placeholder(x=0, y=0, width=300, height=100)
        p = resolver.resolve(ph, 1.0, 100, 100)
        assert p.scale == pytest.approx(1.0)
        assert p.offset_x == pytest.approx(100)
        assert p.offset_y == pytest.approx(0)

    def test_near_fit_branch(self, resolver: GeometryResolver):
        """测试精确匹配分支判定"""
        ph = Placeholder(x=0, y=0, width=200, height=200)
        assert resolver.is_near_fit(ph, 0.98, 210, 220)
        assert resolver.is_near_fit(ph, 1.0, 200, 200)
        # qr_scale 低于阈值
        assert not resolver.is_near_fit(ph, 0.95, 200, 200)
        # 尺寸差达到阈值
        assert not resolver.is_near_fit(ph, 1.0, 225, 225)

    def test_near_fit_scale(self, resolver: GeometryResolver):
        """测试精确匹配分支的缩放"""
        ph = Placeholder(x=10, y=20, width=200, height=180)
        p = resolver.resolve(ph, 0.98, 200, 200)
        assert p.scale == pytest.approx(0.9 * 0.98)
        assert p.offset_x == pytest.approx(10 + (200 - 200 * 0.882) / 2)
        assert p.offset_y == pytest.approx(20 + (180 - 200 * 0.882) / 2)

    def test_thresholds_tunable(self):
        """测试阈值可调"""
        assert NEAR_FIT_SIZE_DIFF == 50
        assert NEAR_FIT_MIN_SCALE == 0.98
        strict = GeometryResolver(near_fit_size_diff=1, near_fit_min_scale=1.0)
        ph = Placeholder(x=0, y=0, width=200, height=200)
        assert not strict.is_near_fit(ph, 0.99, 200, 200)
        assert strict.is_near_fit(ph, 1.0, 200, 200)

    @pytest.mark.parametrize(
        "ph,qr_scale,size",
        [
            (Placeholder(x=150, y=130, width=200, height=200), 0.95, (29, 29)),
            (Placeholder(x=60, y=60, width=280, height=280), 0.9, (400, 400)),
            (Placeholder(x=380, y=55, width=180, height=180), 1.0, (180, 180)),
            (Placeholder(x=0, y=0, width=300, height=120), 0.5, (33, 45)),
            (Placeholder(x=-20, y=5, width=17.5, height=80), 1.0, (1000, 10)),
        ],
    )
    def test_containment_and_uniform_scale(self, resolver, ph, qr_scale, size):
        """测试缩放后的外接框落在占位区域内，且宽高等比"""
        width, height = size
        p = resolver.resolve(ph, qr_scale, width, height)
        assert ph.contains(*p.bounds(width, height))
        scaled_w, scaled_h = p.scaled_size(width, height)
        assert scaled_w / width == pytest.approx(scaled_h / height)
        # 至少一个方向顶到 qr_scale 对应的边界
        assert (
            scaled_w == pytest.approx(ph.width * qr_scale) or
            scaled_h == pytest.approx(ph.height * qr_scale)
        )

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-5, 100)])
    def test_invalid_source_size(self, resolver: GeometryResolver, width, height):
        """测试二维码尺寸非正"""
        ph = Placeholder(x=0, y=0, width=100, height=100)
        with pytest.raises(ValueError):
            resolver.resolve(ph, 0.95, width, height)
