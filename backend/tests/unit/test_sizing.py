"""
尺寸建议单元测试

每个模块完成后必须运行：pytest tests/unit/test_sizing.py -v
"""

import pytest

from qrframe.compose import SizingAdvisor
from qrframe.config import RuntimeConfig
from qrframe.config.runtime_config import SizeRange, SizingConfig


class TestSizingAdvisor:
    """尺寸建议测试"""

    def test_oversample(self, make_descriptor):
        """测试 300x300 占位区域 → 360"""
        d = make_descriptor(placeholder={"x": 0, "y": 0, "width": 300, "height": 300})
        assert SizingAdvisor().advise(d) == 360

    def test_uses_short_side(self, make_descriptor):
        """测试取短边"""
        d = make_descriptor(placeholder={"x": 0, "y": 0, "width": 500, "height": 250})
        assert SizingAdvisor().advise(d) == 300

    def test_floor(self, make_descriptor):
        """测试向下取整"""
        d = make_descriptor(placeholder={"x": 0, "y": 0, "width": 251, "height": 251})
        assert SizingAdvisor().advise(d) == 301

    def test_clamp_min(self, make_descriptor):
        """测试下限"""
        d = make_descriptor(placeholder={"x": 0, "y": 0, "width": 50, "height": 50})
        assert SizingAdvisor().advise(d) == 200

    def test_clamp_max(self, make_descriptor):
        """测试上限"""
        d = make_descriptor(placeholder={"x": 0, "y": 0, "width": 2000, "height": 2000})
        assert SizingAdvisor().advise(d) == 1000

    def test_qr_size_verbatim(self, make_descriptor):
        """测试自定义尺寸原样返回（不夹取）"""
        assert SizingAdvisor().advise(make_descriptor(qrSize=480)) == 480
        assert SizingAdvisor().advise(make_descriptor(qrSize=1600)) == 1600

    def test_advise_optional(self, descriptor):
        """测试未选框架时返回默认尺寸"""
        advisor = SizingAdvisor()
        assert advisor.advise_optional(None) == 400
        assert advisor.advise_optional(descriptor) == 240

    def test_invalid_range(self):
        """测试下限大于上限"""
        with pytest.raises(ValueError):
            SizingAdvisor(min_size=500, max_size=400)


class TestSizingProfiles:
    """按场景构建测试"""

    def test_preview_profile_cap(self, runtime_config: RuntimeConfig, make_descriptor):
        """测试预览场景上限 800"""
        d = make_descriptor(placeholder={"x": 0, "y": 0, "width": 900, "height": 900})
        assert SizingAdvisor.for_profile("client", runtime_config).advise(d) == 1000
        assert SizingAdvisor.for_profile("preview", runtime_config).advise(d) == 800

    def test_profile_from_config(self, make_descriptor):
        """测试尺寸策略来自配置"""
        config = RuntimeConfig(
            sizing=SizingConfig(
                oversample=2.0,
                default_size=300,
                client=SizeRange(min_size=100, max_size=500),
            )
        )
        advisor = SizingAdvisor.for_profile("client", config)
        d = make_descriptor(placeholder={"x": 0, "y": 0, "width": 120, "height": 120})
        assert advisor.advise(d) == 240
        assert advisor.advise_optional(None) == 300

    def test_unknown_profile(self, runtime_config: RuntimeConfig):
        """测试未知场景"""
        with pytest.raises(ValueError):
            SizingAdvisor.for_profile("poster", runtime_config)


def test_advise_source_size(descriptor):
    """测试便捷函数（全局配置）"""
    from qrframe.compose import advise_source_size

    assert advise_source_size(descriptor) == 240
    assert advise_source_size(descriptor, profile="preview") == 240
