"""
运行期配置 - 读取 config/qrframe_runtime.yaml

职责：
- 加载模板目录路径、素材来源、文档后端、尺寸策略等运行参数
- 提供环境变量覆盖机制（QRFRAME_ 前缀，嵌套用 __ 分隔）
- 类型安全的配置访问
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
DEFAULT_RUNTIME_PATH = Path("config/qrframe_runtime.yaml")


class CatalogConfig(BaseModel):
    """模板目录配置"""

    path: Path = ASSETS_DIR / "templates.yaml"


class ArtworkConfig(BaseModel):
    """框架素材配置"""

    source: str = "file"  # file | http
    svg_dir: Path = ASSETS_DIR / "svg"
    base_url: str = ""
    cache: bool = True


class TimeoutConfig(BaseModel):
    """超时配置"""

    artwork_fetch_sec: float = 10.0


class CompositingConfig(BaseModel):
    """合成配置"""

    document_backend: str = "etree"  # etree | lxml
    marker_id: str = "qr-placeholder"


class SizeRange(BaseModel):
    """二维码生成尺寸上下限"""

    min_size: int = 200
    max_size: int = 1000


class SizingConfig(BaseModel):
    """尺寸建议配置"""

    oversample: float = 1.2
    default_size: int = 400
    client: SizeRange = Field(default_factory=SizeRange)
    preview: SizeRange = Field(default_factory=lambda: SizeRange(max_size=800))


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    artwork: ArtworkConfig = Field(default_factory=ArtworkConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    compositing: CompositingConfig = Field(default_factory=CompositingConfig)
    sizing: SizingConfig = Field(default_factory=SizingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "QRFRAME_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})
        sizing_opts = runtime_opts.get("sizing", {})

        config = cls(
            catalog=CatalogConfig(**cls._extract(runtime_opts, "catalog")),
            artwork=ArtworkConfig(**cls._extract(runtime_opts, "artwork")),
            timeouts=TimeoutConfig(**cls._extract(runtime_opts, "timeouts")),
            compositing=CompositingConfig(**cls._extract(runtime_opts, "compositing")),
            sizing=SizingConfig(
                **cls._extract(runtime_opts, "sizing"),
                client=SizeRange(**cls._extract(sizing_opts, "client")),
                preview=SizeRange(
                    **{"max_size": 800, **cls._extract(sizing_opts, "preview")}
                ),
            ),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置（支持 {default: x} 写法）"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if not self.catalog.path.is_absolute():
            self.catalog.path = (base_dir / self.catalog.path).resolve()
        if not self.artwork.svg_dir.is_absolute():
            self.artwork.svg_dir = (base_dir / self.artwork.svg_dir).resolve()

    def size_range(self, profile: str) -> SizeRange:
        """按使用场景获取尺寸上下限"""
        if profile == "client":
            return self.sizing.client
        if profile == "preview":
            return self.sizing.preview
        raise ValueError(f"未知的尺寸场景: {profile}")


def configure_logging(config: RuntimeConfig | None = None) -> None:
    """按配置初始化根日志"""
    cfg = config or get_config()
    logging.basicConfig(
        level=getattr(logging, cfg.logging.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_RUNTIME_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    _config = RuntimeConfig.from_yaml(yaml_path or DEFAULT_RUNTIME_PATH)
    return _config
