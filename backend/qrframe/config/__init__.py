"""
配置层 - 加载模板目录与运行期配置

职责：
- 加载 assets/templates.yaml（模板目录，启动期一次性校验）
- 加载 config/qrframe_runtime.yaml（运行期参数）
- 提供类型安全的配置访问接口
"""

from .catalog_loader import TemplateCatalog, get_catalog, reload_catalog
from .runtime_config import RuntimeConfig, configure_logging, get_config, reload_config

__all__ = [
    "TemplateCatalog",
    "get_catalog",
    "reload_catalog",
    "RuntimeConfig",
    "configure_logging",
    "get_config",
    "reload_config",
]
