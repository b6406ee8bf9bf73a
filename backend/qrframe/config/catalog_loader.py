"""
模板目录加载器 - 读取 templates.yaml

职责：
- 解析YAML（JSON是其子集，templates.json 同样可读）并逐条校验
- 启动期一次性校验：占位区域尺寸非正、qrScale 越界、ID重复 → 直接失败
- 提供只读查询（按ID、全部、按分类）

使用方式：
    catalog = TemplateCatalog.load("assets/templates.yaml")
    template = catalog.get("envelope-style")
    cards = catalog.list_by_category("card")
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..interfaces import CatalogLoadError, TemplateNotFoundError
from ..models import TemplateDescriptor
from .runtime_config import get_config


class TemplateCatalog:
    """模板目录（加载后不可变，可被任意并发请求共享）"""

    def __init__(self, templates: Iterable[TemplateDescriptor]):
        self._templates: tuple[TemplateDescriptor, ...] = tuple(templates)
        index: dict[str, TemplateDescriptor] = {}
        for template in self._templates:
            if template.id in index:
                raise CatalogLoadError(f"模板ID重复: {template.id}")
            index[template.id] = template
        self._index = index

    @classmethod
    def load(cls, catalog_path: str | Path) -> TemplateCatalog:
        """加载并校验模板目录"""
        path = Path(catalog_path)
        if not path.exists():
            raise CatalogLoadError(f"模板目录文件不存在: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CatalogLoadError(f"模板目录解析失败: {path}: {e}") from e

        return cls.from_records(cls._records(data, path), source=str(path))

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict[str, Any]],
        source: str = "<memory>",
    ) -> TemplateCatalog:
        """从原始记录构建目录（逐条校验）"""
        templates = []
        for pos, record in enumerate(records):
            if not isinstance(record, dict):
                raise CatalogLoadError(f"{source}: 第{pos + 1}条模板不是映射结构")
            try:
                templates.append(TemplateDescriptor.model_validate(record))
            except ValidationError as e:
                template_id = record.get("id", f"#{pos + 1}")
                raise CatalogLoadError(f"{source}: 模板 {template_id} 校验失败: {e}") from e
        return cls(templates)

    @staticmethod
    def _records(data: Any, path: Path) -> list[Any]:
        """兼容两种顶层结构：列表 / {templates: [...]}"""
        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("templates")
        if not isinstance(data, list):
            raise CatalogLoadError(f"模板目录结构错误（需为列表或含 templates 列表）: {path}")
        return data

    # === 查询 ===

    def get(self, template_id: str) -> TemplateDescriptor:
        """按ID获取模板"""
        try:
            return self._index[template_id]
        except KeyError:
            raise TemplateNotFoundError(template_id) from None

    def find(self, template_id: str) -> TemplateDescriptor | None:
        return self._index.get(template_id)

    def list(self) -> tuple[TemplateDescriptor, ...]:
        """全部模板（目录顺序）"""
        return self._templates

    def list_by_category(self, category: str) -> tuple[TemplateDescriptor, ...]:
        """按分类筛选（保持目录顺序）"""
        return tuple(t for t in self._templates if t.category == category)

    def categories(self) -> tuple[str, ...]:
        """分类列表（首次出现顺序）"""
        return tuple(dict.fromkeys(t.category for t in self._templates))

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._index

    def __iter__(self) -> Iterator[TemplateDescriptor]:
        return iter(self._templates)


# 全局目录实例
_catalog: TemplateCatalog | None = None


def get_catalog() -> TemplateCatalog:
    """获取全局模板目录（惰性加载）"""
    global _catalog
    if _catalog is None:
        _catalog = TemplateCatalog.load(get_config().catalog.path)
    return _catalog


def reload_catalog(catalog_path: str | Path | None = None) -> TemplateCatalog:
    """重新加载模板目录（整体替换引用，旧实例不受影响）"""
    global _catalog
    _catalog = TemplateCatalog.load(catalog_path or get_config().catalog.path)
    return _catalog
