"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- TemplateDescriptor: 框架模板描述（目录条目）
- Placeholder: 占位区域
- Placement: 几何计算结果（缩放+偏移）
"""

from .placement import Placement, format_number
from .template import Placeholder, TemplateDescriptor

__all__ = [
    "TemplateDescriptor",
    "Placeholder",
    "Placement",
    "format_number",
]
