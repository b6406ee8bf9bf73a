"""
二维码框架合成 - 后端核心模块

模块结构：
- config/     运行期配置与模板目录加载
- models/     数据模型定义（模板描述/放置结果）
- svg/        文档树、解析后端与序列化
- compose/    几何计算、文档合成、尺寸建议
- artwork/    框架SVG加载（本地文件/网络）
- render/     二维码SVG生成
- service     端到端编排（含预览降级）
"""

__version__ = "0.1.0"
