"""
框架模板模型 - 模板目录中的单条记录

对应 templates.yaml 的单个条目：
{id, name, category, description, assetRef, placeholder:{x,y,width,height},
 qrSize?, qrScale?, tags:[...]}
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field, field_validator

DEFAULT_QR_SCALE = 0.95


class Placeholder(BaseModel):
    """占位区域（框架SVG自身坐标系）"""
    x: float
    y: float
    width: float = Field(..., gt=0, description="宽度(>0)")
    height: float = Field(..., gt=0, description="高度(>0)")

    model_config = {"frozen": True}

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        tol: float = 1e-6,
    ) -> bool:
        """判断矩形是否落在占位区域内（允许浮点误差）"""
        return (
            x >= self.x - tol and
            y >= self.y - tol and
            x + width <= self.right + tol and
            y + height <= self.bottom + tol
        )


class TemplateDescriptor(BaseModel):
    """框架模板描述（启动期加载，只读）"""
    id: str = Field(..., description="模板唯一ID")
    name: str = ""
    category: str = ""
    description: str = ""
    asset_ref: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("assetRef", "svgFile", "asset_ref"),
        description="框架SVG引用（相对路径）",
    )
    preview: str | None = None
    placeholder: Placeholder
    qr_size: int | None = Field(
        None,
        gt=0,
        validation_alias=AliasChoices("qrSize", "qr_size"),
        description="自定义二维码生成尺寸，未设置时自动计算",
    )
    qr_scale: float = Field(
        DEFAULT_QR_SCALE,
        gt=0,
        le=1,
        validation_alias=AliasChoices("qrScale", "qr_scale"),
        description="二维码在占位区域中的最大填充比例",
    )
    tags: frozenset[str] = Field(default_factory=frozenset)

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("模板ID不能为空")
        return v

    @field_validator("qr_scale", mode="before")
    @classmethod
    def _default_qr_scale(cls, v: object) -> object:
        # 显式 null 视同未配置
        return DEFAULT_QR_SCALE if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_or_empty(cls, v: object) -> object:
        return frozenset() if v is None else v

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags
