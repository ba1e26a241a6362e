from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PositionPreset(str, Enum):
    top_left = "top-left"
    top_right = "top-right"
    top_center = "top-center"
    bottom_left = "bottom-left"
    bottom_right = "bottom-right"
    bottom_center = "bottom-center"
    center = "center"
    center_left = "center-left"
    center_right = "center-right"
    custom = "custom"


class ScaledPosition(BaseModel):
    """موضع ملتقط على شاشة مرجعية يُعاد تحجيمه إلى أبعاد الصورة الفعلية."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    mode: Literal["scaled"] = "scaled"
    left: float = Field(0, description="الإزاحة الأفقية بوحدات الشاشة المرجعية.")
    top: float = Field(0, description="الإزاحة الرأسية بوحدات الشاشة المرجعية.")
    screen_width: float = Field(..., gt=0, alias="screenWidth", description="عرض الشاشة المرجعية.")
    screen_height: float = Field(..., gt=0, alias="screenHeight", description="ارتفاع الشاشة المرجعية.")


class NamedPosition(BaseModel):
    """موضع مسمى مسبقًا، أو موضع مخصص بنسب من أبعاد الصورة."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    mode: Literal["named"] = "named"
    position: str = Field("bottom-right", description="اسم الموضع (غير حساس لحالة الأحرف).")
    custom_x: Optional[float] = Field(None, ge=0, le=1, alias="customX", description="نسبة أفقية بين 0 و 1.")
    custom_y: Optional[float] = Field(None, ge=0, le=1, alias="customY", description="نسبة رأسية بين 0 و 1.")


PositionRequest = Annotated[Union[ScaledPosition, NamedPosition], Field(discriminator="mode")]
