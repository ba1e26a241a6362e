from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .placement import ScaledPosition


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    left: float = Field(0, description="الإزاحة الأفقية للشعار على شاشة المعاينة.")
    top: float = Field(0, description="الإزاحة الرأسية للشعار على شاشة المعاينة.")
    screen_width: float = Field(..., gt=0, alias="screenWidth", description="عرض شاشة المعاينة.")
    screen_height: float = Field(..., gt=0, alias="screenHeight", description="ارتفاع شاشة المعاينة.")
    logo_width_fraction: Optional[float] = Field(
        default=None,
        gt=0,
        le=1,
        alias="logoWidthFraction",
        description="عرض الشعار كنسبة من العرض الفعّال (اختياري).",
    )
    images: List[str] = Field(default_factory=list, description="الصور بصيغة data URL.")
    logo: Optional[str] = Field(default=None, description="شعار بديل بصيغة data URL (اختياري).")
    output_format: Optional[Literal["webp", "png", "jpeg"]] = Field(default=None, alias="outputFormat")
    quality: Optional[int] = Field(default=None, ge=1, le=100)

    def to_position(self) -> ScaledPosition:
        return ScaledPosition(
            left=self.left,
            top=self.top,
            screen_width=self.screen_width,
            screen_height=self.screen_height,
        )
