"""أخطاء المجال الخاصة بحساب موضع الشعار ومعالجة الصور."""


class WatermarkError(Exception):
    """الأصل المشترك لكل أخطاء الخدمة."""


class PlacementError(WatermarkError, ValueError):
    """خطأ في مدخلات حاسبة الموضع."""


class InvalidPositionKind(PlacementError):
    def __init__(self, position: object) -> None:
        self.position = position
        super().__init__(f"Unsupported watermark position: {position!r}")


class MissingCustomCoordinates(PlacementError):
    def __init__(self, custom_x: object = None, custom_y: object = None) -> None:
        self.custom_x = custom_x
        self.custom_y = custom_y
        super().__init__(
            "Position 'custom' requires numeric custom_x and custom_y "
            f"(got custom_x={custom_x!r}, custom_y={custom_y!r})"
        )


class InvalidDimensions(PlacementError):
    """أبعاد صفرية أو سالبة أو غير مقروءة."""


class ImageDecodeError(WatermarkError):
    """تعذر فك ترميز بيانات الصورة."""


class LogoNotFoundError(WatermarkError):
    """ملف الشعار المحدد في الإعدادات غير موجود."""
