import base64
import binascii
import re

from fastapi import HTTPException, UploadFile, status

DATA_URL_PATTERN = re.compile(r"^data:image/([a-zA-Z0-9.+-]+);base64,(.+)$", re.DOTALL)


def ensure_image(upload: UploadFile, field: str = "image") -> None:
    """التحقق من أن الملف المرفوع صورة."""
    content_type = (upload.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"The uploaded '{field}' file must be an image (got {content_type or 'unknown'}).",
        )


def decode_data_url(value: str, label: str) -> bytes:
    """
    تحويل سلسلة data URL للصورة (data:image/<type>;base64,...) إلى بايتات.
    الوسم (مثل "image 2" أو "logo") يظهر في رسالة الخطأ.
    """
    if not isinstance(value, str) or not value.startswith("data:image"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid base64 image data for {label}",
        )

    match = DATA_URL_PATTERN.match(value)
    if not match:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid base64 format for {label}",
        )

    try:
        return base64.b64decode(match.group(2), validate=False)
    except (binascii.Error, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid base64 format for {label}",
        ) from None


def to_data_url(data: bytes, media_type: str) -> str:
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{media_type};base64,{encoded}"
