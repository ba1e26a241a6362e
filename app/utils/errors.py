from fastapi import HTTPException, status

from app.core.exceptions import LogoNotFoundError, WatermarkError


def to_http_exception(exc: WatermarkError) -> HTTPException:
    """تحويل أخطاء المجال إلى استجابة HTTP مناسبة."""
    if isinstance(exc, LogoNotFoundError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
