from pathlib import Path
from typing import Literal, Optional, Union

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.exceptions import MissingCustomCoordinates, WatermarkError
from app.core.logging import configure_logging
from app.models import NamedPosition, PositionPreset, ScaledPosition
from app.services.imaging_service import ImagingService
from app.services.placement import parse_fraction, parse_preset
from app.utils.errors import to_http_exception
from app.utils.file_utils import ensure_image

router = APIRouter(prefix="/watermark", tags=["Image Watermark"])

logger = configure_logging("watermark")
imaging_service = ImagingService(get_settings())


def _build_position(
    mode: str,
    position: str,
    custom_x: Optional[str],
    custom_y: Optional[str],
    left: float,
    top: float,
    screen_width: Optional[float],
    screen_height: Optional[float],
) -> Union[ScaledPosition, NamedPosition]:
    if mode == "scaled":
        if screen_width is None or screen_height is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Scaled mode requires screen_width and screen_height.",
            )
        return ScaledPosition(left=left, top=top, screen_width=screen_width, screen_height=screen_height)

    preset = parse_preset(position)
    if preset is not PositionPreset.custom:
        return NamedPosition(position=preset.value)

    fraction_x = parse_fraction(custom_x)
    fraction_y = parse_fraction(custom_y)
    if fraction_x is None or fraction_y is None:
        raise MissingCustomCoordinates(custom_x, custom_y)
    return NamedPosition(position=preset.value, custom_x=fraction_x, custom_y=fraction_y)


@router.post("/apply", summary="وضع شعار مرفوع على صورة مرفوعة وإرجاع الصورة الناتجة")
async def apply_watermark(
    image: UploadFile = File(...),
    logo: UploadFile = File(...),
    mode: Literal["named", "scaled"] = Form("named"),
    position: str = Form("bottom-right"),
    custom_x: Optional[str] = Form(None),
    custom_y: Optional[str] = Form(None),
    left: float = Form(0),
    top: float = Form(0),
    screen_width: Optional[float] = Form(None),
    screen_height: Optional[float] = Form(None),
    margin: Optional[int] = Form(None, ge=0),
    logo_width_fraction: Optional[float] = Form(None, gt=0, le=1),
    output_format: Optional[Literal["webp", "png", "jpeg"]] = Form(None),
    quality: Optional[int] = Form(None, ge=1, le=100),
) -> Response:
    ensure_image(image, "image")
    ensure_image(logo, "logo")

    try:
        request = _build_position(
            mode, position, custom_x, custom_y, left, top, screen_width, screen_height
        )
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    except WatermarkError as exc:
        raise to_http_exception(exc) from exc

    image_bytes = await image.read()
    logo_bytes = await logo.read()

    try:
        logo_image = await run_in_threadpool(imaging_service.load_logo, logo_bytes)
        result = await run_in_threadpool(
            imaging_service.watermark,
            image_bytes,
            logo_image,
            request,
            margin=margin,
            logo_width_fraction=logo_width_fraction,
            output_format=output_format,
            quality=quality,
        )
    except WatermarkError as exc:
        raise to_http_exception(exc) from exc

    stem = Path(image.filename or "image").stem or "image"
    output_name = f"{stem}_wm.{result.extension}"

    logger.info("تم وضع الشعار على الصورة %s في الموضع %s", image.filename, position if mode == "named" else mode)

    return Response(
        content=result.data,
        media_type=result.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{output_name}"',
            "X-Watermark-Left": str(result.placement.left),
            "X-Watermark-Top": str(result.placement.top),
        },
    )
