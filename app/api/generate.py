import asyncio
from typing import List

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from PIL import Image

from app.core.config import get_settings
from app.core.exceptions import WatermarkError
from app.core.logging import configure_logging
from app.models import GenerateRequest
from app.services.archive_service import ArchiveService
from app.services.imaging_service import ImagingService, WatermarkedImage
from app.utils.errors import to_http_exception
from app.utils.file_utils import decode_data_url, to_data_url

router = APIRouter(tags=["Bulk Watermark"])

logger = configure_logging("generate")
settings = get_settings()
imaging_service = ImagingService(settings)
archive_service = ArchiveService(settings)


async def _load_logo(payload: GenerateRequest) -> Image.Image:
    source = decode_data_url(payload.logo, "logo") if payload.logo else None
    try:
        return await run_in_threadpool(imaging_service.load_logo, source)
    except WatermarkError as exc:
        raise to_http_exception(exc) from exc


def _package_results(results: List[WatermarkedImage]) -> dict:
    """ترميز الصور الناتجة كـ data URL وبناء أرشيف ZIP منها."""
    archive_bytes = archive_service.create_archive(
        (f"generated_image_{index}.{result.extension}", result.data)
        for index, result in enumerate(results, start=1)
    )

    logger.info(
        "تم إنشاء الصور وأرشيف ZIP في الذاكرة، عدد الصور: %s، حجم الأرشيف: %s بايت",
        len(results),
        len(archive_bytes),
    )

    zip_url = to_data_url(archive_bytes, "application/zip")
    return {
        "files": [to_data_url(result.data, result.media_type) for result in results],
        # zipFile هو المفتاح الذي تقرؤه واجهة المعاينة
        "zip_file": zip_url,
        "zipFile": zip_url,
    }


@router.post("/generate", summary="وضع الشعار على مجموعة صور وإرجاعها مع أرشيف ZIP")
async def generate_images(payload: GenerateRequest) -> dict:
    if not payload.images:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No images provided")
    if len(payload.images) > settings.max_request_images:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many images: {len(payload.images)} (maximum {settings.max_request_images})",
        )

    buffers = [decode_data_url(image, f"image {index}") for index, image in enumerate(payload.images, start=1)]
    logo = await _load_logo(payload)
    position = payload.to_position()

    try:
        results: List[WatermarkedImage] = await asyncio.gather(
            *(
                run_in_threadpool(
                    imaging_service.watermark,
                    data,
                    logo.copy(),
                    position,
                    logo_width_fraction=payload.logo_width_fraction,
                    output_format=payload.output_format,
                    quality=payload.quality,
                )
                for data in buffers
            )
        )
    except WatermarkError as exc:
        raise to_http_exception(exc) from exc

    packaged = await run_in_threadpool(_package_results, results)

    return {
        "status": "ok",
        "message": "Images generated",
        **packaged,
        "placements": [
            {
                "left": result.placement.left,
                "top": result.placement.top,
                "logo_width": result.logo_size.width,
                "logo_height": result.logo_size.height,
            }
            for result in results
        ],
    }
