from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from app.core.config import Settings, get_settings
from app.core.exceptions import ImageDecodeError, InvalidDimensions, LogoNotFoundError
from app.core.logging import configure_logging
from app.models.placement import PositionRequest
from app.services.placement import Dimensions, PlacementResult, calculate_placement, round_half_up

logger = configure_logging("imaging")

FORMAT_OPTIONS = {
    "webp": {"pil_format": "WEBP", "media_type": "image/webp", "extension": "webp"},
    "png": {"pil_format": "PNG", "media_type": "image/png", "extension": "png"},
    "jpeg": {"pil_format": "JPEG", "media_type": "image/jpeg", "extension": "jpg"},
}


@dataclass
class WatermarkedImage:
    data: bytes
    output_format: str
    placement: PlacementResult
    logo_size: Dimensions
    target_size: Dimensions

    @property
    def media_type(self) -> str:
        return FORMAT_OPTIONS[self.output_format]["media_type"]

    @property
    def extension(self) -> str:
        return FORMAT_OPTIONS[self.output_format]["extension"]


class ImagingService:
    """خدمات الصور: فك الترميز، تحجيم الشعار، الدمج، وإعادة الترميز باستخدام Pillow."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # فك الترميز
    # ------------------------------------------------------------------
    @staticmethod
    def decode(data: bytes) -> Image.Image:
        try:
            image = Image.open(BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageDecodeError(f"Unable to decode image data: {exc}") from exc

        image = ImageOps.exif_transpose(image)
        if not image.width or not image.height:
            raise InvalidDimensions(f"Invalid image dimensions: {image.width}x{image.height}")
        return image

    def load_logo(self, source: Union[bytes, Path, str, None] = None) -> Image.Image:
        """تحميل الشعار من بايتات مرفوعة أو من مسار (الافتراضي من الإعدادات)، مع دعم SVG."""
        if source is None:
            source = self.settings.logo_path

        if isinstance(source, bytes):
            if self._looks_like_svg(source):
                return self._rasterize_svg(bytestring=source)
            return self.decode(source).convert("RGBA")

        path = Path(source)
        if not path.is_file():
            raise LogoNotFoundError(f"Logo file not found: {path}")
        if path.suffix.lower() == ".svg":
            return self._rasterize_svg(url=str(path))
        return self.decode(path.read_bytes()).convert("RGBA")

    # ------------------------------------------------------------------
    # التحجيم والدمج والترميز
    # ------------------------------------------------------------------
    @staticmethod
    def logo_width_for(target_width: int, margin: int, fraction: float) -> int:
        effective_width = max(0, target_width - 2 * margin)
        return max(1, round_half_up(effective_width * fraction))

    @staticmethod
    def resize(image: Image.Image, width: int) -> Image.Image:
        width = max(1, int(width))
        height = max(1, round_half_up(image.height * width / image.width))
        return image.resize((width, height), Image.Resampling.LANCZOS)

    @staticmethod
    def composite(base: Image.Image, overlay: Image.Image, left: int, top: int) -> Image.Image:
        canvas = base.convert("RGBA")
        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        layer.paste(overlay.convert("RGBA"), (left, top))
        return Image.alpha_composite(canvas, layer)

    @staticmethod
    def encode(image: Image.Image, output_format: str = "webp", quality: int = 80) -> bytes:
        options = FORMAT_OPTIONS.get(output_format)
        if options is None:
            raise ValueError(f"Unsupported output format: {output_format!r}")

        buffer = BytesIO()
        if options["pil_format"] == "JPEG":
            image.convert("RGB").save(buffer, format="JPEG", quality=quality, optimize=True)
        elif options["pil_format"] == "PNG":
            image.save(buffer, format="PNG", optimize=True)
        else:
            image.save(buffer, format="WEBP", quality=quality)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # المسار الكامل لصورة واحدة
    # ------------------------------------------------------------------
    def watermark(
        self,
        image_data: bytes,
        logo: Image.Image,
        position: PositionRequest,
        *,
        margin: Optional[int] = None,
        logo_width_fraction: Optional[float] = None,
        output_format: Optional[str] = None,
        quality: Optional[int] = None,
    ) -> WatermarkedImage:
        margin = self.settings.margin if margin is None else margin
        fraction = logo_width_fraction or self.settings.logo_width_fraction
        output_format = output_format or self.settings.output_format
        quality = quality or self.settings.output_quality

        background = self.decode(image_data)
        target = Dimensions(background.width, background.height)

        logo_width = self.logo_width_for(target.width, margin, fraction)
        resized_logo = self.resize(logo, logo_width)
        logo_size = Dimensions(resized_logo.width, resized_logo.height)

        placement = calculate_placement(position, target, logo_size, margin)
        output = self.composite(background, resized_logo, placement.left, placement.top)
        data = self.encode(output, output_format, quality)

        logger.info(
            "تمت معالجة الصورة ووضع الشعار عند: left=%s, top=%s, logoWidth=%s, margins=%spx",
            placement.left,
            placement.top,
            logo_size.width,
            margin,
        )

        return WatermarkedImage(
            data=data,
            output_format=output_format,
            placement=placement,
            logo_size=logo_size,
            target_size=target,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _looks_like_svg(data: bytes) -> bool:
        head = data[:512].lstrip().lower()
        return head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in head)

    @staticmethod
    def _rasterize_svg(**source: str | bytes) -> Image.Image:
        import cairosvg  # يتطلب مكتبة cairo على النظام

        try:
            png_data = cairosvg.svg2png(**source)
        except Exception as exc:  # أخطاء تحليل XML و SVG متنوعة داخل CairoSVG
            raise ImageDecodeError(f"Unable to rasterize SVG logo: {exc}") from exc
        return ImagingService.decode(png_data).convert("RGBA")
