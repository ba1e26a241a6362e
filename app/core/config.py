from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """إعدادات التطبيق العامة مع تحميل القيم من ملف .env عند توفره."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Logo Stamp API"
    app_version: str = "0.1.0"

    base_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    public_dir: Optional[Path] = None
    logo_path: Optional[Path] = None

    # الهامش بالبكسل من كل حافة للصورة الهدف
    margin: int = Field(default=10, ge=0)
    # عرض الشعار كنسبة من العرض الفعّال (العرض ناقص الهامشين)
    logo_width_fraction: float = Field(default=0.35, gt=0, le=1)
    output_format: Literal["webp", "png", "jpeg"] = "webp"
    output_quality: int = Field(default=80, ge=1, le=100)
    archive_compression_level: int = Field(default=9, ge=0, le=9)
    max_request_images: int = Field(default=50, ge=1)

    log_level: str = "INFO"

    allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    def configure_paths(self) -> None:
        """تهيئة المسارات الافتراضية وإنشاء المجلد العام في حال غيابه."""
        self.public_dir = (self.public_dir or (self.base_dir / "public")).resolve()
        self.logo_path = (self.logo_path or (self.public_dir / "logo_white.svg")).resolve()

        self.public_dir.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
