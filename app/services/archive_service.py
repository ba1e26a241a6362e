from __future__ import annotations

import zipfile
from io import BytesIO
from pathlib import PurePosixPath
from typing import Iterable, Tuple

from app.core.config import Settings, get_settings


class ArchiveService:
    """إنشاء أرشيف ZIP في الذاكرة من قائمة (اسم، بايتات)."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def create_archive(self, entries: Iterable[Tuple[str, bytes]]) -> bytes:
        buffer = BytesIO()
        used_names: set[str] = set()

        with zipfile.ZipFile(
            buffer,
            mode="w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=self.settings.archive_compression_level,
        ) as archive:
            for name, data in entries:
                archive.writestr(self._unique_name(name, used_names), data)

        return buffer.getvalue()

    @staticmethod
    def _unique_name(name: str, used_names: set[str]) -> str:
        path = PurePosixPath(name)
        candidate = name
        counter = 1
        while candidate in used_names:
            candidate = f"{path.stem}_{counter}{path.suffix}"
            counter += 1
        used_names.add(candidate)
        return candidate
