# app/main.py
from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api import routers
from app.core.config import get_settings
from app.core.logging import configure_logging

# === إعدادات وتسجيل ===
settings = get_settings()
logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
)


# === CORS ===
# القيمة تأتي من ALLOW_ORIGINS في البيئة أو ملف .env (قائمة JSON)
allow_origins = [origin.strip() for origin in settings.allow_origins if origin.strip()] or ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Watermark-Left", "X-Watermark-Top"],  # لقراءة اسم الملف والموضع
)


# === Validation errors ===
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # قيم مثل NaN في حقل input لا يمكن تمثيلها في JSON
    errors = [{key: value for key, value in error.items() if key != "input"} for error in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


# === Routers ===
for router in routers:
    app.include_router(router)

# === Static assets (الشعار الافتراضي وواجهة المعاينة) ===
public_dir: Path = settings.public_dir
app.mount("/static", StaticFiles(directory=str(public_dir)), name="static")


# === Basic endpoints ===
@app.get("/")
async def root() -> dict:
    logger.debug("Root endpoint accessed")
    return {"message": f"Welcome to {settings.app_name}"}


@app.get("/health")
async def health_check() -> dict:
    logger.debug("Health check invoked")
    return {
        "status": "ok",
        "message": f"{settings.app_name} is running",
        "logo_available": bool(settings.logo_path and settings.logo_path.is_file()),
    }
