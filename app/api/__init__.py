from . import generate, watermark

routers = [
    generate.router,
    watermark.router,
]

__all__ = [
    "routers",
]
