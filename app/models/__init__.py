from .generate import GenerateRequest
from .placement import NamedPosition, PositionPreset, PositionRequest, ScaledPosition

__all__ = [
    "GenerateRequest",
    "NamedPosition",
    "PositionPreset",
    "PositionRequest",
    "ScaledPosition",
]
