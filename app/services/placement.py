"""
حاسبة موضع الشعار على الصورة.

دوال نقية بلا حالة مشتركة: تستقبل أبعاد الصورة الهدف وأبعاد الشعار بعد تحجيمه
وتعيد إحداثيات الزاوية العلوية اليسرى للشعار بعد حصرها داخل الهامش.
إذا كان الشعار مع الهامشين أكبر من الصورة تُعاد قيمة الهامش نفسها.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Union

from app.core.exceptions import InvalidDimensions, InvalidPositionKind, MissingCustomCoordinates
from app.models.placement import PositionPreset, PositionRequest, ScaledPosition


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int


@dataclass(frozen=True)
class PlacementResult:
    left: int
    top: int

    def as_tuple(self) -> Tuple[int, int]:
        return self.left, self.top


def round_half_up(value: float) -> int:
    # round() في بايثون يقرّب إلى الزوجي عند .5
    return math.floor(value + 0.5)


def clamp(value: int, margin: int, target: int, watermark: int) -> int:
    upper = target - watermark - margin
    return max(margin, min(value, upper))


def _check_sizes(target: Dimensions, watermark: Dimensions, margin: int) -> None:
    for label, size in (("target", target), ("watermark", watermark)):
        if size.width < 0 or size.height < 0:
            raise InvalidDimensions(f"Negative {label} dimensions: {size.width}x{size.height}")
    if margin < 0:
        raise InvalidDimensions(f"Margin must be non-negative, got {margin}")


def scaled_placement(
    left: float,
    top: float,
    screen_width: float,
    screen_height: float,
    target: Dimensions,
    watermark: Dimensions,
    margin: int,
) -> PlacementResult:
    """
    تحويل موضع ملتقط على شاشة مرجعية إلى المساحة الفعالة للصورة (بعد طرح الهامشين).

    Args:
        left, top: الموضع بوحدات الشاشة المرجعية.
        screen_width, screen_height: أبعاد الشاشة المرجعية (أكبر من صفر).
        target: أبعاد الصورة الهدف.
        watermark: أبعاد الشعار بعد التحجيم.
        margin: الهامش بالبكسل.
    """
    if not all(math.isfinite(value) for value in (left, top, screen_width, screen_height)):
        raise InvalidDimensions(
            f"Position values must be finite, got left={left}, top={top}, screen={screen_width}x{screen_height}"
        )
    if screen_width <= 0 or screen_height <= 0:
        raise InvalidDimensions(f"Screen dimensions must be positive, got {screen_width}x{screen_height}")
    _check_sizes(target, watermark, margin)

    effective_width = target.width - 2 * margin
    effective_height = target.height - 2 * margin

    scaled_left = round_half_up(left / screen_width * effective_width) + margin
    scaled_top = round_half_up(top / screen_height * effective_height) + margin

    return PlacementResult(
        left=clamp(scaled_left, margin, target.width, watermark.width),
        top=clamp(scaled_top, margin, target.height, watermark.height),
    )


def _centered(target: int, watermark: int) -> int:
    return (target - watermark) // 2


def _far(target: int, watermark: int, margin: int) -> int:
    return target - watermark - margin


_Rule = Callable[[Dimensions, Dimensions, int], Tuple[int, int]]

_PRESET_RULES: Dict[PositionPreset, _Rule] = {
    PositionPreset.top_left: lambda t, w, m: (m, m),
    PositionPreset.top_right: lambda t, w, m: (_far(t.width, w.width, m), m),
    PositionPreset.top_center: lambda t, w, m: (_centered(t.width, w.width), m),
    PositionPreset.bottom_left: lambda t, w, m: (m, _far(t.height, w.height, m)),
    PositionPreset.bottom_right: lambda t, w, m: (_far(t.width, w.width, m), _far(t.height, w.height, m)),
    PositionPreset.bottom_center: lambda t, w, m: (_centered(t.width, w.width), _far(t.height, w.height, m)),
    PositionPreset.center: lambda t, w, m: (_centered(t.width, w.width), _centered(t.height, w.height)),
    PositionPreset.center_left: lambda t, w, m: (m, _centered(t.height, w.height)),
    PositionPreset.center_right: lambda t, w, m: (_far(t.width, w.width, m), _centered(t.height, w.height)),
}


def parse_preset(position: object) -> PositionPreset:
    if isinstance(position, PositionPreset):
        return position
    try:
        return PositionPreset(str(position).strip().lower())
    except ValueError:
        raise InvalidPositionKind(position) from None


def parse_fraction(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def named_placement(
    position: Union[str, PositionPreset],
    target: Dimensions,
    watermark: Dimensions,
    margin: int,
    custom_x: object = None,
    custom_y: object = None,
) -> PlacementResult:
    """حساب الموضع من اسم مسبق أو من نسبتين مخصصتين عند اختيار custom."""
    preset = parse_preset(position)
    _check_sizes(target, watermark, margin)

    if preset is PositionPreset.custom:
        fraction_x = parse_fraction(custom_x)
        fraction_y = parse_fraction(custom_y)
        if fraction_x is None or fraction_y is None:
            raise MissingCustomCoordinates(custom_x, custom_y)
        left = round_half_up(fraction_x * target.width)
        top = round_half_up(fraction_y * target.height)
    else:
        left, top = _PRESET_RULES[preset](target, watermark, margin)

    return PlacementResult(
        left=clamp(left, margin, target.width, watermark.width),
        top=clamp(top, margin, target.height, watermark.height),
    )


def calculate_placement(
    request: PositionRequest,
    target: Dimensions,
    watermark: Dimensions,
    margin: int,
) -> PlacementResult:
    if isinstance(request, ScaledPosition):
        return scaled_placement(
            request.left,
            request.top,
            request.screen_width,
            request.screen_height,
            target,
            watermark,
            margin,
        )
    return named_placement(
        request.position,
        target,
        watermark,
        margin,
        custom_x=request.custom_x,
        custom_y=request.custom_y,
    )
