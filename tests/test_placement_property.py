"""
Property-based tests for the placement calculator.

Property: whatever the input, a placement never lands inside the margin, and
whenever the logo fits inside the margins it never crosses the far edges.
"""

from hypothesis import given, settings, strategies as st

from app.models import PositionPreset
from app.services.placement import Dimensions, named_placement, scaled_placement

PRESETS = [preset.value for preset in PositionPreset if preset is not PositionPreset.custom]


@st.composite
def sizes(draw):
    target = Dimensions(draw(st.integers(1, 5000)), draw(st.integers(1, 5000)))
    watermark = Dimensions(draw(st.integers(0, 6000)), draw(st.integers(0, 6000)))
    margin = draw(st.integers(0, 300))
    return target, watermark, margin


@st.composite
def fitting_sizes(draw):
    margin = draw(st.integers(0, 300))
    watermark = Dimensions(draw(st.integers(0, 2000)), draw(st.integers(0, 2000)))
    target = Dimensions(
        watermark.width + 2 * margin + draw(st.integers(0, 3000)),
        watermark.height + 2 * margin + draw(st.integers(0, 3000)),
    )
    return target, watermark, margin


def _fits(target, watermark, margin):
    return (
        target.width - watermark.width - margin >= margin
        and target.height - watermark.height - margin >= margin
    )


@settings(max_examples=200)
@given(case=fitting_sizes(), position=st.sampled_from(PRESETS))
def test_presets_stay_inside_margins(case, position):
    target, watermark, margin = case

    result = named_placement(position, target, watermark, margin)

    assert margin <= result.left <= target.width - watermark.width - margin
    assert margin <= result.top <= target.height - watermark.height - margin


@settings(max_examples=200)
@given(case=sizes(), position=st.sampled_from(PRESETS))
def test_presets_never_go_below_margin(case, position):
    target, watermark, margin = case

    result = named_placement(position, target, watermark, margin)

    assert result.left >= margin
    assert result.top >= margin


@settings(max_examples=200)
@given(case=fitting_sizes())
def test_center_is_exact_floor_when_it_fits(case):
    target, watermark, margin = case

    result = named_placement("center", target, watermark, margin)

    assert result.left == (target.width - watermark.width) // 2
    assert result.top == (target.height - watermark.height) // 2


@settings(max_examples=200)
@given(
    case=sizes(),
    screen=st.tuples(st.integers(1, 4000), st.integers(1, 4000)),
    fractions=st.tuples(st.floats(0, 1), st.floats(0, 1)),
)
def test_scaled_placement_is_bounded(case, screen, fractions):
    target, watermark, margin = case
    left = fractions[0] * screen[0]
    top = fractions[1] * screen[1]

    result = scaled_placement(left, top, screen[0], screen[1], target, watermark, margin)

    assert result.left >= margin
    assert result.top >= margin
    if _fits(target, watermark, margin):
        assert result.left <= target.width - watermark.width - margin
        assert result.top <= target.height - watermark.height - margin


@settings(max_examples=200)
@given(case=sizes(), screen=st.integers(1, 4000), a=st.floats(0, 1), b=st.floats(0, 1))
def test_scaled_placement_is_monotone(case, screen, a, b):
    target, watermark, margin = case
    low, high = sorted((a * screen, b * screen))

    first = scaled_placement(low, low, screen, screen, target, watermark, margin)
    second = scaled_placement(high, high, screen, screen, target, watermark, margin)

    assert first.left <= second.left
    assert first.top <= second.top
