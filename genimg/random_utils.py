"""
Random helpers for shape sizing, color mutation and wandering paths.
All draws go through one shared generator so a whole image can be reproduced from a seed.
"""
import logging
import math
import random
from typing import Sequence, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

_rng = random.Random()


def seed(value: int | None) -> None:
    """Reseed the shared generator. None reseeds from system entropy."""
    _rng.seed(value)


def uniform(low: float, high: float) -> float:
    """Uniform float in [low, high]; bounds may be given in either order."""
    if low > high:
        low, high = high, low
    return _rng.uniform(low, high)


def randint(low: int, high: int) -> int:
    """Uniform int in [low, high] inclusive; bounds may be given in either order."""
    if low > high:
        low, high = high, low
    return _rng.randint(low, high)


def choice(sequence: Sequence[T]) -> T | None:
    """Uniform choice. Returns None for an empty sequence."""
    if not sequence:
        return None
    return _rng.choice(sequence)


def _bias_exponent(bias: float, strength_base: float) -> float:
    # exponent > 1 pushes r toward 0, exponent < 1 toward 1
    clamped = max(-1.0, min(1.0, bias))
    if abs(clamped) < 1e-6:
        return 1.0
    base = max(1.1, strength_base)
    return base ** (-clamped)


def biased_uniform(
    low: float,
    high: float,
    bias: float = 0.0,
    strength_base: float = 3.0,
) -> float:
    """
    Random float in [low, high] skewed toward one end.
    bias in [-1, 1]: -1 favors low, 0 is uniform, +1 favors high.
    strength_base (>= 1.1) controls how strong the skew is at the extremes.
    Returns low when low >= high.
    """
    if not low < high:
        return low
    exponent = _bias_exponent(bias, strength_base)
    r = _rng.random() ** exponent
    result = low + r * (high - low)
    return max(low, min(high, result))


def biased_randint(
    low: int,
    high: int,
    bias: float = 0.0,
    strength_base: float = 3.0,
) -> int:
    """Integer variant of biased_uniform over [low, high] inclusive."""
    if not low < high:
        return low
    count = high - low + 1
    exponent = _bias_exponent(bias, strength_base)
    r = _rng.random() ** exponent
    index = min(int(math.floor(r * count)), count - 1)
    return low + index


def biased_choice(sequence: Sequence[T], bias: float = 0.0) -> T | None:
    """Pick from sequence with a positional bias (-1 favors the first items, +1 the last)."""
    if not sequence:
        return None
    return sequence[biased_randint(0, len(sequence) - 1, bias)]


def chance(percent: float) -> bool:
    """True with probability percent/100. <= 0 is never, >= 100 is always."""
    if percent <= 0:
        return False
    if percent >= 100:
        return True
    return _rng.random() * 100.0 < percent


def _round_half_away(x: float) -> int:
    # halves go away from zero: 2.5 -> 3, -2.5 -> -3
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def biased_offset_range(
    v: float,
    min_v: float,
    max_v: float,
    max_abs_offset: int,
    influence_ratio: float = 0.25,
    power: float = 2.0,
) -> tuple[int, int]:
    """
    Step range (lo, hi) for a value wandering inside [min_v, max_v].

    Within influence_ratio of the total range from a wall, the step allowed toward
    that wall shrinks along a power curve and reaches zero at the wall itself.
    Far from both walls the range is (-max_abs_offset, max_abs_offset).
    """
    if not max_v > min_v:
        logger.warning("biased_offset_range: max_v (%s) must be greater than min_v (%s)", max_v, min_v)
        return 0, 0
    if not 0 < influence_ratio <= 1.0:
        logger.warning("biased_offset_range: influence_ratio %s out of (0, 1], using 0.25", influence_ratio)
        influence_ratio = 0.25
    if not power > 0:
        logger.warning("biased_offset_range: power %s must be positive, using 2.0", power)
        power = 2.0

    influence = (max_v - min_v) * influence_ratio
    if influence <= 1e-6:
        return -max_abs_offset, max_abs_offset

    norm_min = max(0.0, min(1.0, (v - min_v) / influence))
    norm_max = max(0.0, min(1.0, (max_v - v) / influence))
    lo = _round_half_away(-max_abs_offset * norm_min ** power)
    hi = _round_half_away(max_abs_offset * norm_max ** power)
    if lo > hi:
        return 0, 0
    return lo, hi


def next_point_v(
    prev_v: float,
    min_v: float,
    max_v: float,
    max_abs_offset: int,
    influence_ratio: float = 0.25,
    power: float = 2.0,
) -> float:
    """One boundary-avoiding random step from prev_v, clamped into [min_v, max_v]."""
    lo, hi = biased_offset_range(prev_v, min_v, max_v, max_abs_offset, influence_ratio, power)
    offset = _rng.randint(lo, hi) if lo <= hi else 0
    return max(min_v, min(max_v, prev_v + offset))


def scaled_value(
    current: float,
    min_in: float,
    max_in: float,
    min_target: float,
    max_target: float,
    curve_power: float = 2.0,
) -> float:
    """
    Map current from [min_in, max_in] onto [min_target, max_target] along a power curve.
    curve_power 1 is linear, > 1 eases in, < 1 eases out. Collapsed input returns min_target.
    """
    if not max_in > min_in:
        return min_target
    p = max(0.001, curve_power)
    norm = max(0.0, min(1.0, (current - min_in) / (max_in - min_in)))
    return min_target + norm ** p * (max_target - min_target)
