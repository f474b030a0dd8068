"""
Step-to-step color evolution. Each transform is gated by its own chance() draw, always
in the same order: palette reselect, complement, lighten/darken, gray-mix. Reordering
changes the look of every generator that uses it.
"""
from dataclasses import dataclass

from .. import random_utils
from ..colors import Color, NEUTRAL_GRAY, adjust_lightness, complement, gray_tone


@dataclass(frozen=True)
class MutationRates:
    """Percent chances (0-100) and ranges for one generator's color drift."""
    reselect: float = 30.0
    complement: float = 3.0
    lightness: float = 20.0
    lightness_range: tuple[float, float] = (-0.4, 0.4)
    gray: float = 5.0
    gray_range: tuple[float, float] = (0.2, 0.8)


TRAIN_RATES = MutationRates()
WANDER_RATES = MutationRates(
    reselect=4.0,
    complement=1.0,
    lightness=15.0,
    lightness_range=(-0.15, 0.15),
    gray=3.0,
    gray_range=(0.1, 0.5),
)


def mutate_color(
    previous: Color | None,
    palette: tuple[Color, ...],
    rates: MutationRates = TRAIN_RATES,
) -> Color:
    """
    Next color given the previous one. With no previous color a palette color is
    always picked; with an empty palette too, neutral gray.
    A transform that fails keeps the color it was given.
    """
    c = previous
    if c is None or random_utils.chance(rates.reselect):
        c = random_utils.choice(palette) or c or NEUTRAL_GRAY
    if random_utils.chance(rates.complement):
        c = complement(c)
    if random_utils.chance(rates.lightness):
        c = adjust_lightness(c, random_utils.uniform(*rates.lightness_range)) or c
    if random_utils.chance(rates.gray):
        c = gray_tone(c, random_utils.uniform(*rates.gray_range)) or c
    return c
