"""
Lane/zone layout: jittered grid lines that loosely organize scattered shapes.
"""
from .. import random_utils


def line_zones(
    min_v: float,
    max_v: float,
    n_lines: int,
    fuzziness: float = 0.1,
) -> list[float]:
    """
    n_lines positions spread evenly across [min_v, max_v], each jittered.

    Ideal spacing is (max_v - min_v) / (n_lines + 1), so no line sits on a boundary.
    Each position moves by up to fuzziness * spacing either way, then is clamped
    into [min_v, max_v]. Returns [] when n_lines < 1.
    """
    if n_lines < 1:
        return []
    spacing = (max_v - min_v) / (n_lines + 1)
    max_fuzz = abs(spacing * fuzziness)
    positions = []
    for i in range(1, n_lines + 1):
        fuzz = random_utils.uniform(-max_fuzz, max_fuzz) if max_fuzz > 0 else 0.0
        pos = min_v + i * spacing + fuzz
        positions.append(max(min_v, min(max_v, pos)))
    return positions


def grid_cells(
    width: float,
    height: float,
    rows: int,
    cols_per_row: list[int] | int,
    fuzziness: float = 0.1,
) -> list[list[tuple[float, float]]]:
    """
    Jittered cell centres: rows of Y zones, each with its own X zones.
    cols_per_row may be one count for every row or one count per row.
    """
    ys = line_zones(0.0, float(height), rows, fuzziness)
    if isinstance(cols_per_row, int):
        counts = [cols_per_row] * len(ys)
    else:
        counts = list(cols_per_row)[: len(ys)]
        counts += [1] * (len(ys) - len(counts))
    return [
        [(x, y) for x in line_zones(0.0, float(width), n, fuzziness)]
        for y, n in zip(ys, counts)
    ]
