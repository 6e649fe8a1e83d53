"""Grid layout derivation — a pure function of the stream count.

The mapping is exact and reproducible because the grid renderer
depends on it:

=====  ==========================  ==============================
size   columns                     responsive breakpoints
=====  ==========================  ==============================
0      empty state                 —
1      1                           base 1
2      2                           base 1, md 2
3      3                           base 1, md 2, lg 3
4      2 (two rows of two)         base 1, md 2
>=5    3 (wraps)                   base 1, md 2, lg 3
=====  ==========================  ==============================
"""

from __future__ import annotations

import math

from split_stream.core.models import LayoutDescriptor

_ONE: tuple[tuple[str, int], ...] = (("base", 1),)
_TWO: tuple[tuple[str, int], ...] = (("base", 1), ("md", 2))
_THREE: tuple[tuple[str, int], ...] = (("base", 1), ("md", 2), ("lg", 3))

_TABLE: dict[int, tuple[int, tuple[tuple[str, int], ...]]] = {
    1: (1, _ONE),
    2: (2, _TWO),
    3: (3, _THREE),
    4: (2, _TWO),
}
_WRAP: tuple[int, tuple[tuple[str, int], ...]] = (3, _THREE)

EMPTY_LAYOUT: LayoutDescriptor = LayoutDescriptor(columns=0, rows=0)


def layout_for(size: int) -> LayoutDescriptor:
    """Return the :class:`LayoutDescriptor` for *size* streams.

    Raises
    ------
    ValueError
        If *size* is negative.
    """
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    if size == 0:
        return EMPTY_LAYOUT

    columns, breakpoints = _TABLE.get(size, _WRAP)
    return LayoutDescriptor(
        columns=columns,
        rows=math.ceil(size / columns),
        breakpoints=breakpoints,
    )
