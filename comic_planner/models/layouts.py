"""
Page layout templates.

Each layout is a fixed list of slots; slot order is panel position order.
"""

from dataclasses import dataclass
from typing import Dict, List

from .schemas import AspectRatio, PageLayout


@dataclass(frozen=True)
class LayoutSlot:
    position: int
    aspect_ratio: AspectRatio
    big: bool = False


def _slots(*ratios: str, big: int = 0) -> List[LayoutSlot]:
    return [
        LayoutSlot(position=i, aspect_ratio=AspectRatio(ratio), big=(i == big))
        for i, ratio in enumerate(ratios, start=1)
    ]


LAYOUT_SLOTS: Dict[PageLayout, List[LayoutSlot]] = {
    PageLayout.SINGLE: _slots("3:4"),
    PageLayout.TWO_HORIZONTAL: _slots("3:2", "3:2"),
    PageLayout.TWO_VERTICAL: _slots("9:16", "9:16"),
    PageLayout.THREE_ROWS: _slots("16:9", "16:9", "16:9"),
    PageLayout.GRID_2X2: _slots("3:4", "3:4", "3:4", "3:4"),
    PageLayout.BIG_LEFT: _slots("9:16", "9:16", "9:16", big=1),
    PageLayout.BIG_RIGHT: _slots("9:16", "9:16", "9:16", big=3),
    PageLayout.BIG_TOP: _slots("4:3", "4:3", "4:3", big=1),
    PageLayout.BIG_BOTTOM: _slots("4:3", "4:3", "4:3", big=3),
    PageLayout.STRIP_3: _slots("9:16", "9:16", "9:16"),
    PageLayout.MANGA_3: _slots("3:2", "3:4", "3:4"),
    PageLayout.ACTION: _slots("2:3", "2:3", "2:3"),
}


def panel_count(layout: PageLayout) -> int:
    return len(LAYOUT_SLOTS[layout])


def slot_for(layout: PageLayout, position: int) -> LayoutSlot:
    """Slot for a 1-based position; out-of-range positions get a square slot."""
    slots = LAYOUT_SLOTS[layout]
    if 0 < position <= len(slots):
        return slots[position - 1]
    return LayoutSlot(position=position, aspect_ratio=AspectRatio.SQUARE)
