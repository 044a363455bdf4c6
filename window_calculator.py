import math
from dataclasses import dataclass

from table_errors import ConfigurationFault


@dataclass(frozen=True)
class VisibleRange:
    start: int
    end: int

    def __len__(self):
        return self.end - self.start

    def __iter__(self):
        return iter(range(self.start, self.end))

    def __contains__(self, index):
        return self.start <= index < self.end


EMPTY_RANGE = VisibleRange(0, 0)


def _check_item_height(item_height):
    if item_height is None or item_height <= 0:
        raise ConfigurationFault(f"item_height must be > 0, got {item_height!r}")


def compute_visible_range(
    scroll_offset: float,
    viewport_height: float,
    item_height: float,
    item_count: int,
    overscan: int = 0,
) -> VisibleRange:
    """Indices [start, end) that must be materialized for the given viewport.

    Pure and O(1); safe to call on every scroll event.
    """
    _check_item_height(item_height)
    item_count = max(0, int(item_count))
    if item_count == 0:
        return EMPTY_RANGE

    scroll_offset = max(0, scroll_offset)
    viewport_height = max(0, viewport_height)

    start = min(item_count, int(scroll_offset // item_height))
    # a row cut by the top edge pushes one more row in at the bottom
    partial = scroll_offset - start * item_height if start < item_count else 0
    count = math.ceil((viewport_height + partial) / item_height)
    end = max(start, min(item_count, start + count))

    if overscan > 0 and end > start:
        start = max(0, start - overscan)
        end = min(item_count, end + overscan)
    return VisibleRange(start, end)


def max_scroll_offset(viewport_height, item_height, item_count) -> int:
    _check_item_height(item_height)
    content = max(0, item_count) * item_height
    return max(0, content - max(0, viewport_height))


def scroll_offset_for_index(index, current_offset, viewport_height, item_height):
    """Smallest scroll change that brings row `index` fully into view."""
    _check_item_height(item_height)
    top = max(0, index) * item_height
    bottom = top + item_height
    # a row taller than the viewport is shown from its top
    if top < current_offset or item_height >= viewport_height:
        return top
    if bottom > current_offset + viewport_height:
        return max(0, bottom - viewport_height)
    return current_offset
