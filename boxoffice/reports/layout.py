"""
Layout primitives for the PDF reports.

Coordinates are top-down (y grows towards the bottom of the page, like the
report sketches); the canvas wrapper flips them for reportlab.
"""
from dataclasses import dataclass
from itertools import groupby
from typing import Any, Callable, Iterable, Iterator, List, Tuple


class UnsortedGroupError(ValueError):
    """A group key reappeared after its block had already been emitted."""


@dataclass(frozen=True)
class ReportLayout:
    # Page (Letter, points)
    page_width: float = 612
    page_height: float = 792
    margin: float = 50
    line_spacing: float = 1.2

    # Employee structure report: a two-line entry and a department band
    employee_block_height: float = 62
    employee_row_advance: float = 40
    department_gap: float = 15
    department_header_height: float = 45

    # Invoice forms: outer box plus the gap before the next one
    invoice_block_height: float = 192
    invoice_box_height: float = 180
    invoice_row_advance: float = 200

    # Bar chart
    chart_left: float = 100
    chart_width: float = 400
    chart_height: float = 300
    chart_bar_width: float = 40
    chart_shadow_offset: float = 3
    chart_grid_steps: int = 5
    chart_headroom: float = 1.1
    chart_fallback_max: float = 1000
    chart_label_max_chars: int = 12
    chart_label_keep_chars: int = 10

    @property
    def content_top(self) -> float:
        return self.margin

    @property
    def content_bottom(self) -> float:
        return self.page_height - self.margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin


DEFAULT_LAYOUT = ReportLayout()


def needs_page_break(offset: float, block_height: float, page_bottom: float) -> bool:
    """True when a block of `block_height` starting at `offset` would cross `page_bottom`."""
    return offset + block_height > page_bottom


class LayoutCursor:
    """Vertical write position shared by every drawing call of one document."""

    def __init__(self, layout: ReportLayout = DEFAULT_LAYOUT):
        self.layout = layout
        self.y = layout.content_top
        self.page = 1

    def advance(self, dy: float) -> float:
        self.y += dy
        return self.y

    def move_to(self, y: float) -> float:
        self.y = y
        return self.y

    def move_down(self, lines: float, font_size: float) -> float:
        return self.advance(lines * font_size * self.layout.line_spacing)

    def fits(self, block_height: float) -> bool:
        return not needs_page_break(self.y, block_height, self.layout.content_bottom)

    def next_page(self) -> None:
        self.page += 1
        self.y = self.layout.content_top


def group_adjacent(rows: Iterable[Any], key: Callable[[Any], Any]) -> Iterator[Tuple[Any, List[Any]]]:
    """
    Split rows into blocks wherever `key` changes between neighbours.

    Precondition: rows arrive ordered by the group key (the report queries
    ORDER BY it). A key showing up again after its block ended raises
    UnsortedGroupError instead of silently emitting a second header.
    """
    seen = set()
    for group_key, members in groupby(rows, key=key):
        if group_key in seen:
            raise UnsortedGroupError(
                f"Rows are not ordered by group key: {group_key!r} appears in two blocks"
            )
        seen.add(group_key)
        yield group_key, list(members)


def chart_axis_max(values: Iterable[float], layout: ReportLayout = DEFAULT_LAYOUT) -> float:
    """Largest value plus headroom; a fixed positive scale when there is nothing to plot."""
    peak = max((float(v) for v in values), default=0.0)
    axis_max = peak * layout.chart_headroom
    if axis_max <= 0:
        return float(layout.chart_fallback_max)
    return axis_max


def shorten_label(text: str, layout: ReportLayout = DEFAULT_LAYOUT) -> str:
    if len(text) > layout.chart_label_max_chars:
        return text[: layout.chart_label_keep_chars] + "..."
    return text
