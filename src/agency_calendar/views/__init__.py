"""Calendar views: window resolution, grids, lists, tones and detail projection."""

from .colors import PALETTE, ToneTriple, resolve_tones
from .detail import BookingDetail, InvertedStayError, project_detail
from .grid import CalendarCell, build_grid, grid_weeks
from .listing import ListRow, build_list
from .modes import ViewMode, ViewWindow
from .window import LIST_HORIZON_MONTHS, add_months, resolve_window

__all__ = [
    "BookingDetail",
    "CalendarCell",
    "InvertedStayError",
    "LIST_HORIZON_MONTHS",
    "ListRow",
    "PALETTE",
    "ToneTriple",
    "ViewMode",
    "ViewWindow",
    "add_months",
    "build_grid",
    "build_list",
    "grid_weeks",
    "project_detail",
    "resolve_tones",
    "resolve_window",
]
