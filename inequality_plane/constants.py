"""Package‑wide constants, defaults and learner-facing messages."""

from typing import Any

# Single tolerance shared by every "is this zero / on the line" judgement.
EPSILON = 1e-9

# Distance used to turn lines and half-planes into practically infinite shapes.
BIG = 10_000.0

CANVAS_CONFIG: dict[str, Any] = {
    "width": 600,
    "height": 600,
    "min_zoom": 20.0,
    "max_zoom": 100.0,
    "default_zoom": 40.0,
}

BUTTON_CONFIG: dict[str, Any] = {
    "width": 60,
    "height": 30,
    # math units between the line midpoint and each region control
    "offset": 3.0,
}

# Pixel radii for hit-testing
VERTEX_HIT_RADIUS = 8.0
LINE_HOVER_DISTANCE = 10.0
DRAG_THRESHOLD = 3.0

WHEEL_ZOOM_IN = 1.1
WHEEL_ZOOM_OUT = 0.9

DEBOUNCE_MS = 300
PARSE_MEMO_SIZE = 256

LABEL_PREFIX = "d"

PALETTE: tuple[str, ...] = (
    "#4e31aa",
    "#2c3e50",
    "#e74c3c",
    "#27ae60",
    "#f39c12",
    "#8e44ad",
    "#16a085",
    "#d35400",
    "#2980b9",
    "#c0392b",
    "#1abc9c",
    "#f1c40f",
)

STATUS_COLORS: dict[str, str] = {
    "unsolved": "#000000",
    "active": "#ff6d00",
    "partial": "#c62828",
    "solved": "#2e7d32",
}

THEME: dict[str, str] = {
    "background": "#ffffff",
    "grid": "#eeeeee",
    "axis": "#000000",
    "active_line": "#ff6d00",
    "point_ok": "#2e7d32",
    "point_bad": "#aa3333",
}

FILL_ALPHA = 0.2
FILL_ALPHA_HIGHLIGHT = 0.4

MSG_EMPTY = "Please enter an inequality spell"
MSG_INVALID = "Incorrect spell format. Try examples like: x+y<0, 2x-3y+1≥0, x>-2"
MSG_DUPLICATE = "This spell has already been cast"
MSG_ADDED = "Spell successfully cast!"
MSG_CORRECT = "Correct! Well done!"
MSG_INCORRECT = "Incorrect, please try again!"
MSG_ENTER_COORDS = "Please enter the coordinates of the point:"
MSG_MISSING_COORDS = "Please enter both x and y coordinates!"
MSG_BAD_NUMBER = "Coordinates must be numbers!"
MSG_NO_ACTIVE = "Select an intersection point first."
MSG_ALREADY_SOLVED = "This point has already been found."
MSG_REMOVED = "Spell {label} removed"
MSG_CHOOSE_REGION = "Choose the solution region for {label}"
MSG_RESET = "The spell has been reset!"
MSG_POINT_OK = (
    "Magnificent! The point ({x}, {y}) is indeed a magical solution to your system of inequalities."
)
MSG_POINT_BAD = "Not quite. The point ({x}, {y}) does not satisfy: {failed}"

DEMO_INEQUALITIES: tuple[str, ...] = (
    "x + y - 4 <= 0",
    "x - y + 2 >= 0",
    "y >= 0",
    "x >= 0",
)

__all__ = [
    "EPSILON",
    "BIG",
    "CANVAS_CONFIG",
    "BUTTON_CONFIG",
    "VERTEX_HIT_RADIUS",
    "LINE_HOVER_DISTANCE",
    "DRAG_THRESHOLD",
    "WHEEL_ZOOM_IN",
    "WHEEL_ZOOM_OUT",
    "DEBOUNCE_MS",
    "PARSE_MEMO_SIZE",
    "LABEL_PREFIX",
    "PALETTE",
    "STATUS_COLORS",
    "THEME",
    "FILL_ALPHA",
    "FILL_ALPHA_HIGHLIGHT",
    "MSG_EMPTY",
    "MSG_INVALID",
    "MSG_DUPLICATE",
    "MSG_ADDED",
    "MSG_CORRECT",
    "MSG_INCORRECT",
    "MSG_ENTER_COORDS",
    "MSG_MISSING_COORDS",
    "MSG_BAD_NUMBER",
    "MSG_NO_ACTIVE",
    "MSG_ALREADY_SOLVED",
    "MSG_REMOVED",
    "MSG_CHOOSE_REGION",
    "MSG_RESET",
    "MSG_POINT_OK",
    "MSG_POINT_BAD",
    "DEMO_INEQUALITIES",
]
