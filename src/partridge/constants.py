GRID_SIZE = 45
CELL_SIZE = 14  # pixels per grid cell in the reference layout
SQUARE_SIZES = tuple(range(1, 10))

# Per-size fill colours (RGB).
SQUARE_COLORS = {
    1: (0, 0, 0),          # #000000
    2: (1, 84, 54),        # #015436
    3: (241, 132, 2),      # #F18402
    4: (4, 46, 125),       # #042E7D
    5: (144, 0, 53),       # #900035
    6: (3, 124, 187),      # #037CBB
    7: (244, 193, 4),      # #F4C104
    8: (97, 69, 48),       # #614530
    9: (196, 202, 196),    # #C4CAC4
}
EXHAUSTED_COLOR = (204, 204, 204)
LOCKED_ALPHA = 204          # "CC" suffix on the hex colour
PREVIEW_VALID_COLOR = (16, 185, 129)
PREVIEW_INVALID_COLOR = (239, 68, 68)
PREVIEW_ALPHA = 110
GRID_LINE_COLOR = (210, 214, 220)
BOARD_BACKGROUND_COLOR = (250, 250, 250)

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.70
BOARD_MAX_HEIGHT_PCT = 0.85
MIN_CELL_SIZE = 6
BOTTOM_MARGIN = 20
TOP_MARGIN = 56  # room for the Clear Board button above the board

# Toolbar (inventory column) geometry, sized like the original toolbar tiles.
TOOLBAR_GAP = 30
TOOLBAR_SLOT_SIZE = 50
TOOLBAR_SLOT_SPACING = 12
TOOLBAR_MIN_DISPLAY = 16
TOOLBAR_MAX_DISPLAY = 46
TOOLBAR_SCALE = 5

RESET_BUTTON_WIDTH = 140
RESET_BUTTON_HEIGHT = 32
RESET_BUTTON_GAP = 12

# Pointer handling.
DRAG_START_DISTANCE = 4.0
DOUBLE_CLICK_INTERVAL = 0.35
DOUBLE_CLICK_DISTANCE = 6.0

# Arcade mouse buttons and keys (avoid importing arcade for these).
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4
KEY_ESCAPE = 65307
