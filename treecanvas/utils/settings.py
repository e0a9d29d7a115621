# treecanvas/utils/settings.py
"""
Centralized settings and constants for the canvas.
"""

# --- General Settings ---
WINDOW_TITLE = "Tree of Life Visualizer"
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
BG_COLOR = (20, 20, 20)

# --- Top Bar ---
TOP_BAR_HEIGHT = 56
TOP_BAR_BG_COLOR = (12, 12, 16)
TOP_BAR_BORDER_COLOR = (48, 48, 56)
TOP_BAR_TITLE_COLOR = (240, 240, 240)
TOP_BAR_MUTED_COLOR = (150, 150, 160)
TOP_BAR_TITLE_FONT_SIZE = 20
TOP_BAR_INFO_FONT_SIZE = 16

# --- Control Buttons (canvas top-right) ---
CONTROL_BUTTON_HEIGHT = 28
CONTROL_BUTTON_MIN_WIDTH = 36
CONTROL_BUTTON_PADDING = 10
CONTROL_BUTTON_SPACING = 6
CONTROL_MARGIN = 16
CONTROL_FONT_SIZE = 14
CONTROL_BG_COLOR = (30, 30, 36)
CONTROL_HOVER_BG_COLOR = (60, 60, 80)
CONTROL_BORDER_COLOR = (90, 90, 100)
CONTROL_TEXT_COLOR = (240, 240, 240)

# --- FPS Overlay ---
FPS_OVERLAY_POS = (10, 10)
FPS_OVERLAY_FONT_SIZE = 14
FPS_OVERLAY_SAMPLES = 60

# --- Camera Settings ---
CAMERA_MIN_ZOOM = 0.1
CAMERA_MAX_ZOOM = 10.0
CAMERA_ZOOM_SPEED = 0.003       # zoom change per unit of wheel delta
CAMERA_PAN_SPEED = 1.0
CAMERA_FRICTION = 0.92          # momentum multiplier per frame
CAMERA_SMOOTHING = 0.15         # fraction of the remaining distance covered per frame
CAMERA_DRAG_DEAD_ZONE = 2.0     # pixels
CAMERA_VELOCITY_EPSILON = 0.1   # pixels per frame
CAMERA_DOUBLE_CLICK_FACTOR = 2.0
CAMERA_CENTER_STEP_FACTOR = 1.5  # toolbar zoom buttons
CAMERA_STEP_FACTOR = 1.2         # +/- keys
CAMERA_ZOOM_SETTLE_EPSILON = 1e-4
CAMERA_PAN_SETTLE_EPSILON = 1e-2

# --- Input ---
WHEEL_DELTA_PER_NOTCH = 100.0   # browser-style deltaY for one wheel notch
DOUBLE_CLICK_MS = 400
DOUBLE_CLICK_SLOP_PX = 4
NUDGE_SPEED = 12.0              # pan velocity imparted by one arrow key press
KEY_REPEAT_DELAY_MS = 260
KEY_REPEAT_INTERVAL_MS = 38

# Action -> pygame key names (resolved with pygame.key.key_code)
KEY_BINDINGS = {
    "toggle_fps":     ["f"],
    "zoom_in_step":   ["=", "+", "[+]"],
    "zoom_out_step":  ["-", "[-]"],
    "reset_view":     ["r", "0"],
    "nudge_left":     ["left"],
    "nudge_right":    ["right"],
    "nudge_up":       ["up"],
    "nudge_down":     ["down"],
    "quit":           ["escape"],
}

# --- Placeholder Content ---
PLACEHOLDER_NODE_COUNT = 120
PLACEHOLDER_SEED = 7
PLACEHOLDER_SPREAD = 900.0
NODE_RADIUS = 10.0
NODE_OUTLINE_COLOR = (230, 230, 230)
EDGE_COLOR = (70, 80, 90)
MARKER_RADIUS = 30.0
MARKER_VELOCITY = (2.0, 3.0)
MARKER_HUE_STEP = 2
