# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They cover the
window and rendering framework and the fixed geometry of the shape and
motion variants. Anything a user may want to tune per run (seed, spawn
presets, capacity) lives in config.json instead.
"""
import math

# Visualization settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a resizable window.
FULLSCREEN = False
WINDOW_SIZE = (1280, 720)
UI_PANEL_WIDTH = 220
FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
WINDOW_CAPTION = "Particle Playground"

# --- Particle Lifecycle ---
# A particle is expired once its size has decayed to this floor.
SIZE_FLOOR = 0.0
DEFAULT_MAX_PARTICLES = 1000

# --- Proximity Lines ---
DEFAULT_NEIGHBOR_COUNT = 3
# Distance at which a connection line fades out completely.
CONNECTION_FADE_DISTANCE = 500.0
CONNECTION_WIDTH_SCALE = 100.0

# --- Shape Geometry ---
# All vertex geometry starts at the top of the shape (-90 degrees).
SHAPE_START_ANGLE = -math.pi / 2
STAR_SPIKES = 5
STAR_INNER_RATIO = 0.5
PENTAGRAM_LINE_WIDTH = 2
MAGIC_CIRCLE_INNER_RING_RATIO = 0.8
MAGIC_CIRCLE_SPIKES = 3
MAGIC_CIRCLE_OUTER_SATELLITE_RATIO = 1 / 6
MAGIC_CIRCLE_INNER_SATELLITE_RATIO = 1 / 10
# Number of line segments used to flatten one cubic Bezier curve.
BEZIER_SEGMENTS = 12
ARC_SEGMENTS = 24
CUSTOM_OUTLINE_COLOR = (255, 255, 255)

# --- Motion ---
# Zigzag oscillation frequency is drawn from [0, ZIGZAG_MAX_FREQUENCY).
ZIGZAG_MAX_FREQUENCY = 1 / 3
# Circular orbit radius is drawn from [CIRCULAR_RADIUS_MIN, CIRCULAR_RADIUS_MAX).
CIRCULAR_RADIUS_MIN = 5.0
CIRCULAR_RADIUS_MAX = 10.0
# The orbit angle advances by speed / CIRCULAR_ANGLE_DIVISOR each step.
CIRCULAR_ANGLE_DIVISOR = 30.0

# --- UI Panel ---
UI_BACKGROUND_ALPHA = 140
BUTTON_HEIGHT = 28
BUTTON_SPACING = 6
BUTTON_COLOR = (70, 70, 70)
BUTTON_HOVER_COLOR = (100, 100, 100)
# Highlight for the currently selected shape and motion buttons.
BUTTON_SELECTED_COLOR = (173, 216, 230)  # Light Blue
TEXT_COLOR = (255, 255, 255)
TEXT_COLOR_SELECTED = (20, 20, 20)
