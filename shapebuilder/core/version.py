"""SHB - version constants.

Keep this module tiny and dependency-free. It is imported by many places
(core models, settings, UI) and must not have side effects.
"""

APP_NAME = "ShapeBuilder"
APP_SHORT = "SHB"

# App semantic version (must match pyproject.toml).
APP_VERSION = "0.1.0"

# Defaults (canvas px). NOTE: changing these impacts exports of new shapes.
DEFAULT_CLOSE_RADIUS_PX = 6.0
DEFAULT_ANCHOR_HIT_RADIUS_PX = 5.0
DEFAULT_HANDLE_HIT_RADIUS_PX = 6.0

DEFAULT_FLATNESS_TOLERANCE = 0.5
DEFAULT_MAX_SUBDIVISION_DEPTH = 24
DEFAULT_UNIFORM_STEPS = 16

DEFAULT_MAXIMIZE_TARGET = 520.0
DEFAULT_EXPORT_DECIMALS = 4
