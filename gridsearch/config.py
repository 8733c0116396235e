import logging

# Tile codes used by map files (rows of integers)
TILE_EMPTY = 0
TILE_WALL = 1

# Search settings
# Allow diagonal moves that squeeze between two orthogonally blocked cells
ALLOW_CORNER_CUTTING = True

# Map file: JSON definition of the default map layout (relative to this package)
MAP_FILE = 'layouts/default.json'

# Viewer settings
# Size of one grid cell on screen (pixels)
CELL_SIZE = 64
FPS = 30
WINDOW_TITLE = 'Grid Search'

# Colors
FLOOR_COLOR = (235, 235, 235)
WALL_COLOR = (60, 60, 60)
CLOSED_COLOR = (170, 200, 230)
PATH_COLOR = (250, 200, 80)
START_COLOR = (70, 170, 90)
GOAL_COLOR = (200, 70, 70)
GRID_LINE_COLOR = (200, 200, 200)

# Console rendering glyphs
GLYPH_FLOOR = '.'
GLYPH_WALL = '#'
GLYPH_CLOSED = 'o'
GLYPH_PATH = '*'
GLYPH_START = 'S'
GLYPH_GOAL = 'G'

# Logging defaults (overridable with --log-level)
LOG_LEVEL = logging.WARNING
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
