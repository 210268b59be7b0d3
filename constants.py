# --- Window ---
WIDTH, HEIGHT = 1280, 800
FPS = 60
DT = 1.0 / FPS

# --- Cloth grid ---
CLOTH_COLS = 30
CLOTH_ROWS = 20
CLOTH_SPACING = 25.0
SELECT_RADIUS = 30.0

# --- Colors ---
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
YELLOW = (255, 255, 0)
GREY = (125, 125, 125)

PARTICLE_RADIUS = 3
SELECTED_RADIUS = 5
