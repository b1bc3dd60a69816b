# --- Display ---
GAME_WIDTH = 800
GAME_HEIGHT = 250
FPS = 60

# --- World / Physics ---
GROUND_Y = GAME_HEIGHT - 20   # y line the dino and obstacles stand on
GRAVITY = 1800.0              # px/s^2, pulls down (+y)
JUMP_FORCE = 650.0            # initial upward speed of a jump (px/s)
MAX_DT = 0.1                  # clamp per-tick dt (s) so stalls don't tunnel

# --- Dino ---
DINO_X = 50                   # dino's fixed x (world scrolls left)
DINO_RUNNING_DIMENSIONS = (44, 47)   # (w, h)
DINO_DUCKING_DIMENSIONS = (59, 30)

# --- Progression ---
INITIAL_SPEED = 300.0         # px/s
SPEED_INCREASE_RATE = 8.0     # px/s^2
SCORE_MILESTONE = 100         # cue every N points

# --- Obstacle generation ---
OBSTACLE_INTERVAL_MIN = 700   # ms
OBSTACLE_INTERVAL_MAX = 1800  # ms
OBSTACLE_CONFIGS = {
    "CACTUS_SMALL": (25, 50),  # (w, h)
    "CACTUS_LARGE": (50, 50),
}
SEED_DEFAULT = 12345

# --- Persistence ---
HIGH_SCORE_KEY = "dinoHighScore"
HIGH_SCORE_FILE_ENV = "DINO_HIGH_SCORE_FILE"

# --- Audio (Hz, seconds) ---
SFX_SAMPLE_RATE = 22050
SFX_TONES = {
    "jump": (660.0, 0.08),
    "duck": (220.0, 0.05),
    "score-milestone": (880.0, 0.15),
    "gameOver": (110.0, 0.4),
}

# --- Colors (RGB) ---
COLOR_BG = (247, 247, 247)
COLOR_FG = (83, 83, 83)
COLOR_GROUND = (120, 120, 120)
COLOR_DINO = (70, 70, 70)
COLOR_OBSTACLE = (34, 139, 34)
COLOR_DANGER = (200, 60, 60)
COLOR_OVERLAY = (255, 255, 255, 170)
