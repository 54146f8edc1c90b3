# dashrun/game/config.py
# --- Display ---
WIDTH = 800
HEIGHT = 400
FPS = 60

# --- World / Physics (per-frame units) ---
GAME_SPEED = 5.0            # horizontal scroll (px/tick), constant within a run
GRAVITY = 0.5               # added to vy every tick
JUMP_FORCE = -12.0
PLATFORM_JUMP_FORCE = -15.6 # 30% higher than a ground jump
DOUBLE_JUMP_FORCE = -9.0    # weaker mid-air jump
BOUNCE_FACTOR = 0.5         # side bounce vy = JUMP_FORCE * BOUNCE_FACTOR
ROTATION_SPEED = 0.2        # radians per tick while airborne
CONTACT_TOLERANCE = 10.0    # landing band below a surface / side band width (px)
LANE_RETURN_SPEED = 1.0     # px/tick the player drifts back to its lane after a bounce

# --- Player ---
PLAYER_X = 100              # fixed lane, the world scrolls left
PLAYER_SIZE = 30

# --- Obstacle generation ---
OBSTACLE_HEIGHT = 60
PLATFORM_MIN_HEIGHT = 30
PLATFORM_WIDTH = 100
PLATFORM_CHANCE = 0.3       # probability of a platform instead of a spike group
SPIKE_MIN_BASE = 20
SPIKE_MIN_COUNT = 1
SPIKE_MAX_COUNT = 3
SPIKE_WIDTH = 20
SPIKE_GAP = 5
SPIKE_SCALE_MIN = 0.5       # each spike = base * uniform[MIN, MAX)
SPIKE_SCALE_MAX = 0.9
MIN_SPACING = 250
MAX_SPACING = 450
INITIAL_SPAN = 3            # initial obstacles fill [WIDTH, INITIAL_SPAN * WIDTH)
SEED_DEFAULT = 12345

# --- Ground ---
GROUND_HEIGHT = 10                          # visible ground strip at rest
GROUND_Y = HEIGHT - GROUND_HEIGHT           # ground top at offset 0
GROUND_MOVE_SPEED = 0.5                     # oscillation step (px/tick)
GROUND_MOVE_RANGE = 30.0                    # ground top rises at most this much
GROUND_SEGMENT_WIDTH = 100
GROUND_SEGMENT_HEIGHT = GROUND_HEIGHT + GROUND_MOVE_RANGE

# --- Decorations (flying cats) ---
FLYING_CAT_COUNT = 3
CAT_SIZE = 24
CAT_MIN_Y = 30
CAT_MAX_Y = 150
CAT_MIN_SPEED = 1.5
CAT_MAX_SPEED = 3.5
CAT_ROTATION_SPEED = 0.05

# --- Audio ---
SAMPLE_RATE = 22050
JUMP_PITCH = 440.0
PLATFORM_JUMP_PITCH = 520.0
DOUBLE_JUMP_PITCH = 660.0
BOUNCE_PITCH = 330.0
JUMP_TONE_S = 0.1
COLLISION_PITCH = 220.0
COLLISION_TONE_S = 0.2
TONE_GAIN = 0.1

# --- Colors (RGB) ---
COLOR_BG = (42, 42, 42)
COLOR_GROUND = (58, 58, 58)
COLOR_PLAYER = (76, 175, 80)
COLOR_PLATFORM = (68, 68, 255)
COLOR_SPIKE = (255, 68, 68)
COLOR_CAT = (255, 170, 60)
COLOR_FG = (230, 230, 230)
COLOR_PANEL = (20, 20, 20)
