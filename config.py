"""
Simulation tuning knobs.
"""

# Environment (world is centred on the origin)
W, H = 3000, 3000

# Window
SCREEN_W, SCREEN_H = 900, 700
FPS = 60
SIM_DT = 1 / 60  # fixed simulation step (seconds)
BG_COLOR = (195, 232, 208)

# Cell
NUM_CELLS = 300  # population cap and reseed size
CELL_SPEED = 120.0
CELL_RADIUS = 7.0
CELL_DAMPING = 2.0
SPIN_STRENGTH = 0.5  # radians per decision
BASE_ENERGY = 100.0
MAX_ENERGY = 4000.0
ENERGY_DECAY_RATE = 5.0
ENERGY_TTL_SECS = 10.0
UPDATE_INTERVAL = 0.5
VISION_RADIUS = 200.0
FITNESS_WINDOW = 10
IS_USER_ENABLED = False

# Decision thresholds
THRUST_THRESHOLD = 0.7
SHOOT_THRESHOLD = 0.7
THRUST_MIN_DIST = 0.3
SHOOT_MAX_DIST = 0.5
MAX_FITNESS = 4.0

# Bullet
BULLET_LIFESPAN = 1.0
BULLET_SPEED = 200.0
BULLET_RADIUS = 4.0
BULLET_OFFSET = 5.0
BULLET_FIRE_RATE = 1.0
BULLET_MISS_PENALTY = 5.0
NO_BULLET_PENALTY = 30.0
NO_BULLET_SECS = 8.0

# Food
NUM_FOOD = 1200
FOOD_REFILL_BATCH = 150
ENERGY_PER_FOOD = 70.0
FOOD_RADIUS = 4.0
FOOD_DAMPING = 2.0

# Culling (age window in seconds, squared displacement)
UNMOVING_AGE = (10.0, 20.0)
UNMOVING_DIST_SQ = 50.0
REVOLVING_AGE = (15.0, 18.0)
REVOLVING_DIST_SQ = 25000.0
ONE_DIM_AGE = (20.0, 30.0)
ONE_DIM_RATIO = 3.0

# NN
NUM_INPUT_NODES = 3
NUM_HIDDEN_NODES = 8
NUM_OUTPUT_NODES = 4
NET_ARCH = [NUM_INPUT_NODES, NUM_HIDDEN_NODES, NUM_OUTPUT_NODES]
BRAIN_MUTATION_RATE = 0.1
BRAIN_MUTATION_VARIATION = 0.1

# Cadences (seconds)
HEARTBEAT_SECS = 1.0
ENERGY_UPDATE_INTERVAL_SECS = 1.0
CULL_INTERVAL_SECS = 0.5
REPLICATION_INTERVAL_SECS = 0.5
REPOPULATE_INTERVAL_SECS = 5.0
FOOD_REFRESH_INTERVAL_SECS = 0.5
FOOD_TREE_REFRESH_RATE_SECS = 1.0
STATS_INTERVAL_SECS = 1.0

# GUI
MAX_GRAPH_POINTS = 1500
