"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# TIME (all in milliseconds)
# =============================================================================
SECOND_MS = 1000
HOUR_MS = 60 * 60 * SECOND_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS

# =============================================================================
# GROWTH
# =============================================================================
FULL_GROWTH_PERIOD_MS = WEEK_MS       # base rate 1.0 reaches full size in a week
WATERING_BONUS_WINDOW_MS = DAY_MS     # watered more recently than this -> bonus
NEGLECT_THRESHOLD_MS = 2 * DAY_MS     # dry for longer than this -> penalty
WATERING_BONUS = 1.5
NEGLECT_PENALTY = 0.5

TREE_GROWTH_RATE = 0.6                # render call site rate for trees
PLANT_GROWTH_RATE = 0.8               # shared by every plant subtype
DEFAULT_GROWTH_RATE = 0.5

GOLDEN_TREE_CHANCE = 0.03

# =============================================================================
# GARDEN LAYOUT
# =============================================================================
PLANTING_RADIUS = 8.0                 # random placement radius
MIN_PLANT_DISTANCE = 1.5              # horizontal spacing between plantings
GARDEN_HALF_EXTENT = 10.0             # border sits at +/- this on x and z
MAX_PLACEMENT_ATTEMPTS = 50

# =============================================================================
# CLOUDS
# =============================================================================
CLOUD_COUNT = 3
CLOUD_WATER_RADIUS = 3.0
CLOUD_COOLDOWN_MS = 5000.0
RAIN_DURATION_MS = 2000.0
DEFAULT_CLOUD_POSITIONS = (
    (-5.0, 3.0, -2.0),
    (5.0, 3.0, 2.0),
    (0.0, 3.0, 5.0),
)

# =============================================================================
# TOOLS
# =============================================================================
FERTILIZER_BOOST = 0.3
PRUNING_BOOST = 0.2

# =============================================================================
# REWARDS
# =============================================================================
DAILY_REWARD_INTERVAL_MS = DAY_MS
STARTING_WATER_LEVEL = 100
