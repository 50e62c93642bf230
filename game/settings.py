# Settings for the game

# Owner id of the human player's tiles and units
PLAYER_ID = "player"

# Starting economy of a fresh game
STARTING_TREASURY = 500
STARTING_SCIENCE = 0
STARTING_TECHS = ("agriculture",)

# Civilization placement: random draws per civilization and the spacing
# that ends the search early
SEED_ATTEMPTS = 25
MIN_START_DISTANCE = 15
START_TERRAINS = frozenset({"plains", "hill", "savanna", "shrubland"})

# Terrain an AI settler will found a city on. Deliberately not the same
# set as START_TERRAINS (no shrubland).
AI_SETTLE_TERRAINS = frozenset({"plains", "savanna", "hill"})

# Population a city is raised to when founded
AI_FOUND_MIN_POPULATION = 3
PLAYER_FOUND_MIN_POPULATION = 5

# Chance per turn that an AI city gains one population
AI_CITY_GROWTH_CHANCE = 0.1

# Base yields of every player city, per turn
CITY_GRAIN = 2
CITY_WOOD = 1
CITY_FOOD = 2
CITY_SCIENCE = 4
CITY_BASE_GOLD = 10
CITY_GOLD_PER_POP = 2

# Gathering bonuses
POP_YIELD_FACTOR = 0.1
WONDER_GATHER_BONUS = 2
PLANTATION_BONUS = 1

# Housing
CITY_HOUSING = 5
RESIDENTIAL_HOUSING = 5
WILD_HOUSING = 1
WILD_HABITABLE_TERRAINS = frozenset({"plains", "savanna", "forest", "coast"})

# Default number of turns the headless runner plays
DEFAULT_TURNS = 10
