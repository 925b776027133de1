"""
Game constants for GridSnake.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Board settings
GRID_SIZE = 32
MIN_GRID_SIZE = 8
TICK_SECONDS = 0.15

# Starting heading
START_DIRECTION = UP

# Fruit value ramp
FRUIT_START_VALUE = 5
FRUIT_VALUE_STEP = 5
LEVEL_UP_FACTOR = 20

# Score ledger
LEDGER_CAPACITY = 5
LEDGER_DISPLAY_COUNT = 5
NAME_MAX_LENGTH = 11
DEFAULT_SCORES = [
    ("Anaconda", 250),
    ("Python", 200),
    ("Cobra", 150),
    ("Viper", 100),
    ("Adder", 50),
]
