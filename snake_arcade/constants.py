"""Game constants."""

GRID_SIZE = 20
FOOD_REWARD = 1

INITIAL_SNAKE = [(10, 10)]
INITIAL_FOOD = (15, 15)
INITIAL_DIRECTION = (0, -1)

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}

# tier key -> (display name, tick interval in ms)
SPEED_SETTINGS = {
    "slow": ("SLOW", 300),
    "normal": ("NORMAL", 200),
    "fast": ("FAST", 150),
    "insane": ("INSANE", 100),
}
DEFAULT_SPEED = "normal"
