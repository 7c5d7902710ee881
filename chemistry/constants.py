from pathlib import Path

# -----------------------
# Static data
# -----------------------
DATA_DIR: Path = Path(__file__).parent / "data"
ELEMENTS_JSON: Path = DATA_DIR / "elements.json"
COMPOUNDS_JSON: Path = DATA_DIR / "compounds.json"

# -----------------------
# Bond inference
# -----------------------
BOND_DISTANCE_THRESHOLD = 130.0  # sandbox units (px); bonds form strictly below this
OCTET = 8
MIN_BOND_ORDER = 1
MAX_BOND_ORDER = 3

BOND_COVALENT = "covalent"
BOND_IONIC = "ionic"
BOND_METALLIC = "metallic"
BOND_TYPES = (BOND_COVALENT, BOND_IONIC, BOND_METALLIC)

# -----------------------
# Element categories
# -----------------------
CATEGORY_NOBLE_GAS = "noble-gas"
ELEMENT_CATEGORIES = (
    "noble-gas", "alkali-metal", "alkaline-earth", "transition-metal",
    "post-transition", "metalloid", "nonmetal", "halogen",
    "lanthanide", "actinide", "unknown",
)

# Synthetic periodic-table rows for the f-block
LANTHANIDE_RANGE = (57, 71)
ACTINIDE_RANGE = (89, 103)
LANTHANIDE_ROW = 9
ACTINIDE_ROW = 10
F_BLOCK_FIRST_COLUMN = 3

# -----------------------
# Feedback
# -----------------------
SEVERITY_INFO = "info"
SEVERITY_SUCCESS = "success"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"
SEVERITIES = (SEVERITY_INFO, SEVERITY_SUCCESS, SEVERITY_WARNING, SEVERITY_ERROR)

# -----------------------
# Game modes and quiz scoring
# -----------------------
MODE_FREE_PLAY = "free-play"
MODE_QUIZ = "quiz"
GAME_MODES = (MODE_FREE_PLAY, MODE_QUIZ)

BASE_POINTS = 100
BONUS_PER_SPARE_ATTEMPT = 25
MAX_BONUS_ATTEMPTS = 3
TOTAL_QUESTIONS = 30  # denominator used by the progress report

# -----------------------
# Logging
# -----------------------
LOGGING_LEVEL = "INFO"  # options: DEBUG, INFO, WARNING, ERROR
LOGGING_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
