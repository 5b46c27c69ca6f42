from pathlib import Path

PACKAGE_DIR = Path(__file__).parent
BUNDLED_DATA_FILE = PACKAGE_DIR / "data" / "practice_data.json"

APP_NAME = "practice-cards"
CONFIG_DIR_ENV = "PRACTICE_CARDS_CONFIG_DIR"

CARD_ID_PREFIX = "card-"
DEFAULT_GLOBAL_NAME = "PRACTICE_DATA"
DEFAULT_CATEGORY = "practice"
DEFAULT_CODE_LANGUAGE = "csharp"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
