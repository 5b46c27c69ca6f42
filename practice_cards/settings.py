from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from practice_cards.constants import (
    DEFAULT_CATEGORY,
    DEFAULT_CODE_LANGUAGE,
    DEFAULT_GLOBAL_NAME,
)
from practice_cards.enums import OutputFormat


class PracticeCardsSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PRACTICE_CARDS_")

    root_dir: Path = Path(".")
    practice_dir: Path = Path("practice")
    output_file: Path = Path("data.js")
    output_format: OutputFormat = OutputFormat.js
    global_name: str = DEFAULT_GLOBAL_NAME
    category: str = DEFAULT_CATEGORY
    default_code_language: str = DEFAULT_CODE_LANGUAGE
    # None means the dataset bundled with the package
    data_file: Optional[Path] = None
    logger_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
