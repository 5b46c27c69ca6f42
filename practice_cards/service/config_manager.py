import json
import os
from pathlib import Path
from typing import Optional

from appdirs import user_config_dir

from practice_cards.constants import APP_NAME, CONFIG_DIR_ENV
from practice_cards.settings import PracticeCardsSettings


class ConfigManager:
    def __init__(self, config_dir: Optional[Path] = None) -> None:
        if config_dir is None:
            env_dir = os.environ.get(CONFIG_DIR_ENV)
            config_dir = Path(env_dir) if env_dir else Path(user_config_dir(appname=APP_NAME))
        self.config_dir = config_dir
        if not self.config_dir.exists():
            self.config_dir.mkdir(parents=True)

    @property
    def settings_path(self) -> Path:
        return self.config_dir / "settings.json"

    def read_settings(self) -> PracticeCardsSettings:
        if not self.settings_path.exists():
            return PracticeCardsSettings()

        with open(self.settings_path, "r") as file:
            saved = json.load(file)

        # PRACTICE_CARDS_* variables override the saved file
        from_env = PracticeCardsSettings().model_dump(exclude_unset=True)
        return PracticeCardsSettings(**{**saved, **from_env})

    def write_settings(self, settings: PracticeCardsSettings) -> None:
        with open(self.settings_path, "w") as file:
            file.write(settings.model_dump_json(indent=4))
