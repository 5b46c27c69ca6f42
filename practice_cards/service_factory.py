from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import Optional

from practice_cards.constants import (
    BUNDLED_DATA_FILE,
    DEFAULT_CATEGORY,
    DEFAULT_CODE_LANGUAGE,
    DEFAULT_GLOBAL_NAME,
)
from practice_cards.service.build_service import BuildService
from practice_cards.service.card_store import CardStore, default_store
from practice_cards.service.dataset_service import DatasetService
from practice_cards.service.markdown_extractor import CardExtractionService


@dataclass
class ServiceFactoryConfig:
    root_dir: Path
    practice_dir: Path
    data_file: Optional[Path] = None
    global_name: str = DEFAULT_GLOBAL_NAME
    category: str = DEFAULT_CATEGORY
    default_code_language: str = DEFAULT_CODE_LANGUAGE


class ServiceFactory:
    def __init__(self, settings: ServiceFactoryConfig) -> None:
        self.settings = settings

    @property
    def root_dir(self) -> Path:
        return self.settings.root_dir.resolve()

    @property
    def practice_dir(self) -> Path:
        return (self.root_dir / self.settings.practice_dir).resolve()

    @cache
    def dataset_service(self) -> DatasetService:
        return DatasetService(global_name=self.settings.global_name)

    @cache
    def extraction_service(self) -> CardExtractionService:
        return CardExtractionService(
            root_dir=self.root_dir,
            category=self.settings.category,
            default_code_language=self.settings.default_code_language,
        )

    @cache
    def build_service(self) -> BuildService:
        return BuildService(
            practice_dir=self.practice_dir,
            extraction_service=self.extraction_service(),
            dataset_service=self.dataset_service(),
        )

    @cache
    def card_store(self) -> CardStore:
        data_file = self.settings.data_file
        if data_file is None or data_file.resolve() == BUNDLED_DATA_FILE.resolve():
            return default_store()
        return CardStore.from_file(data_file, global_name=self.settings.global_name)
