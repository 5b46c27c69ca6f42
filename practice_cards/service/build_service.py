from collections import Counter
from pathlib import Path
from typing import List, Optional

from loguru import logger

from practice_cards.enums import OutputFormat
from practice_cards.error import PracticeCardsException
from practice_cards.model import BuildSummary, Card, ExtractedCard
from practice_cards.service.dataset_service import DatasetService, validate_cards
from practice_cards.service.markdown_extractor import CardExtractionService

_INDEX_FILE = "index.md"


def _walk_order(path: Path) -> tuple[bool, str]:
    return path.name.lower() != _INDEX_FILE, path.name


class BuildService:
    """
    Generates the practice card dataset from a tree of Markdown files.
    """

    def __init__(
        self,
        practice_dir: Path,
        extraction_service: CardExtractionService,
        dataset_service: DatasetService,
    ):
        self.practice_dir = practice_dir
        self.extraction_service = extraction_service
        self.dataset_service = dataset_service

    def collect_markdown_files(self, directory: Optional[Path] = None) -> List[Path]:
        """
        Recursively collect Markdown files, ``index.md`` first in every directory.

        Args:
            directory: Directory to walk, defaults to the practice directory

        Returns:
            List[Path]: Markdown files in emission order
        """
        directory = directory or self.practice_dir
        if not directory.is_dir():
            raise PracticeCardsException(f"Practice directory {directory} not found")

        files: List[Path] = []
        for entry in sorted(directory.iterdir(), key=_walk_order):
            if entry.is_dir():
                files.extend(self.collect_markdown_files(entry))
            elif entry.is_file() and entry.name.lower().endswith(".md"):
                files.append(entry)
        return files

    def _is_practice_index(self, path: Path) -> bool:
        return path.relative_to(self.practice_dir).as_posix().lower() == _INDEX_FILE

    def extract_all(self, files: List[Path]) -> List[ExtractedCard]:
        extracted: List[ExtractedCard] = []

        for path in files:
            content = path.read_text(encoding="utf-8")
            try:
                extracted.extend(self.extraction_service.extract_qa(content, path))
            except ValueError as e:
                raise PracticeCardsException(f"Cannot extract cards from {path}: {e}") from e

            if self._is_practice_index(path):
                overview = self.extraction_service.extract_index_overview(content, path)
                if overview:
                    extracted.append(overview)

        return extracted

    def build_cards(self) -> List[Card]:
        files = self.collect_markdown_files()
        logger.info(f"Found {len(files)} markdown files in {self.practice_dir}")

        extracted = self.extract_all(files)
        if not extracted:
            raise PracticeCardsException(f"No cards extracted from {self.practice_dir}")

        cards = [
            Card.from_extracted(card, number)
            for number, card in enumerate(extracted, start=1)
        ]
        validate_cards(cards)
        return cards

    def build(
        self, output_file: Path, output_format: Optional[OutputFormat] = None
    ) -> BuildSummary:
        logger.info(f"Generating practice Q&A data from {self.practice_dir}")
        cards = self.build_cards()
        self.dataset_service.write_dataset(cards, output_file, output_format)

        index_count = sum(1 for card in cards if card.is_index)
        qa_count = len(cards) - index_count
        by_category = Counter(card.category for card in cards)
        logger.info(f"Generated {len(cards)} practice questions ({qa_count} Q&A pairs)")
        for category, count in by_category.most_common():
            logger.info(f"  - {category}: {count} cards")

        return BuildSummary(
            output_file=output_file,
            files=len({card.source for card in cards}),
            total_cards=len(cards),
            qa_cards=qa_count,
            index_cards=index_count,
            cards_by_category=dict(by_category.most_common()),
        )
