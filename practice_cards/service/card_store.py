from functools import cache
from pathlib import Path
from typing import Iterable, Iterator, Optional

from loguru import logger

from practice_cards.constants import BUNDLED_DATA_FILE
from practice_cards.model import Card, TopicSummary
from practice_cards.service.dataset_service import DatasetService, validate_cards

_GENERAL_TOPIC = "General"


def topic_key(card: Card) -> str:
    return card.topic_id or card.topic or _GENERAL_TOPIC


class CardStore:
    """
    Read-only view over a validated card dataset.

    The dataset is checked once at construction; after that nothing is ever
    written, so a store can be shared freely.
    """

    def __init__(self, cards: Iterable[Card]):
        self._cards = tuple(cards)
        validate_cards(self._cards)
        self._by_id = {card.id: card for card in self._cards}

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "CardStore":
        return cls(cards)

    @classmethod
    def from_file(cls, path: Path, global_name: Optional[str] = None) -> "CardStore":
        dataset_service = DatasetService(global_name) if global_name else DatasetService()
        cards = dataset_service.read_dataset(path)
        logger.debug(f"Loaded {len(cards)} cards from {path}")
        return cls(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def get_all(self) -> tuple[Card, ...]:
        return self._cards

    def get_by_id(self, card_id: str) -> Optional[Card]:
        return self._by_id.get(card_id)

    def get_by_topic(self, topic_id: str) -> Iterator[Card]:
        return (card for card in self._cards if card.topic_id == topic_id)

    def topics(self) -> list[TopicSummary]:
        """Group cards the way the practice site's sidebar does, sorted by label."""
        summaries: dict[str, TopicSummary] = {}
        for card in self._cards:
            key = topic_key(card)
            summary = summaries.get(key)
            if summary is None:
                summaries[key] = TopicSummary(
                    topic_id=key, label=card.topic or _GENERAL_TOPIC, count=1
                )
            else:
                summary.count += 1
        return sorted(summaries.values(), key=lambda summary: summary.label.lower())

    def to_json(self) -> str:
        return DatasetService().render_json(self._cards)


@cache
def default_store() -> CardStore:
    return CardStore.from_file(BUNDLED_DATA_FILE)
