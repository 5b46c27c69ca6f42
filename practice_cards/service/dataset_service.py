import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from practice_cards.constants import DEFAULT_GLOBAL_NAME
from practice_cards.enums import OutputFormat
from practice_cards.error import InvalidDatasetError
from practice_cards.model import Card

_CARD_LIST = TypeAdapter(List[Card])
_ASSIGNMENT = re.compile(r"^\s*window\.([A-Za-z_$][\w$]*)\s*=\s*", re.MULTILINE)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_cards(cards: Sequence[Card]) -> None:
    """
    Reject the whole dataset unless its ids are unique and numbered exactly 1..N.

    Field-level rules (required fields, non-empty answers, paired topic labels,
    id pattern) are already enforced by the pydantic models.
    """
    seen: dict[str, int] = {}
    for position, card in enumerate(cards):
        previous = seen.get(card.id)
        if previous is not None:
            raise InvalidDatasetError(
                f"Duplicate card id: {card.id} (at positions {previous} and {position})"
            )
        seen[card.id] = position

    numbers = {card.number for card in cards}
    expected = set(range(1, len(cards) + 1))
    if numbers != expected:
        missing = sorted(expected - numbers)
        raise InvalidDatasetError(
            f"Card ids must be numbered 1..{len(cards)} without gaps, missing {missing[:10]}"
        )


def format_for_path(path: Path) -> OutputFormat:
    return OutputFormat.js if path.suffix.lower() == ".js" else OutputFormat.json


class DatasetService:
    def __init__(self, global_name: str = DEFAULT_GLOBAL_NAME):
        self.global_name = global_name

    def render_json(self, cards: Sequence[Card]) -> str:
        return json.dumps([card.to_wire() for card in cards], indent=2, ensure_ascii=False)

    def render_js(self, cards: Sequence[Card], generated_at: Optional[datetime] = None) -> str:
        generated_at = generated_at or datetime.now(timezone.utc)
        return (
            "// Auto-generated practice Q&A data from practice/ folder\n"
            f"// Generated on: {format_timestamp(generated_at)}\n"
            f"// Total cards: {len(cards)} Q&A\n"
            "\n"
            f"window.{self.global_name} = {self.render_json(cards)};\n"
        )

    def parse_json(self, text: str) -> List[Card]:
        try:
            return _CARD_LIST.validate_json(text)
        except ValidationError as e:
            raise InvalidDatasetError(f"Malformed card dataset: {e}") from e

    def parse_js(self, text: str) -> List[Card]:
        for match in _ASSIGNMENT.finditer(text):
            if match.group(1) != self.global_name:
                continue
            payload = text[match.end() :].strip()
            if payload.endswith(";"):
                payload = payload[:-1]
            return self.parse_json(payload)

        raise InvalidDatasetError(
            f"No window.{self.global_name} assignment found in dataset script"
        )

    def read_dataset(self, path: Path) -> List[Card]:
        if not path.exists():
            raise FileNotFoundError(f"Dataset {path} not found")

        logger.debug(f"Reading card dataset from {path}")
        try:
            text = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise InvalidDatasetError(f"Dataset {path} is not valid UTF-8: {e}") from e
        if format_for_path(path) == OutputFormat.js:
            cards = self.parse_js(text)
        else:
            cards = self.parse_json(text)
        validate_cards(cards)
        return cards

    def write_dataset(
        self,
        cards: Sequence[Card],
        path: Path,
        output_format: Optional[OutputFormat] = None,
    ) -> Path:
        output_format = output_format or format_for_path(path)
        if not path.parent.exists():
            path.parent.mkdir(parents=True)

        if output_format == OutputFormat.js:
            content = self.render_js(cards)
        elif output_format == OutputFormat.json:
            content = self.render_json(cards) + "\n"
        else:
            raise NotImplementedError(f"Output format {output_format} not implemented")

        path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote {len(cards)} cards to {path}")
        return path
