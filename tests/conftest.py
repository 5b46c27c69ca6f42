from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# practice_cards.app reads its settings at import time, keep that away from the real user config dir
os.environ.setdefault("PRACTICE_CARDS_CONFIG_DIR", tempfile.mkdtemp(prefix="practice-cards-config-"))

PRACTICE_ROOT = ROOT
PRACTICE_DIR = ROOT / "practice"


def make_card(number: int, **overrides) -> dict:
    """Raw wire-format card as it appears in a generated dataset."""
    card = {
        "question": f"Question {number}?",
        "answer": [{"type": "text", "content": f"Answer {number}."}],
        "category": "practice",
        "topic": "Async Resilience",
        "topicId": "async-resilience",
        "source": "practice/async-resilience.md",
        "id": f"card-{number}",
    }
    card.update(overrides)
    return card


@pytest.fixture
def write_dataset(tmp_path: Path):
    def _write(cards: list[dict], name: str = "data.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(cards), encoding="utf-8")
        return path

    return _write
