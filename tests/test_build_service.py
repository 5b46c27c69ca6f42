import json
from pathlib import Path

import pytest

from conftest import PRACTICE_DIR, PRACTICE_ROOT
from practice_cards.constants import BUNDLED_DATA_FILE
from practice_cards.enums import OutputFormat
from practice_cards.error import PracticeCardsException
from practice_cards.service.build_service import BuildService
from practice_cards.service.dataset_service import DatasetService
from practice_cards.service.markdown_extractor import CardExtractionService


def _build_service(root: Path, practice_dir: Path) -> BuildService:
    return BuildService(
        practice_dir=practice_dir,
        extraction_service=CardExtractionService(root_dir=root),
        dataset_service=DatasetService(),
    )


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_collect_markdown_files_puts_index_first(tmp_path: Path) -> None:
    practice = tmp_path / "practice"
    _write(practice / "zeta.md", "")
    _write(practice / "alpha.MD", "")
    _write(practice / "index.md", "")
    _write(practice / "notes.txt", "")
    _write(practice / "linq" / "index.md", "")
    _write(practice / "linq" / "grouping.md", "")

    files = _build_service(tmp_path, practice).collect_markdown_files()

    assert [path.relative_to(practice).as_posix() for path in files] == [
        "index.md",
        "alpha.MD",
        "linq/index.md",
        "linq/grouping.md",
        "zeta.md",
    ]


def test_missing_practice_dir_raises(tmp_path: Path) -> None:
    with pytest.raises(PracticeCardsException, match="not found"):
        _build_service(tmp_path, tmp_path / "practice").collect_markdown_files()


def test_no_cards_raises(tmp_path: Path) -> None:
    _write(tmp_path / "practice" / "empty.md", "# Nothing to see\n")

    with pytest.raises(PracticeCardsException, match="No cards extracted"):
        _build_service(tmp_path, tmp_path / "practice").build_cards()


def test_ids_follow_emission_order_and_only_root_index_gets_overview(tmp_path: Path) -> None:
    practice = tmp_path / "practice"
    _write(practice / "index.md", "# Index\n\nIntro.\n\n**Q: Root?**\nA: Root answer.\n")
    _write(practice / "b-topic.md", "**Q: B?**\nA: B answer.\n")
    _write(practice / "nested" / "index.md", "# Nested\n\n**Q: Nested?**\nA: Nested answer.\n")

    cards = _build_service(tmp_path, practice).build_cards()

    assert [(card.id, card.question, card.topic_id) for card in cards] == [
        ("card-1", "Root?", "index"),
        ("card-2", "Index", "practice-index"),
        ("card-3", "B?", "b-topic"),
        ("card-4", "Nested?", "index"),
    ]
    assert cards[1].is_index is True
    assert cards[3].source == "practice/nested/index.md"


def test_build_writes_dataset_and_summary(tmp_path: Path) -> None:
    practice = tmp_path / "practice"
    _write(practice / "index.md", "# Index\n\n**Q: Root?**\nA: Root answer.\n")
    _write(practice / "caching.md", "**Q: Cache?**\nA: Yes.\n\n**Q: Evict?**\nA: LRU.\n")
    output = tmp_path / "site" / "data.js"

    summary = _build_service(tmp_path, practice).build(output)

    assert summary.output_file == output
    assert summary.files == 2
    assert summary.total_cards == 4
    assert summary.qa_cards == 3
    assert summary.index_cards == 1
    assert summary.cards_by_category == {"practice": 4}
    assert output.read_text(encoding="utf-8").startswith("// Auto-generated")
    assert len(DatasetService().read_dataset(output)) == 4


def test_sample_practice_folder_matches_bundled_dataset(tmp_path: Path) -> None:
    output = tmp_path / "practice_data.json"

    _build_service(PRACTICE_ROOT, PRACTICE_DIR).build(output, OutputFormat.json)

    built = json.loads(output.read_text(encoding="utf-8"))
    bundled = json.loads(BUNDLED_DATA_FILE.read_text(encoding="utf-8"))
    assert built == bundled
