import json
import os
import subprocess
import sys
from pathlib import Path

from typer.testing import CliRunner

from conftest import PRACTICE_ROOT, make_card
from practice_cards.app.main import app

runner = CliRunner()


def test_build_writes_data_js(tmp_path: Path) -> None:
    output = tmp_path / "data.js"

    result = runner.invoke(
        app,
        ["build", "--root", str(PRACTICE_ROOT), "--practice-dir", "practice", "--out", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert "Generated 5 practice questions (4 Q&A pairs)" in result.output
    assert "window.PRACTICE_DATA = [" in output.read_text(encoding="utf-8")


def test_build_json_format(tmp_path: Path) -> None:
    output = tmp_path / "cards.out"

    result = runner.invoke(
        app,
        ["build", "--root", str(PRACTICE_ROOT), "--out", str(output), "--format", "json"],
    )

    assert result.exit_code == 0, result.output
    assert len(json.loads(output.read_text(encoding="utf-8"))) == 5


def test_build_missing_practice_dir_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["build", "--root", str(tmp_path), "--out", str(tmp_path / "x.js")])

    assert result.exit_code == 1
    assert not (tmp_path / "x.js").exists()


def test_validate_accepts_generated_dataset(tmp_path: Path) -> None:
    output = tmp_path / "data.js"
    runner.invoke(app, ["build", "--root", str(PRACTICE_ROOT), "--out", str(output)])

    result = runner.invoke(app, ["validate", str(output)])

    assert result.exit_code == 0, result.output
    assert "is valid: 5 cards in 3 topics" in result.output


def test_validate_rejects_duplicate_ids(write_dataset) -> None:
    path = write_dataset([make_card(1), make_card(1)])

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Duplicate card id" in result.output


def test_validate_rejects_non_utf8_dataset(tmp_path: Path) -> None:
    path = tmp_path / "data.js"
    path.write_bytes(b"window.PRACTICE_DATA = [\xff];")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "❌" in result.output
    assert "not valid UTF-8" in result.output


def test_validate_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_topics_lists_bundled_topics() -> None:
    result = runner.invoke(app, ["topics"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "async-resilience\tAsync Resilience (2)",
        "index\tIndex (2)",
        "practice-index\tPractice Index (1)",
    ]


def test_cards_list_topic() -> None:
    result = runner.invoke(app, ["cards", "list", "async-resilience"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[0].startswith("card-4\tHow do you retry")


def test_cards_list_unknown_topic() -> None:
    result = runner.invoke(app, ["cards", "list", "nothing-here"])

    assert result.exit_code == 1
    assert "No cards found" in result.output


def test_cards_show_markdown() -> None:
    result = runner.invoke(app, ["cards", "show", "card-4"])

    assert result.exit_code == 0, result.output
    assert result.output.startswith(
        "## How do you retry a transient HTTP failure without hammering the downstream service?"
    )
    assert "- Respect Retry-After headers" in result.output
    assert "Bad example:\n```csharp\nwhile (true)" in result.output


def test_cards_show_json_from_custom_dataset(write_dataset) -> None:
    path = write_dataset([make_card(1, question="Custom?")])

    result = runner.invoke(app, ["cards", "show", "card-1", "--data-file", str(path), "--format", "json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["question"] == "Custom?"


def test_cards_show_json_stdout_is_parseable_with_debug_logging(write_dataset) -> None:
    path = write_dataset([make_card(1, question="Piped?")])
    env = {
        **os.environ,
        "PYTHONPATH": str(PRACTICE_ROOT),
        "PRACTICE_CARDS_LOGGER_LEVEL": "DEBUG",
    }

    result = subprocess.run(
        [sys.executable, "-m", "practice_cards", "cards", "show", "card-1",
         "--data-file", str(path), "--format", "json"],
        capture_output=True,
        encoding="utf-8",
        env=env,
        cwd=PRACTICE_ROOT,
    )

    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["question"] == "Piped?"
    assert "Loaded 1 cards" in result.stderr


def test_cards_show_missing_card() -> None:
    result = runner.invoke(app, ["cards", "show", "card-404"])

    assert result.exit_code == 1
    assert "Card with id card-404 not found" in result.output


def test_config_get_settings_dir() -> None:
    result = runner.invoke(app, ["config", "get-settings-dir"])

    assert result.exit_code == 0
    assert result.output.strip()


def test_config_rejects_unknown_logging_level() -> None:
    result = runner.invoke(app, ["config", "set-logging-level", "--logging-level", "LOUD"])

    assert "Unknown logging level LOUD" in result.output
