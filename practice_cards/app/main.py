from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from typer import Typer, Argument, Option

from practice_cards.app import config_manager, get_service_factory
from practice_cards.app.cards import app as cards_app
from practice_cards.app.config import app as config_app
from practice_cards.enums import OutputFormat
from practice_cards.error import PracticeCardsException
from practice_cards.service.card_store import CardStore

app = Typer()
app.add_typer(config_app, name="config", help="Configuration commands")
app.add_typer(cards_app, name="cards", help="Card lookup commands")


@app.command()
def build(
    root: Optional[Path] = Option(
        None, help="Repository root, card sources are recorded relative to it"
    ),
    practice_dir: Optional[Path] = Option(
        None, help="Directory with the practice Markdown files, relative to the root"
    ),
    out: Optional[Path] = Option(None, help="The file to write the dataset to"),
    format: Optional[OutputFormat] = Option(
        None, help="Output format, guessed from the file suffix if not given"
    ),
) -> None:
    """
    Generate the practice card dataset from a folder of Markdown files.
    """
    from practice_cards.service.build_service import BuildService

    settings = config_manager.read_settings()
    service_factory = get_service_factory(root_dir=root, practice_dir=practice_dir)
    build_service: BuildService = service_factory.build_service()

    if out is None:
        out = settings.output_file
        format = format or settings.output_format
    try:
        summary = build_service.build(out, format)
    except PracticeCardsException as e:
        logger.error(f"Build failed: {e}")
        raise typer.Exit(code=1)

    typer.echo(
        f"✅ Generated {summary.total_cards} practice questions "
        f"({summary.qa_cards} Q&A pairs) in {summary.output_file}"
    )


@app.command()
def validate(
    dataset: Path = Argument(..., help="Dataset to check (.json or data.js)"),
) -> None:
    """
    Check a generated dataset: card shape, unique ids numbered 1..N.
    """
    if not dataset.exists():
        typer.echo(f"Dataset {dataset} not found", err=True)
        raise typer.Exit(code=1)

    try:
        global_name = config_manager.read_settings().global_name
        store = CardStore.from_file(dataset, global_name=global_name)
    except PracticeCardsException as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✅ {dataset} is valid: {len(store)} cards in {len(store.topics())} topics")


@app.command()
def topics(
    data_file: Optional[Path] = Option(
        None, help="Dataset to read (.json or data.js), the bundled dataset if not given"
    ),
) -> None:
    """
    List the topics of the dataset with their card counts.
    """
    store: CardStore = get_service_factory(data_file=data_file).card_store()
    for summary in store.topics():
        typer.echo(f"{summary.topic_id}\t{summary.label} ({summary.count})")


if __name__ == "__main__":
    app()
