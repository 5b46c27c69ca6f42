import json
from pathlib import Path
from typing import Optional

import typer
from typer import Typer, Argument, Option

from practice_cards.app import get_service_factory
from practice_cards.enums import DisplayFormat
from practice_cards.service.card_formatter import render_card_markdown
from practice_cards.service.card_store import CardStore

app = Typer()

_DATA_FILE_HELP = "Dataset to read (.json or data.js), the bundled dataset if not given"


@app.command("list")
def list_cards(
    topic_id: str = Argument(..., help="Slug of the topic, e.g. async-resilience"),
    data_file: Optional[Path] = Option(None, help=_DATA_FILE_HELP),
) -> None:
    """
    List the cards of one topic in dataset order.
    """
    store: CardStore = get_service_factory(data_file=data_file).card_store()
    cards = list(store.get_by_topic(topic_id))
    if not cards:
        typer.echo(f"No cards found for topic {topic_id}", err=True)
        raise typer.Exit(code=1)

    for card in cards:
        typer.echo(f"{card.id}\t{card.question}")


@app.command()
def show(
    card_id: str = Argument(..., help="Id of the card, e.g. card-1"),
    data_file: Optional[Path] = Option(None, help=_DATA_FILE_HELP),
    format: DisplayFormat = Option(DisplayFormat.md, help="The format of the output"),
) -> None:
    """
    Show a single card.

    E.g. show the first card as raw JSON:
    > cards show card-1 --format json
    """
    store: CardStore = get_service_factory(data_file=data_file).card_store()
    card = store.get_by_id(card_id)
    if card is None:
        typer.echo(f"Card with id {card_id} not found", err=True)
        raise typer.Exit(code=1)

    if format == DisplayFormat.json:
        typer.echo(json.dumps(card.to_wire(), indent=2, ensure_ascii=False))
    elif format == DisplayFormat.md:
        typer.echo(render_card_markdown(card), nl=False)
    else:
        raise NotImplementedError(f"Output format {format} not implemented")
