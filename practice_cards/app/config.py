from pathlib import Path

import typer

from practice_cards.app import config_manager
from practice_cards.constants import LOG_LEVELS

app = typer.Typer()


@app.command()
def show() -> None:
    """
    Print the current settings as JSON.
    """
    settings = config_manager.read_settings()
    typer.echo(settings.model_dump_json(indent=4))


@app.command()
def set_root_dir(
    root_dir: Path = typer.Option(..., prompt=True, help="Path to the repository root")
) -> None:
    """
    Set the repository root. Card sources are recorded relative to it.
    """
    settings = config_manager.read_settings()
    settings.root_dir = root_dir
    config_manager.write_settings(settings)
    typer.echo(f"Root directory set to {root_dir}")


@app.command()
def set_practice_dir(
    practice_dir: Path = typer.Option(
        ..., prompt=True, help="Markdown directory, relative to the root directory"
    )
) -> None:
    """
    Set the directory the practice Markdown files are read from.
    """
    settings = config_manager.read_settings()
    settings.practice_dir = practice_dir
    config_manager.write_settings(settings)
    typer.echo(f"Practice directory set to {practice_dir}")


@app.command()
def set_output_file(
    output_file: Path = typer.Option(
        ..., prompt=True, help="Where build writes the dataset (.js or .json)"
    )
) -> None:
    """
    Set the default output file of the build command.
    """
    settings = config_manager.read_settings()
    settings.output_file = output_file
    config_manager.write_settings(settings)
    typer.echo(f"Output file set to {output_file}")


@app.command()
def set_data_file(
    data_file: Path = typer.Option(
        ..., prompt=True, help="Dataset the cards and topics commands read"
    )
) -> None:
    """
    Set the dataset queried by the card commands instead of the bundled one.
    """
    if not data_file.exists():
        typer.echo(f"Dataset {data_file} does not exist", err=True)
        return

    settings = config_manager.read_settings()
    settings.data_file = data_file
    config_manager.write_settings(settings)
    typer.echo(f"Data file set to {data_file}")


@app.command()
def get_settings_dir() -> None:
    """
    Get the settings directory path. This is where the settings are stored.
    """
    typer.echo(config_manager.config_dir)


@app.command()
def set_logging_level(
    logging_level: str = typer.Option(
        ...,
        prompt=True,
        help="Logging level. E.g. DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
) -> None:
    """
    Set the logging level.
    """
    logging_level = logging_level.upper()
    if logging_level not in LOG_LEVELS:
        typer.echo(f"Unknown logging level {logging_level}", err=True)
        return

    settings = config_manager.read_settings()
    settings.logger_level = logging_level
    config_manager.write_settings(settings)
    typer.echo(f"Logging level set to {logging_level}")
