import json

import structlog
import typer

from cloudup.core.config import get_settings
from cloudup.core.logging import configure_logging
from cloudup.services.media_service import MediaService

logger = structlog.get_logger()

app = typer.Typer(help="Upload and delete images on Cloudinary.", no_args_is_help=True)


def parse_pairs(pairs: list[str] | None) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"expected key=value, received: {pair}")
        parsed[key.strip()] = value
    return parsed


@app.callback()
def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)


@app.command()
def upload(
    item: str = typer.Argument(..., help="Local file path or http(s) URL"),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help="Tag to attach, repeatable"),
    option: list[str] | None = typer.Option(None, "--option", "-o", help="Upload parameter as key=value"),
) -> None:
    options = parse_pairs(option)
    result = MediaService().upload(item, tags=tag, **options)
    if not result.ok:
        typer.echo(result.error, err=True)
        raise typer.Exit(code=1)
    typer.echo(result.value.model_dump_json(indent=2, exclude_none=True))


@app.command()
def delete(
    item: str = typer.Argument(..., help="Public id, or prefix with --prefix"),
    prefix: bool = typer.Option(False, "--prefix", help="Delete every image whose public id starts with ITEM"),
) -> None:
    service = MediaService()
    result = service.delete_by_prefix(item) if prefix else service.delete_by_public_id(item)
    if not result.ok:
        typer.echo(result.error, err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(result.value.model_dump(exclude_none=True)))


@app.command()
def url(
    public_id: str = typer.Argument(...),
    transform: list[str] | None = typer.Option(None, "--transform", "-x", help="Transformation as key=value"),
    version: str | None = typer.Option(None, "--version"),
    format: str | None = typer.Option(None, "--format"),
) -> None:
    transformations = parse_pairs(transform)
    try:
        link = MediaService().image_url(public_id, version=version, format=format, **transformations)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(link)


if __name__ == "__main__":
    app()
