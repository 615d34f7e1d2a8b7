"""NoteTube CLI — simple command-line interface.

Usage:
    notetube "https://youtube.com/watch?v=dQw4w9WgXcQ" --intent learn
    notetube "https://youtu.be/dQw4w9WgXcQ" --intent overview --content-type entertainment
    notetube "https://youtu.be/dQw4w9WgXcQ" --transcript-only
"""

from __future__ import annotations

import json
import logging
import sys

import typer

from .errors import NoteTubeError
from .schemas import ContentType, Intent

app = typer.Typer(add_completion=False, pretty_exceptions_enable=False)


def _parse_intent(value: str) -> Intent:
    try:
        return Intent(value)
    except ValueError:
        choices = ", ".join(i.value for i in Intent)
        raise typer.BadParameter(f"must be one of: {choices} (or skim)") from None


def _parse_content_type(value: str | None) -> ContentType | None:
    if not value:
        return None
    try:
        return ContentType(value.lower())
    except ValueError:
        raise typer.BadParameter("must be educational or entertainment") from None


@app.command()
def main(
    url: str = typer.Argument(..., help="YouTube video URL (watch, youtu.be or embed link)"),
    intent: str = typer.Option("learn", "--intent", "-i", help="learn, reference, action or overview"),
    content_type: str = typer.Option(None, "--content-type", "-t", help="Overview hint: educational or entertainment"),
    transcript_only: bool = typer.Option(False, "--transcript-only", help="Print the transcript and skip the LLM"),
    raw: bool = typer.Option(False, "--raw", help="Output the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    """Turn a YouTube video's captions into notes."""
    sys.stdout.reconfigure(encoding="utf-8")
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    parsed_intent = _parse_intent(intent)
    parsed_hint = _parse_content_type(content_type)

    from .config import load_settings
    from .extractors.video import extract

    try:
        settings = load_settings()
        if transcript_only:
            transcript = extract(url, settings)
            typer.echo(transcript.text)
            raise typer.Exit()

        from .completion import OpenAICompletionClient
        from .service import generate_notes

        client = OpenAICompletionClient.from_settings(settings)
        result = generate_notes(url, parsed_intent, parsed_hint, client=client, settings=settings)
    except NoteTubeError as exc:
        typer.echo(f"Error: {exc.message}", err=True)
        raise typer.Exit(1)

    if raw:
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        typer.echo(result.text)


if __name__ == "__main__":
    app()
