"""Command-line interface using Click."""

import asyncio
import sys
from pathlib import Path

import click

from . import __version__
from .config import KNOWN_PROVIDERS
from .core.lrc import parse_timeline
from .core.resolver import resolve_lyrics
from .exceptions import LrcFetchError, ValidationError
from .utils.logging import setup_logging

EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def _duration_ms(duration, duration_ms) -> int:
    if (duration is None) == (duration_ms is None):
        raise click.UsageError("Give exactly one of --duration or --duration-ms")
    if duration_ms is not None:
        return duration_ms
    return int(round(duration * 1000))


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """lrcfetch - Find synced (LRC) or plain lyrics for a song."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger
    ctx.obj['verbose'] = verbose


@cli.command()
@click.argument('artist')
@click.argument('title')
@click.option('--duration', type=float, default=None,
              help='Track duration in seconds')
@click.option('--duration-ms', type=int, default=None,
              help='Track duration in milliseconds')
@click.option('--album', default=None, help='Album name to narrow the search')
@click.option('--plain', is_flag=True, help='Fetch plain text instead of LRC')
@click.option('--provider', 'providers', multiple=True,
              type=click.Choice(KNOWN_PROVIDERS, case_sensitive=False),
              help='Provider to try (repeat to set the order)')
@click.pass_context
def fetch(ctx, artist, title, duration, duration_ms, album, plain, providers):
    """Fetch lyrics for ARTIST - TITLE and print them."""
    logger = ctx.obj['logger']
    ms = _duration_ms(duration, duration_ms)

    try:
        result = asyncio.run(resolve_lyrics(
            artist, title, ms,
            synced=not plain,
            album=album,
            providers=list(providers) or None,
        ))
    except ValidationError as e:
        logger.error(f"❌ {e}")
        click.echo(f"Invalid request: {e}", err=True)
        sys.exit(EXIT_ERROR)
    except LrcFetchError as e:
        logger.error(f"❌ {e}")
        click.echo("Could not fetch lyrics, please try again later.", err=True)
        sys.exit(EXIT_ERROR)

    if result is None:
        click.echo("No lyrics available", err=True)
        sys.exit(EXIT_NOT_FOUND)

    logger.info(f"✅ Lyrics from {result.source}")
    click.echo(result.text)


@cli.command()
@click.argument('lrc_file', type=click.Path(exists=True, dir_okay=False))
def inspect(lrc_file):
    """Parse a local LRC file and summarize it."""
    text = Path(lrc_file).read_text(encoding="utf-8")
    timeline = parse_timeline(text)
    if timeline is None:
        click.echo("No LRC content found", err=True)
        sys.exit(EXIT_NOT_FOUND)

    fields = [
        ("Title", timeline.title),
        ("Artist", timeline.artist),
        ("Album", timeline.album),
        ("Author", timeline.author),
        ("LRC by", timeline.file_author),
        ("Tool", timeline.tool),
        ("Version", timeline.version),
        ("Length", timeline.duration),
        ("Offset", timeline.offset),
    ]
    for label, value in fields:
        if value is not None:
            click.echo(f"{label}: {value}")

    # The 0 ms seed is not a lyric line from the file
    lyric_count = sum(1 for ts, text in timeline.lines.items() if ts or text)
    click.echo(f"Lines: {lyric_count}")
    click.echo(f"Invalid lines: {timeline.invalid_line_count}")


if __name__ == '__main__':
    cli()
