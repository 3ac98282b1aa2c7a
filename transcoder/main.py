import json
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import click

from transcoder.config.settings import Settings
from transcoder.ghostscript.exceptions import TranscoderError
from transcoder.ghostscript.factory import TranscoderFactory
from transcoder.ghostscript.transcoder import Transcoder
from transcoder.logging.logger import Log


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except TranscoderError as exc:
        Log.error(str(exc))
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _transcoder(ctx: click.Context) -> Transcoder:
    factory: Callable[[], Transcoder] = ctx.obj
    with _reporting_errors():
        return factory()


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Ghostscript-backed PDF conversion and text extraction."""
    settings = Settings()
    Log.configure(settings.log_level)
    ctx.obj = lambda: TranscoderFactory.create(settings)


@cli.command(name="extract-text")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--page-start", default=0, show_default=True, help="First page (1-based)")
@click.option("--page-count", default=0, show_default=True, help="Number of pages")
@click.pass_context
def extract_text(ctx: click.Context, input_path: str, page_start: int, page_count: int) -> None:
    """Print the cleaned text of each page as a JSON array.

    Example:

        transcoder extract-text report.pdf --page-start 2 --page-count 3
    """
    transcoder = _transcoder(ctx)
    with _reporting_errors():
        pages = transcoder.extract_text(input_path, page_start, page_count)
    click.echo(json.dumps(pages))


@cli.command(name="to-image")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("destination")
@click.option("--page", default=1, show_default=True, help="Page to render")
@click.pass_context
def to_image(ctx: click.Context, input_path: str, destination: str, page: int) -> None:
    """Render one page to a JPEG file."""
    transcoder = _transcoder(ctx)
    with _reporting_errors():
        output = transcoder.to_image(input_path, destination, page)
    click.echo(str(output))


@cli.command(name="to-images")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("destination")
@click.option("--pages", default=0, show_default=True, help="Render first N pages (0 = all)")
@click.pass_context
def to_images(ctx: click.Context, input_path: str, destination: str, pages: int) -> None:
    """Render pages to JPEG files; DESTINATION may contain a %d page placeholder."""
    transcoder = _transcoder(ctx)
    with _reporting_errors():
        output = transcoder.to_images(input_path, destination, pages)
    click.echo(str(output))


@cli.command(name="to-pdf")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("destination")
@click.option("--page-start", required=True, type=click.IntRange(min=1))
@click.option("--page-count", required=True, type=click.IntRange(min=1))
@click.pass_context
def to_pdf(
    ctx: click.Context,
    input_path: str,
    destination: str,
    page_start: int,
    page_count: int,
) -> None:
    """Copy a page range into a new PDF."""
    transcoder = _transcoder(ctx)
    with _reporting_errors():
        output = transcoder.to_pdf(input_path, destination, page_start, page_count)
    click.echo(str(output))


@cli.command(name="optimize")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("destination")
@click.option(
    "--quality",
    default="ebook",
    show_default=True,
    type=click.Choice(list(Transcoder.PDF_QUALITIES)),
)
@click.pass_context
def optimize(ctx: click.Context, input_path: str, destination: str, quality: str) -> None:
    """Rewrite a PDF with a Ghostscript PDFSETTINGS preset."""
    transcoder = _transcoder(ctx)
    with _reporting_errors():
        output = transcoder.optimize_pdf(input_path, destination, quality)
    click.echo(str(output))


@cli.command(name="add-bookmarks")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_path")
@click.argument("bookmarks_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def add_bookmarks(
    ctx: click.Context,
    input_path: str,
    output_path: str,
    bookmarks_path: str,
) -> None:
    """Apply a pdfmark bookmarks file to a PDF."""
    transcoder = _transcoder(ctx)
    with _reporting_errors():
        output = transcoder.add_bookmarks(input_path, output_path, bookmarks_path)
    click.echo(str(output))


def main() -> None:
    """Entry point: load settings -> build transcoder -> dispatch command."""
    cli()


if __name__ == "__main__":
    main()
