"""page2md CLI: convert one wiki page to Markdown.

Usage:
    python cli/main.py https://wiki.example.com/display/DOC/Setup
    python cli/main.py saved-page.html --auto
    python cli/main.py URL -c "#main-content" -t "#title-text a"
    python cli/main.py URL -o '-H "Cookie: session=abc" -m 20'
    python cli/main.py URL --converter html2text -C "ignore_images=true"

Exit codes:
    0 success, 1 other failure, 3 content element not found,
    4 converter failure, 5 fetch failure, 6 selector failure,
    7 local file not found.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from page2md.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import List, Optional

import typer

from page2md.config import settings
from page2md.convert.converters import get_converter
from page2md.emitter import emit
from page2md.errors import ExitCode, Page2MdError
from page2md.pipeline import convert_page
from page2md.scraper.fetcher import is_url

logger = logging.getLogger("page2md")

app = typer.Typer(
    name="page2md",
    help="Convert a wiki page (URL or local HTML file) to clean Markdown.",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _split_location(arguments: List[str]) -> tuple[str, List[str]]:
    """Pick the location out of the positional arguments.

    Unknown flags, and any values they take, land among the positionals and
    are ignored.  The first URL wins; failing that the last non-flag argument
    is the file path.
    """
    candidates = [i for i, argument in enumerate(arguments) if not argument.startswith("-")]
    urls = [i for i in candidates if is_url(arguments[i])]
    if urls:
        index = urls[0]
    elif candidates:
        index = candidates[-1]
    else:
        raise typer.BadParameter("a URL or file path is required", param_hint="LOCATION")
    return arguments[index], arguments[:index] + arguments[index + 1:]


@app.command(context_settings={"ignore_unknown_options": True})
def convert(
    arguments: List[str] = typer.Argument(
        ..., metavar="LOCATION", help="URL (http/https) or path to an HTML file."
    ),
    auto: bool = typer.Option(
        False, "-a", "--auto", help="Write to <title-slug>.md instead of stdout."
    ),
    content: Optional[str] = typer.Option(
        None, "-c", "--content", help="CSS selector of the content element."
    ),
    title: Optional[str] = typer.Option(
        None, "-t", "--title", help="CSS selector of the title element."
    ),
    options: str = typer.Option(
        "", "-o", "--options", help="curl-style fetch options, e.g. '-H \"Cookie: x\" -m 10'."
    ),
    converter: Optional[str] = typer.Option(
        None, "--converter", help="Markdown converter: markdownify | html2text."
    ),
    converter_options: str = typer.Option(
        "", "-C", "--converter-options", help="Converter options as key=value pairs."
    ),
    output_dir: Path = typer.Option(
        Path("."), "-d", "--output-dir", help="Directory for --auto output."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log progress to stderr."),
) -> None:
    """Fetch LOCATION, extract its content and print it as Markdown."""
    _configure_logging(verbose)
    location, ignored = _split_location(arguments)
    if ignored:
        logger.debug("Ignoring unknown arguments: %s", " ".join(ignored))

    try:
        result = convert_page(
            location,
            content_selector=content,
            title_selector=title,
            fetch_options=options,
            converter=get_converter(converter or settings.markdown_converter, converter_options),
        )
        path = emit(result, auto=auto, output_dir=output_dir)
    except Page2MdError as exc:
        typer.echo(f"page2md: {exc}", err=True)
        raise typer.Exit(code=int(exc.exit_code))
    except Exception as exc:
        logger.debug("Unexpected failure", exc_info=True)
        typer.echo(f"page2md: unexpected error: {exc}", err=True)
        raise typer.Exit(code=int(ExitCode.OTHER))

    if path is not None:
        typer.echo(f"page2md: wrote {path}", err=True)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
