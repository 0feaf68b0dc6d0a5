"""Write a :class:`ConversionResult` to stdout or to a title-named file."""

from __future__ import annotations

import logging
import re
import sys
import unicodedata
from pathlib import Path
from typing import Optional, TextIO, Union

from page2md.errors import OutputWriteFailed
from page2md.pipeline import ConversionResult

logger = logging.getLogger(__name__)


def title_to_filename(title: str) -> str:
    """Turn a page title into a file stem.

    ``"Getting Started: Setup!"`` becomes ``"getting-started-setup"``.
    """
    ascii_title = (
        unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    )
    slug = re.sub(r"[ _]", "-", ascii_title.lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def emit(
    result: ConversionResult,
    auto: bool = False,
    output_dir: Union[str, Path] = ".",
    stream: Optional[TextIO] = None,
) -> Optional[Path]:
    """Print *result* or, with *auto*, write it to ``<output_dir>/<slug>.md``.

    Existing files are overwritten.  Returns the written path, if any.

    Raises:
        OutputWriteFailed: If no file name can be derived from the title or
            the file cannot be written.
    """
    if not auto:
        (stream or sys.stdout).write(result.markdown + "\n")
        return None

    stem = title_to_filename(result.title)
    if not stem:
        raise OutputWriteFailed(
            f"Cannot derive a file name from title {result.title!r} of {result.location}"
        )

    path = Path(output_dir) / f"{stem}.md"
    try:
        path.write_text(result.markdown + "\n", encoding="utf-8")
    except OSError as exc:
        raise OutputWriteFailed(f"Failed to write {path}: {exc}") from exc
    logger.info("Wrote %s", path)
    return path
