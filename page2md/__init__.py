"""page2md: turn a wiki page (URL or saved HTML) into clean Markdown."""

from page2md.emitter import emit, title_to_filename
from page2md.errors import ExitCode, Page2MdError
from page2md.pipeline import ConversionResult, convert_page

__all__ = [
    "ConversionResult",
    "ExitCode",
    "Page2MdError",
    "convert_page",
    "emit",
    "title_to_filename",
]
