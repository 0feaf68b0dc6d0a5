"""Error taxonomy.  Every failure is terminal and maps to one exit code."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    OTHER = 1
    # 2 is what Click/Typer use for usage errors.
    CONTENT_NOT_FOUND = 3
    CONVERTER_FAILED = 4
    FETCH_FAILED = 5
    SELECTOR_FAILED = 6
    LOCAL_FILE_NOT_FOUND = 7


class Page2MdError(Exception):
    """Base class for all pipeline failures."""

    exit_code: ExitCode = ExitCode.OTHER


class FetchFailed(Page2MdError):
    """The HTTP request (or a local read other than "missing") failed."""

    exit_code = ExitCode.FETCH_FAILED


class LocalFileNotFound(Page2MdError):
    exit_code = ExitCode.LOCAL_FILE_NOT_FOUND


class SelectorFailed(Page2MdError):
    """A title or content selector could not be evaluated."""

    exit_code = ExitCode.SELECTOR_FAILED


class ContentElementMissing(Page2MdError):
    """The content selector matched nothing but whitespace."""

    exit_code = ExitCode.CONTENT_NOT_FOUND


class ConverterFailed(Page2MdError):
    exit_code = ExitCode.CONVERTER_FAILED


class OutputWriteFailed(Page2MdError):
    exit_code = ExitCode.OTHER


class ConfigError(Page2MdError):
    """An environment or ``.env`` setting has an unusable value."""

    exit_code = ExitCode.OTHER
