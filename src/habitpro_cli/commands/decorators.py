"""Decorators for command functions."""

import asyncio
import functools
import sqlite3
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from habitpro_cli.models import AmbiguousIdError, HabitProError, NotFoundError
from habitpro_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
)
from habitpro_cli.utils.logger import get_logger
from habitpro_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _validation_message(error: ValidationError) -> str:
    messages = []
    for err in error.errors():
        msg = err["msg"].removeprefix("Value error, ")
        field = ".".join(str(part) for part in err["loc"])
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages)


def _to_app_error(error: Exception) -> AppError | None:
    """Translate domain and validation errors into exit-coded AppErrors."""
    if isinstance(error, NotFoundError):
        return AppError(str(error), ERROR_NOT_FOUND)
    if isinstance(error, AmbiguousIdError):
        return AppError(str(error), ERROR_INVALID_ARGS)
    if isinstance(error, HabitProError):
        return AppError(str(error), ERROR_GENERAL)
    if isinstance(error, ValidationError):
        return AppError(_validation_message(error), ERROR_INVALID_ARGS)
    if isinstance(error, ValueError):
        return AppError(str(error), ERROR_INVALID_ARGS)
    if isinstance(error, sqlite3.Error):
        return AppError(f"Storage error: {error}", ERROR_STORAGE)
    return None


def command_wrapper(func: Callable):
    """Decorator to wrap command functions with common functionality."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            app_error = e if isinstance(e, AppError) else _to_app_error(e)

            if app_error is None:
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=ERROR_GENERAL) from e

            logger.error(
                "command failed: %s (%.3fs) - %s", cmd, elapsed, str(app_error)
            )
            format_error(str(app_error))
            raise typer.Exit(code=app_error.exit_code) from e

    return wrapper
