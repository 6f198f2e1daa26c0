"""Unit tests for command decorators."""

import sqlite3

import pytest
import typer
from pydantic import BaseModel, ValidationError

from habitpro_cli.commands.decorators import AppError, _to_app_error, command_wrapper
from habitpro_cli.models import AmbiguousIdError, HabitProError, NotFoundError
from habitpro_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
)


class _Strict(BaseModel):
    count: int


def _validation_error() -> ValidationError:
    try:
        _Strict(count="many")
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


class TestAppError:
    def test_defaults_to_general_exit_code(self):
        err = AppError("boom")
        assert str(err) == "boom"
        assert err.exit_code == ERROR_GENERAL


class TestErrorMapping:
    @pytest.mark.parametrize(
        "error,exit_code",
        [
            (NotFoundError("task", "abc"), ERROR_NOT_FOUND),
            (AmbiguousIdError("two matches"), ERROR_INVALID_ARGS),
            (HabitProError("domain"), ERROR_GENERAL),
            (ValueError("bad date"), ERROR_INVALID_ARGS),
            (sqlite3.OperationalError("database is locked"), ERROR_STORAGE),
        ],
    )
    def test_known_errors(self, error, exit_code):
        assert _to_app_error(error).exit_code == exit_code

    def test_validation_error_message_names_field(self):
        app_error = _to_app_error(_validation_error())
        assert app_error.exit_code == ERROR_INVALID_ARGS
        assert str(app_error).startswith("count: ")

    def test_unknown_error_is_not_mapped(self):
        assert _to_app_error(KeyError("x")) is None


class TestCommandWrapper:
    def test_sync_result_passes_through(self):
        @command_wrapper
        def cmd():
            return 42

        assert cmd() == 42

    def test_async_function_is_run(self):
        @command_wrapper
        async def cmd(value):
            return value * 2

        assert cmd(21) == 42

    def test_app_error_exits_with_its_code(self, capsys):
        @command_wrapper
        def cmd():
            raise AppError("nope", exit_code=ERROR_INVALID_ARGS)

        with pytest.raises(typer.Exit) as exc_info:
            cmd()
        assert exc_info.value.exit_code == ERROR_INVALID_ARGS
        assert "nope" in capsys.readouterr().out

    def test_not_found_exits_with_not_found_code(self):
        @command_wrapper
        async def cmd():
            raise NotFoundError("task", "abc")

        with pytest.raises(typer.Exit) as exc_info:
            cmd()
        assert exc_info.value.exit_code == ERROR_NOT_FOUND

    def test_unexpected_error_exits_general(self, capsys):
        @command_wrapper
        def cmd():
            raise KeyError("surprise")

        with pytest.raises(typer.Exit) as exc_info:
            cmd()
        assert exc_info.value.exit_code == ERROR_GENERAL
        assert "An unexpected error occurred" in capsys.readouterr().out

    def test_typer_exit_is_reraised(self):
        @command_wrapper
        def cmd():
            raise typer.Exit(0)

        with pytest.raises(typer.Exit) as exc_info:
            cmd()
        assert exc_info.value.exit_code == 0
