"""Tests for interviewbook.cli."""

import argparse
import os
from datetime import date, time
from unittest.mock import patch

import pytest

from interviewbook.cli import create_parser
from interviewbook.cli.commands import (
    cmd_create_admin,
    cmd_init_db,
    cmd_send_confirmation,
    cmd_serve,
    cmd_slots,
)
from interviewbook.cli.validators import parse_date, validate_admin_args
from interviewbook.models import Role
from interviewbook.storage import BookingDB


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "cli.db")


@pytest.fixture
def admin_token_for(capsys):
    """Run create-admin against a path and return the printed token."""

    def _create(path: str) -> str:
        cmd_create_admin(argparse.Namespace(db=path, email="ada@example.com", name="Ada"))
        return capsys.readouterr().out.split("API token: ")[1].split()[0]

    return _create


class TestParser:
    """Tests for argument parsing."""

    def test_slots_date_parsed(self):
        """--date is parsed into a date."""
        args = create_parser().parse_args(["slots", "--date", "2026-10-19"])

        assert args.date == date(2026, 10, 19)
        assert args.func is cmd_slots

    def test_bad_date_exits(self):
        """Malformed dates are a usage error."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["slots", "--date", "19/10/2026"])

    def test_create_admin_requires_email(self):
        """create-admin needs --email."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["create-admin"])

    def test_global_db_option(self):
        """--db applies to every command."""
        args = create_parser().parse_args(["--db", "x.db", "init-db"])

        assert args.db == "x.db"
        assert args.func is cmd_init_db


class TestValidators:
    """Tests for CLI validators."""

    def test_parse_date_error(self):
        """parse_date raises ArgumentTypeError on bad input."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_date("tomorrow")

    def test_admin_email_trimmed(self):
        """Valid emails are trimmed in place."""
        args = argparse.Namespace(email="  ada@example.com ", name=None)

        assert validate_admin_args(args) is True
        assert args.email == "ada@example.com"

    def test_admin_email_invalid(self, capsys):
        """Emails without @ fail validation."""
        args = argparse.Namespace(email="ada", name=None)

        assert validate_admin_args(args) is False
        assert "❌" in capsys.readouterr().out


class TestCommands:
    """Tests for cmd_* functions against a temporary database."""

    def test_init_db(self, db_path, capsys):
        """init-db creates the schema."""
        cmd_init_db(argparse.Namespace(db=db_path))

        assert "Database ready" in capsys.readouterr().out
        db = BookingDB(db_path)
        assert db.list_rules() == []
        db.close()

    def test_create_admin(self, db_path, capsys):
        """create-admin prints a token that resolves to an admin."""
        cmd_create_admin(argparse.Namespace(db=db_path, email="ada@example.com", name="Ada"))

        out = capsys.readouterr().out
        token = out.split("API token: ")[1].split()[0]
        db = BookingDB(db_path)
        user = db.get_user_by_token(token)
        assert user.email == "ada@example.com"
        assert db.has_role(user.id, Role.ADMIN)
        db.close()

    def test_create_admin_duplicate(self, db_path):
        """A second admin with the same email exits with an error."""
        args = argparse.Namespace(db=db_path, email="ada@example.com", name=None)
        cmd_create_admin(args)

        with pytest.raises(SystemExit):
            cmd_create_admin(argparse.Namespace(db=db_path, email="ada@example.com", name=None))

    def test_slots(self, db_path, capsys):
        """slots prints each slot with its label."""
        db = BookingDB(db_path)
        db.init_schema()
        db.create_rule("usr_1", 1, time(9, 0), time(10, 0), 30)
        db.close()

        cmd_slots(argparse.Namespace(db=db_path, date=date(2099, 1, 5)))

        out = capsys.readouterr().out
        assert "09:00" in out
        assert "09:30" in out

    def test_slots_none(self, db_path, capsys):
        """slots reports days without slots."""
        cmd_slots(argparse.Namespace(db=db_path, date=date(2099, 1, 5)))

        assert "No slots" in capsys.readouterr().out

    def test_send_confirmation_missing_booking(self, db_path, monkeypatch, capsys):
        """Unknown booking ids exit with an error."""
        monkeypatch.setattr("interviewbook.config.RESEND_API_KEY", "re_test")

        with pytest.raises(SystemExit):
            cmd_send_confirmation(argparse.Namespace(db=db_path, booking_id="bkg_missing"))
        assert "Booking not found" in capsys.readouterr().out

    def test_send_confirmation(self, db_path, candidate, monkeypatch, mock_resend, capsys):
        """send-confirmation sends through Resend."""
        monkeypatch.setattr("interviewbook.config.RESEND_API_KEY", "re_test")
        db = BookingDB(db_path)
        db.init_schema()
        booking = db.insert_booking(candidate, date(2099, 1, 5), time(9, 0))
        db.close()

        cmd_send_confirmation(argparse.Namespace(db=db_path, booking_id=booking.id))

        mock_resend.assert_called_once()
        assert "Confirmation sent" in capsys.readouterr().out


class TestServe:
    """Tests for the serve command."""

    def test_default_app_import_string(self):
        """Without --db the server loads the module-level app."""
        args = create_parser().parse_args(["serve"])

        with patch("uvicorn.run") as run:
            cmd_serve(args)

        assert run.call_args[0][0] == "interviewbook.main:app"

    def test_db_option_reaches_app(self, db_path, admin_token_for):
        """--db serves the same database create-admin wrote to."""
        token = admin_token_for(db_path)
        args = create_parser().parse_args(["--db", db_path, "serve"])

        with patch("uvicorn.run") as run:
            cmd_serve(args)

        app = run.call_args[0][0]
        assert app.state.db.db_path == db_path
        assert app.state.db.get_user_by_token(token) is not None
        app.state.db.close()

    def test_db_option_with_reload(self, db_path, monkeypatch):
        """With --reload the path is exported for the worker process."""
        monkeypatch.delenv("INTERVIEWBOOK_DB_PATH", raising=False)
        args = create_parser().parse_args(["--db", db_path, "serve", "--reload"])

        with patch("uvicorn.run") as run:
            cmd_serve(args)

        assert run.call_args[0][0] == "interviewbook.main:app"
        assert os.environ["INTERVIEWBOOK_DB_PATH"] == db_path


class TestMain:
    """Tests for the main entry point."""

    def test_no_command_prints_help(self, capsys):
        """Running without a command prints help."""
        from interviewbook.cli import main

        with patch("sys.argv", ["interviewbook"]):
            main()

        assert "usage" in capsys.readouterr().out.lower()
