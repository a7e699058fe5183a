"""Tests for the command-line interface."""

import tempfile

import pytest
from click.testing import CliRunner
from rich.console import Console

from soulsync import cli
from soulsync.bookings.store import BookingStore
from soulsync.cli import main
from soulsync.config import reset_settings


def test_reply_command():
    result = CliRunner().invoke(main, ["reply", "I have an exam tomorrow", "--mood", "sad"])
    assert result.exit_code == 0
    assert "academics.low_exam_stress" in result.output


def test_reply_command_crisis():
    result = CliRunner().invoke(main, ["reply", "I want to die", "-p", "girl"])
    assert result.exit_code == 0
    assert "9152987821" in result.output


def test_classify_command():
    runner = CliRunner()
    assert runner.invoke(main, ["classify", "my career is a mess"]).output.strip() == "career"
    assert "no topic" in runner.invoke(main, ["classify", "hello there"]).output
    assert "crisis" in runner.invoke(main, ["classify", "no reason to live"]).output


def test_ladder_command():
    result = CliRunner().invoke(main, ["ladder", "-n", "3"])
    assert result.exit_code == 0
    assert "0:05:00" in result.output
    assert "0:30:00" in result.output
    assert "1 day" in result.output


def test_chat_command_quits_on_empty_line():
    result = CliRunner().invoke(main, ["chat", "--delay", "0", "--mood", "happy"], input="hello there\n\n")
    assert result.exit_code == 0
    assert "Main hoon tera companion." in result.output
    assert "mood.happy" in result.output


def test_invalid_mood_is_rejected():
    result = CliRunner().invoke(main, ["reply", "hi", "--mood", "grumpy"])
    assert result.exit_code != 0


@pytest.fixture
def booking_home(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setenv("SOULSYNC_HOME", tmpdir)
        reset_settings()
        monkeypatch.setattr(cli, "console", Console(width=200))
        yield BookingStore()
        reset_settings()


def test_bookings_list(booking_home):
    runner = CliRunner()
    assert "No bookings." in runner.invoke(main, ["bookings", "list"]).output

    first = booking_home.create_booking("StormNova417", "9876543210", "exam stress", "call")
    booking_home.create_booking("FrostVale101", "9123456780", "family", "text")
    booking_home.update_status(first.id, "approved")

    result = runner.invoke(main, ["bookings", "list"])
    assert result.exit_code == 0
    assert "StormNova417" in result.output
    assert "FrostVale101" in result.output

    approved = runner.invoke(main, ["bookings", "list", "--status", "approved"]).output
    assert "StormNova417" in approved
    assert "FrostVale101" not in approved


def test_bookings_show_and_set_status(booking_home):
    booking = booking_home.create_booking("StormNova417", "9876543210", "exam stress", "text")
    runner = CliRunner()

    shown = runner.invoke(main, ["bookings", "show", booking.id])
    assert shown.exit_code == 0
    assert "exam stress" in shown.output

    result = runner.invoke(main, ["bookings", "set-status", booking.id, "completed"])
    assert result.exit_code == 0
    assert booking_home.get_booking(booking.id).status.value == "completed"


def test_bookings_unknown_id(booking_home):
    runner = CliRunner()
    missing = runner.invoke(main, ["bookings", "set-status", "missing", "approved"])
    assert missing.exit_code != 0
    assert "Booking not found" in missing.output
    assert runner.invoke(main, ["bookings", "show", "missing"]).exit_code != 0
