"""SoulSync CLI: chat with the counselor, review bookings and run the API."""

import time

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from soulsync import __version__
from soulsync.config import get_settings
from soulsync.log import configure_logging

console = Console()

_MOODS = ["very_sad", "sad", "neutral", "happy", "very_happy"]


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Override SOULSYNC_LOG_LEVEL")
def main(log_level: str | None):
    """SoulSync: a rule-based wellness companion.

    Chat with the counselor from the terminal, check which reply a message
    would get, review session bookings, or start the REST API.
    """
    configure_logging(log_level or get_settings().log_level)


# ── Counselor ────────────────────────────────────────────────────────


def _print_reply(reply, persona: str) -> None:
    title = "crisis" if reply.crisis else reply.template_key
    style = "red" if reply.crisis else ("magenta" if persona == "girl" else "blue")
    console.print(Panel(reply.text, title=title, border_style=style))


@main.command()
@click.argument("text")
@click.option("--mood", "-m", default="neutral", type=click.Choice(_MOODS))
@click.option("--persona", "-p", default="boy", type=click.Choice(["boy", "girl"]))
def reply(text: str, mood: str, persona: str):
    """Show the counselor reply TEXT would get."""
    from soulsync.counselor.engine import select_reply

    _print_reply(select_reply(text, mood, persona), persona)


@main.command()
@click.option("--mood", "-m", default="neutral", type=click.Choice(_MOODS))
@click.option("--persona", "-p", default="boy", type=click.Choice(["boy", "girl"]))
@click.option("--name", default="", help="Your name, used in the greeting")
@click.option("--delay", default=0.8, type=float, help="Seconds the counselor 'types'")
def chat(mood: str, persona: str, name: str, delay: float):
    """Interactive chat with the rule-based counselor.  Empty line quits."""
    from soulsync.counselor.engine import select_reply
    from soulsync.counselor.greeting import MOOD_INDICATORS, intro_message, quick_replies
    from soulsync.counselor.models import ChatMood

    console.print(f"\n[bold blue]SoulSync[/] | {MOOD_INDICATORS[ChatMood(mood)]}\n")
    console.print(Panel(intro_message(persona, mood, name=name), border_style="green"))
    console.print("[dim]Try: " + " | ".join(quick_replies(mood)) + "[/]\n")

    while True:
        text = console.input("[bold]you>[/] ").strip()
        if not text:
            break
        with console.status("typing..."):
            time.sleep(max(delay, 0))
        _print_reply(select_reply(text, mood, persona), persona)


@main.command()
@click.argument("text")
def classify(text: str):
    """Print the topic TEXT is classified into."""
    from soulsync.counselor.triggers import classify_topic, is_crisis

    if is_crisis(text):
        console.print("[red]crisis[/]")
        return
    topic = classify_topic(text)
    console.print(topic.value if topic else "[yellow]no topic[/]")


# ── Community ────────────────────────────────────────────────────────


@main.command()
@click.option("--strikes", "-n", default=8, help="How many strikes to list")
def ladder(strikes: int):
    """Show how long each spam strike blocks posting."""
    from soulsync.community.policy import duration_for_strike

    table = Table(title="Posting block per strike")
    table.add_column("Strike", justify="right", style="cyan")
    table.add_column("Blocked for")
    for n in range(1, strikes + 1):
        table.add_row(str(n), str(duration_for_strike(n)))
    console.print(table)


# ── Bookings ─────────────────────────────────────────────────────────

_STATUSES = ["pending", "approved", "completed", "rejected"]


@main.group()
def bookings():
    """Review counseling session requests."""


@bookings.command("list")
@click.option("--status", "-s", default=None, type=click.Choice(_STATUSES), help="Only this status")
def bookings_list(status: str | None):
    """List bookings, oldest first."""
    from soulsync.bookings.store import BookingStore

    rows = BookingStore().list_bookings(status)
    if not rows:
        console.print("[yellow]No bookings.[/]")
        return

    table = Table(title="Bookings")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("User")
    table.add_column("Phone")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Created")
    for b in rows:
        table.add_row(b.id, b.username, b.phone, b.session_type.value, b.status.value, b.created_at[:16])
    console.print(table)


@bookings.command("show")
@click.argument("booking_id")
def bookings_show(booking_id: str):
    """Show one booking with its problem description."""
    from soulsync.bookings.store import BookingStore

    booking = BookingStore().get_booking(booking_id)
    if booking is None:
        raise click.ClickException("Booking not found")
    console.print(Panel(
        booking.problem,
        title=f"{booking.username} ({booking.session_type.value}, {booking.status.value})",
        subtitle=booking.phone,
    ))


@bookings.command("set-status")
@click.argument("booking_id")
@click.argument("status", type=click.Choice(_STATUSES))
def bookings_set_status(booking_id: str, status: str):
    """Move a booking to STATUS."""
    from soulsync.bookings.store import BookingStore

    try:
        booking = BookingStore().update_status(booking_id, status)
    except LookupError as exc:
        raise click.ClickException(str(exc)) from None
    console.print(f"[green]{booking.id}[/] is now {booking.status.value}")


# ── Server ───────────────────────────────────────────────────────────


@main.command()
@click.option("--host", default="127.0.0.1")
@click.option("--port", default=8000, type=int)
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the REST API with uvicorn."""
    import uvicorn

    console.print(f"\n[bold blue]SoulSync[/] | API on http://{host}:{port}\n")
    uvicorn.run(
        "web.backend.app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=get_settings().log_level.lower(),
    )


if __name__ == "__main__":
    main()
