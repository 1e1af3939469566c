"""
Drill: terminal flashcard session.

A Rich terminal interface around the SessionController.

Commands:
- drill study     - Start a drill session
- drill decks     - List decks in the deck file
- drill match     - Check a response against an answer
- drill translit  - Show the casual spelling of an answer

In-session commands:
- :deck NAME  - switch deck
- :flip       - swap question and answer sides
- :quit       - end the session
"""
from __future__ import annotations

import asyncio
import sys
import threading
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from drillcards.config import get_settings

from .deck_library import DeckLibrary, DeckLoadError
from .matcher import matches, transliterate
from .review_item import ReviewItem
from .scheduler import ReviewScheduler
from .session import SessionController
from .stats import Ratio
from .timers import AsyncioTaskScheduler


# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="drill",
    help="Drill: adaptive flashcard review in the terminal",
    no_args_is_help=True,
)
console = Console()

PROMPT = "> "


# =============================================================================
# Styling
# =============================================================================

STYLES = {
    "correct": "bold green",
    "incorrect": "bold red",
    "info": "bold cyan",
    "dim": "dim",
}

# Card tints, reddest to greenest. A never-missed card starts in the middle.
TINTS = [
    "#ffcccc",
    "#ffdddd",
    "#ffeeee",
    "#ffffff",
    "#eeffee",
    "#ddffdd",
    "#ccffcc",
]


def card_style(item: ReviewItem) -> str:
    """Border color for a question: red after misses, greener with each hit."""
    index = 0 if item.misses > 0 else 3
    index += item.hit_streak
    return TINTS[min(index, len(TINTS) - 1)]


# =============================================================================
# Presenter
# =============================================================================


class RichPresenter:
    """Renders the session to a Rich console and holds the deck selection."""

    def __init__(
        self,
        out: Console,
        deck_name: str | None = None,
        front_selected: bool = True,
    ):
        self.out = out
        self.deck_names: list[str] = []
        self.selected = deck_name
        self.front_selected = front_selected
        self.progress = Ratio(0, 0)
        self.score = Ratio(0, 0)

    # Queried by the controller

    def current_option(self) -> str:
        if self.selected is None:
            return self.deck_names[0]
        return self.selected

    def is_front_selected(self) -> bool:
        return self.front_selected

    # Pushed by the controller

    def set_options(self, deck_names: list[str]) -> None:
        self.deck_names = list(deck_names)
        if self.selected is None and self.deck_names:
            self.selected = self.deck_names[0]

    def set_progress(self, ratio: Ratio) -> None:
        self.progress = ratio

    def set_score(self, ratio: Ratio) -> None:
        self.score = ratio

    def show_question(self, item: ReviewItem) -> None:
        header = (
            f"{self.current_option()}  |  "
            f"Progress {self.progress.render()}  |  Score {self.score.render()}"
        )
        self.out.print()
        self.out.print(Panel(
            item.question,
            title=header,
            title_align="left",
            border_style=card_style(item),
            padding=(1, 2),
        ))

    def show_answer(self, item: ReviewItem, success: bool) -> None:
        style = STYLES["correct"] if success else STYLES["incorrect"]
        icon = "[green]✓[/green]" if success else "[red]✗[/red]"

        content = f"{icon} {item.answer}"
        if item.secondary_answer:
            content += f"\n[{STYLES['dim']}]{item.secondary_answer}[/{STYLES['dim']}]"

        self.out.print(Panel(content, border_style=style, padding=(0, 2)))
        self.out.print("Press Enter to continue", style=STYLES["dim"])


# =============================================================================
# Session Loop
# =============================================================================


def _start_reader(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> None:
    """Read lines on a daemon thread and hand them to the loop thread."""

    def pump() -> None:
        while True:
            try:
                line = console.input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                loop.call_soon_threadsafe(queue.put_nowait, None)
                return
            loop.call_soon_threadsafe(queue.put_nowait, line)

    threading.Thread(target=pump, name="drill-input", daemon=True).start()


def _handle_command(
    command: str,
    controller: SessionController,
    presenter: RichPresenter,
) -> bool:
    """
    Run an in-session ':' command.

    Returns:
        False to end the session, True to keep going
    """
    name, _, arg = command[1:].partition(" ")
    name = name.lower()
    arg = arg.strip()

    if name in ("q", "quit"):
        return False

    if name == "flip":
        presenter.front_selected = not presenter.front_selected
        controller.process_deck_change()
    elif name == "deck":
        if arg not in controller.library:
            console.print(f"[red]Unknown deck: {arg!r}[/red]")
            console.print(f"Decks: {', '.join(controller.library.names)}")
        else:
            presenter.selected = arg
            controller.process_deck_change()
    else:
        console.print(f"[yellow]Unknown command: {command}[/yellow]")

    return True


async def _run_session(controller: SessionController, presenter: RichPresenter) -> None:
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    controller.begin()
    _start_reader(loop, queue)

    try:
        while True:
            line = await queue.get()
            if line is None:
                break

            text = line.strip()
            if text.startswith(":"):
                if not _handle_command(text, controller, presenter):
                    break
                continue

            controller.process_input(text)
    finally:
        controller.close()


def _load_library(deck_file: Path) -> DeckLibrary:
    try:
        return DeckLibrary.load(deck_file)
    except DeckLoadError as e:
        console.print(f"\n[red]Could not load decks:[/red] {e}")
        raise typer.Exit(1)


def _display_session_summary(controller: SessionController) -> None:
    """Display end-of-session summary."""
    console.print("\n")
    console.print(Panel(
        f"[bold]Session Complete![/bold]\n\n"
        f"Items shown: {controller.items_shown}\n"
        f"Progress: {controller.progress.render()}\n"
        f"Score: {controller.score.render()}",
        title="Summary",
        border_style="green",
    ))


# =============================================================================
# Commands
# =============================================================================


@app.command()
def study(
    deck_file: Optional[Path] = typer.Option(
        None,
        "--file", "-f",
        help="YAML deck file",
    ),
    deck: Optional[str] = typer.Option(
        None,
        "--deck", "-d",
        help="Deck to start with (default: first deck)",
    ),
    back: bool = typer.Option(
        False,
        "--back", "-b",
        help="Prompt with the back side and answer with the front",
    ),
    delay: Optional[float] = typer.Option(
        None,
        "--delay",
        help="Seconds before advancing after an answer",
    ),
) -> None:
    """
    Start an interactive drill session.

    Type an answer and press Enter. The next question follows after a short
    delay, or at once if you press Enter again.
    """
    settings = get_settings()
    library = _load_library(deck_file or settings.deck_file)

    if deck is not None and deck not in library:
        console.print(f"[red]Unknown deck: {deck!r}[/red]")
        console.print(f"Decks: {', '.join(library.names)}")
        raise typer.Exit(1)

    console.print("\nDrill - adaptive flashcards", style=STYLES["info"])
    console.print("=" * 40)
    console.print(":deck NAME to switch, :flip to swap sides, :quit to stop", style=STYLES["dim"])

    presenter = RichPresenter(console, deck_name=deck, front_selected=not back)
    controller = SessionController(
        library,
        presenter,
        AsyncioTaskScheduler(),
        scheduler=ReviewScheduler(settings.get_scheduler_config()),
        advance_delay=settings.advance_delay_seconds if delay is None else delay,
    )

    try:
        asyncio.run(_run_session(controller, presenter))
    except KeyboardInterrupt:
        console.print("\n\n[yellow]Session interrupted.[/yellow]")

    _display_session_summary(controller)


@app.command()
def decks(
    deck_file: Optional[Path] = typer.Option(
        None,
        "--file", "-f",
        help="YAML deck file",
    ),
) -> None:
    """List the decks in the deck file."""
    library = _load_library(deck_file or get_settings().deck_file)

    table = Table(title="Decks")
    table.add_column("Deck")
    table.add_column("Cards", justify="right")

    for name, count in library.get_stats().items():
        table.add_row(name, str(count))

    console.print(table)


@app.command()
def match(
    response: str = typer.Argument(..., help="What the learner typed"),
    answer: str = typer.Argument(..., help="Canonical answer"),
) -> None:
    """Check whether a response is accepted for an answer."""
    if matches(response, answer):
        console.print(f"[green]✓ accepted[/green]  {response!r} ~ {answer!r}")
    else:
        console.print(f"[red]✗ rejected[/red]  {response!r} !~ {answer!r}")
        raise typer.Exit(1)


@app.command()
def translit(
    text: str = typer.Argument(..., help="Romanized answer"),
) -> None:
    """Show the casual spelling of a romanized answer."""
    console.print(transliterate(text))


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    settings = get_settings()

    # Configure logging
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<level>{message}</level>",
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            level="DEBUG",
            rotation="1 MB",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        )

    app()


if __name__ == "__main__":
    main()
