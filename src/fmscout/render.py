"""Console rendering for scouting runs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Sequence

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.text import Text

from fmscout.config.weights import WeightTable
from fmscout.ingest.records import RowFailure
from fmscout.pipeline import RunSummary, ScoutReport
from fmscout.pool.ranking import RankedPlayer


RULE_WIDTH = 50
MAX_LISTED_FAILURES = 5


def _label(attribute: str) -> str:
    return attribute.replace("_", " ").title()


def make_console(*, no_color: bool = False) -> Console:
    return Console(no_color=no_color, highlight=False)


def render_header(console: Console) -> None:
    console.print()
    console.print(Text("FM Scout - Hidden Gems Finder", style="bold bright_blue"))
    console.print(Text("=" * RULE_WIDTH, style="blue"))


@contextmanager
def scoring_progress(console: Console) -> Iterator[Callable[[int, int], None]]:
    """Show a progress bar while players are scored; yields the update callback."""

    progress = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
        disable=not console.is_terminal,
    )
    task_id = progress.add_task("Analyzing players", total=None)

    def update(done: int, total: int) -> None:
        progress.update(task_id, completed=done, total=total)

    with progress:
        yield update


def render_summary(console: Console, summary: RunSummary, failures: Sequence[RowFailure]) -> None:
    text = Text()
    text.append("Rows read: ")
    text.append(str(summary.rows_read), style="cyan")
    text.append("  Rejected: ")
    text.append(str(summary.rows_rejected), style="red" if summary.rows_rejected else "cyan")
    text.append("  Unscored: ")
    text.append(str(summary.unscored_players), style="cyan")
    text.append("  Matches: ")
    text.append(str(summary.matches), style="bold green" if summary.matches else "yellow")
    console.print(text)

    if summary.empty_input:
        console.print(Text("Input file is empty.", style="yellow"))

    if failures:
        reasons = ", ".join(f"{kind}={count}" for kind, count in sorted(summary.rejection_reasons.items()))
        console.print(Text(f"Rejected rows ({reasons}):", style="red"))
        for failure in failures[:MAX_LISTED_FAILURES]:
            console.print(Text(f"  {failure.describe()}", style="red"))
        more = len(failures) - MAX_LISTED_FAILURES
        if more > 0:
            console.print(Text(f"  +{more} more", style="red"))


def render_player(console: Console, entry: RankedPlayer, weights: WeightTable) -> None:
    scored = entry.scored
    player = scored.player

    console.print()
    console.print(Text(f"{entry.rank}. Recommendation", style="bright_magenta"))
    console.print(Text("=" * RULE_WIDTH, style="yellow"))
    console.print(Text(player.name, style="bold bright_green"))
    console.print(Text("=" * RULE_WIDTH, style="yellow"))

    lines = [
        ("Club", player.club, "cyan"),
        ("Nationality", player.nationality, "cyan"),
        ("Position", f"{player.position} ({player.category.value})", "cyan"),
        ("Age", str(player.age), "cyan"),
        ("Value", f"€{player.value / 1_000_000:.2f}M", ""),
        ("Wage", f"€{player.wage / 1_000:.2f}K/week", ""),
        ("Current Ability", str(player.current_ability), "yellow"),
        ("Potential Ability", str(player.potential_ability), "bright_yellow"),
    ]
    for label, value, style in lines:
        text = Text(f"{label}: ")
        text.append(value, style=style)
        console.print(text)

    key_attributes = weights.key_attributes(player.category)
    if key_attributes:
        console.print()
        console.print(Text("Key Attributes:", style="underline"))
        for attribute in key_attributes:
            console.print(f"{_label(attribute)}: {getattr(player, attribute)}")

    console.print()
    text = Text("Overall Score: ")
    text.append(f"{scored.score:.2f}", style="bold")
    console.print(text)


def render_report(console: Console, report: ScoutReport, weights: WeightTable) -> None:
    """Print the run summary followed by the ranked shortlist, in order."""

    render_summary(console, report.summary, report.failures)
    if not report.shortlist:
        console.print()
        console.print(Text("No players matched the filters.", style="yellow"))
        return

    console.print()
    console.print(f"Found {report.summary.matches} potential signings:")
    for entry in report.shortlist:
        render_player(console, entry, weights)
