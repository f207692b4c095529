"""Rich table formatting for terminal output."""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text

from poker_odds.analysis.what_beats_me import in_range_examples
from poker_odds.models.analysis import (
    ActionOption, AnalysisResult, Confidence, EquityResult, HandOddsEntry,
    HandStrengthSummary, OutInfo, OutsTotals, RecognitionResult, WhatBeatsMeResult,
)
from poker_odds.models.card import cards_to_str
from poker_odds.models.game import GameVariant

CONFIDENCE_STYLES = {
    Confidence.STRONG: "green",
    Confidence.MODERATE: "yellow",
    Confidence.MARGINAL: "dim",
}


class TableFormatter:
    """Format analysis results as Rich tables for terminal display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print_analysis(self, result: AnalysisResult) -> None:
        """Print a full analysis: summary, actions, outs, odds and threats."""
        summary = Table(title=f"{result.variant.label}: {result.street.value.title()}",
                        show_header=False)
        summary.add_column("Field", style="cyan")
        summary.add_column("Value")
        summary.add_row("Hole cards", cards_to_str(result.hole_cards))
        summary.add_row("Board", cards_to_str(result.board_cards) or "-")
        summary.add_row("Hand", result.hand_name)
        if result.improved_hand_name:
            summary.add_row("Drawing to", result.improved_hand_name)
        summary.add_row("Equity", f"{result.equity * 100:.1f}%")
        if result.pot_odds is not None:
            summary.add_row("Pot odds", f"{result.pot_odds * 100:.1f}% ({result.pot_odds_ratio})")
        summary.add_row("Recommended", f"[bold]{result.recommended_action.value.upper()}[/bold]")
        self.console.print(summary)

        self.print_hand_strength(result.hand_strength)
        self.print_actions(result.top_actions)
        if result.outs:
            self.print_outs(result.outs, OutsTotals(result.total_clean_outs,
                                                    result.total_dirty_outs))
        if result.hand_odds:
            self.print_hand_odds(result.hand_odds)
        if result.what_beats_me.total_possible_combos:
            self.print_what_beats_me(result.what_beats_me, result.variant)
        if result.explanation:
            self.console.print(Panel(result.explanation, title="Explanation"))

    def print_hand_strength(self, strength: HandStrengthSummary) -> None:
        content = Text()
        content.append(f"{strength.label}", style="bold")
        content.append(f"  ({strength.category.value})\n")
        content.append(f"{strength.description}\n")
        content.append(f"Board: {strength.board_description}\n", style="dim")
        content.append(f"Vulnerability: {strength.vulnerability:.2f}")
        if strength.draw_label:
            content.append(f"\nDraw: {strength.draw_label}")
        title = "Hand Strength" + (" [green](nutted)[/green]" if strength.is_nutted else "")
        self.console.print(Panel(content, title=title))

    def print_actions(self, actions: Sequence[ActionOption]) -> None:
        table = Table(title="Top Actions")
        table.add_column("Action", style="bold")
        table.add_column("Confidence")
        table.add_column("Reasoning")
        for option in actions:
            style = CONFIDENCE_STYLES[option.confidence]
            table.add_row(option.label,
                          f"[{style}]{option.confidence.label}[/{style}]",
                          option.reasoning)
        self.console.print(table)

    def print_outs(self, outs: Sequence[OutInfo], totals: OutsTotals) -> None:
        if not outs:
            self.console.print("[dim]No draws: outs are only counted on the flop and turn.[/dim]")
            return

        table = Table(title=f"Outs: {totals.clean} clean, {totals.dirty} dirty")
        table.add_column("Draw", style="cyan")
        table.add_column("Count", justify="right")
        table.add_column("Clean")
        table.add_column("Cards")
        for draw in outs:
            count = f"{draw.count:g}"
            clean = "[green]yes[/green]" if draw.is_clean else "[red]no[/red]"
            table.add_row(draw.draw_type.display_name, count, clean,
                          cards_to_str(draw.outs) or "[dim]backdoor[/dim]")
        self.console.print(table)

    def print_hand_odds(self, entries: Sequence[HandOddsEntry]) -> None:
        table = Table(title="Final Hand Odds")
        table.add_column("Hand", style="cyan")
        table.add_column("Probability", justify="right")
        for entry in entries:
            name = f"{entry.hand_type} [green](current)[/green]" if entry.currently_have \
                else entry.hand_type
            table.add_row(name, f"{entry.probability * 100:.1f}%")
        self.console.print(table)

    def print_what_beats_me(self, result: WhatBeatsMeResult,
                            variant: GameVariant = GameVariant.TEXAS_HOLDEM) -> None:
        if not result.beating_groups:
            self.console.print(Panel(
                f"Nothing beats you right now ({result.total_possible_combos} holdings checked).",
                title="What Beats Me",
                style="green",
            ))
            return

        table = Table(title=(
            f"What Beats Me: {result.total_beating_combos}/{result.total_possible_combos} "
            f"holdings ({result.beating_probability * 100:.1f}%)"
        ))
        table.add_column("Hand", style="cyan")
        table.add_column("Combos", justify="right")
        table.add_column("Probability", justify="right")
        table.add_column("Examples")
        for group in result.beating_groups:
            in_range = set(in_range_examples(group, variant))
            examples = ", ".join(
                cards_to_str(h) + (" *" if h in in_range else "")
                for h in group.example_holdings
            )
            table.add_row(group.hand_name, str(group.combos),
                          f"{group.probability * 100:.1f}%", examples)
        self.console.print(table)
        self.console.print("[dim]* within a typical heads-up opening range[/dim]")

    def print_equity(self, result: EquityResult, opponents: int = 1) -> None:
        table = Table(title=f"Equity vs {opponents} opponent(s)", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Equity", f"{result.equity * 100:.2f}%")
        if result.exact:
            table.add_row("Method", "exact enumeration")
        else:
            table.add_row("Std. error", f"±{result.std_error * 100:.2f}%")
            table.add_row("Trials", str(result.trials))
        total = result.wins + result.ties + result.losses
        if total:
            table.add_row("Win", f"{result.wins / total * 100:.1f}%")
            table.add_row("Tie", f"{result.ties / total * 100:.1f}%")
            table.add_row("Lose", f"{result.losses / total * 100:.1f}%")
        if result.truncated:
            table.add_row("Note", "[yellow]stopped early[/yellow]")
        self.console.print(table)

    def print_pot_odds(self, pot_odds: float, ratio: str,
                       implied: Optional[float] = None) -> None:
        table = Table(title="Pot Odds", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Breakeven equity", f"{pot_odds * 100:.1f}%")
        table.add_row("Ratio", ratio)
        if implied is not None:
            table.add_row("With implied odds", f"{implied * 100:.1f}%")
        self.console.print(table)

    def print_recognition(self, result: RecognitionResult) -> None:
        style = "yellow" if result.ambiguous else "green"
        content = Text()
        content.append(f"Hole cards: {' '.join(result.hole_cards) or '-'}\n")
        content.append(f"Board: {' '.join(result.board_cards) or '-'}\n")
        content.append(f"Confidence: {result.confidence}")
        if result.message:
            content.append(f"\n\n{result.message}")
        self.console.print(Panel(content, title="Recognized Cards", border_style=style))

    def print_errors(self, errors: List[str]) -> None:
        """Print every validation error."""
        self.console.print("[red]Invalid input:[/red]")
        for error in errors:
            self.console.print(f"  - {error}")
