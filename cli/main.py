"""Poker Odds CLI: Typer-based command line interface."""

import json
import random
import re
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

app = typer.Typer(
    name="poker-odds",
    help="Real-time poker odds and decision support",
    no_args_is_help=True,
)
console = Console()

_SEPARATORS = re.compile(r"[\s,]+")


def split_cards(text: Optional[str]) -> List[str]:
    """Split 'As Ks', 'As,Ks' or 'AsKs' into card codes."""
    if not text:
        return []
    text = text.strip()
    if _SEPARATORS.search(text):
        return [c for c in _SEPARATORS.split(text) if c]
    return [text[i:i + 2] for i in range(0, len(text), 2)]


def _variant(value: str):
    from poker_odds.models.game import GameVariant
    try:
        return GameVariant.parse(value)
    except ValueError:
        console.print(f"[red]Unknown variant: {value}[/red]")
        console.print(f"Valid variants: {', '.join(v.value for v in GameVariant)}")
        raise typer.Exit(1)


def _fail(errors: List[str], as_json: bool):
    if as_json:
        typer.echo(json.dumps({"error": "; ".join(errors), "errors": errors,
                               "code": "INVALID_CARDS"}, indent=2))
    else:
        from poker_odds.formatters.table import TableFormatter
        TableFormatter(console).print_errors(errors)
    raise typer.Exit(1)


def _checked_cards(hole: str, board: Optional[str], variant, as_json: bool):
    """Validate card codes and parse them, exiting with every error on failure."""
    from poker_odds.analysis.validation import validate_cards
    from poker_odds.models.card import parse_cards

    hole_codes, board_codes = split_cards(hole), split_cards(board)
    validation = validate_cards(hole_codes, board_codes, variant)
    if not validation.valid:
        _fail(validation.errors, as_json)
    return parse_cards(hole_codes), parse_cards(board_codes)


def _rng(seed: Optional[int]) -> Optional[random.Random]:
    return random.Random(seed) if seed is not None else None


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level",
                                            help="Logging level (DEBUG, INFO, WARNING)"),
):
    """Real-time poker odds and decision support."""
    from poker_odds.logging_config import setup_logging
    setup_logging(level=log_level)


@app.command()
def analyze(
    hole: str = typer.Argument(..., help="Hole cards, e.g. 'AsKs' or 'As Ks'"),
    board: Optional[str] = typer.Option(None, "--board", "-b", help="Board cards"),
    variant: str = typer.Option("texasHoldem", "--variant", "-v", help="Game variant"),
    pot: Optional[float] = typer.Option(None, "--pot", help="Pot size before the call"),
    call: Optional[float] = typer.Option(None, "--call", help="Amount to call"),
    gto: bool = typer.Option(False, "--gto", help="Add GTO context to the explanation"),
    opponents: Optional[int] = typer.Option(None, "--opponents", "-o",
                                            help="Number of random opponents"),
    trials: Optional[int] = typer.Option(None, "--trials", "-t", help="Monte Carlo trials"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    ai: bool = typer.Option(False, "--ai", help="Ask the AI service to elaborate"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Full analysis: equity, outs, strength, threats and recommended action."""
    from poker_odds.analysis.analyzer import HandAnalyzer
    from poker_odds.errors import InvalidCardsError, SimulationError
    from poker_odds.models.analysis import AnalysisRequest

    request = AnalysisRequest(
        hole_cards=split_cards(hole),
        board_cards=split_cards(board),
        variant=_variant(variant),
        pot_size=pot,
        amount_to_call=call,
        gto_mode=gto,
    )
    analyzer = HandAnalyzer(equity_trials=trials, opponents=opponents, rng=_rng(seed))
    try:
        result = analyzer.analyze(request)
    except InvalidCardsError as e:
        _fail(e.errors, as_json)
    except SimulationError as e:
        console.print(f"[red]Simulation failed:[/red] {e}")
        raise typer.Exit(1)

    ai_text = None
    if ai:
        from poker_odds.ai.explainer import ExplanationGenerator
        ai_text = ExplanationGenerator().explain(result)

    if as_json:
        payload = result.to_dict()
        if ai:
            payload["aiExplanation"] = ai_text
        typer.echo(json.dumps(payload, indent=2))
        return

    from poker_odds.formatters.table import TableFormatter
    TableFormatter(console).print_analysis(result)
    if ai:
        if ai_text:
            console.print(f"\n[bold]AI:[/bold] {ai_text}")
        else:
            console.print("[dim]AI explanation unavailable; showing the template explanation.[/dim]")


@app.command()
def equity(
    hole: str = typer.Argument(..., help="Hole cards"),
    board: Optional[str] = typer.Option(None, "--board", "-b", help="Board cards"),
    vs: Optional[str] = typer.Option(None, "--vs", help="A known opponent hand"),
    variant: str = typer.Option("texasHoldem", "--variant", "-v", help="Game variant"),
    opponents: Optional[int] = typer.Option(None, "--opponents", "-o",
                                            help="Number of random opponents"),
    trials: Optional[int] = typer.Option(None, "--trials", "-t", help="Monte Carlo trials"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Estimate equity against random or known opponents."""
    from poker_odds.errors import EvaluationError, SimulationError
    from poker_odds.simulation.equity import simulate_equity

    game = _variant(variant)
    hole_cards, board_cards = _checked_cards(hole, board, game, as_json)
    opponent_hole = None
    if vs:
        opponent_hole, _ = _checked_cards(vs, board, game, as_json)

    try:
        result = simulate_equity(hole_cards, board_cards, game, opponents=opponents,
                                 trials=trials, rng=_rng(seed), opponent_hole=opponent_hole)
    except (EvaluationError, SimulationError, ValueError) as e:
        console.print(f"[red]Equity failed:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps({
            "equity": result.equity,
            "stdError": result.std_error,
            "wins": result.wins,
            "ties": result.ties,
            "losses": result.losses,
            "trials": result.trials,
            "exact": result.exact,
        }, indent=2))
        return

    from poker_odds.formatters.table import TableFormatter
    TableFormatter(console).print_equity(result, opponents or 1)


@app.command()
def outs(
    hole: str = typer.Argument(..., help="Hole cards"),
    board: str = typer.Option(..., "--board", "-b", help="Flop or turn cards"),
    variant: str = typer.Option("texasHoldem", "--variant", "-v", help="Game variant"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """List draws and clean/dirty outs."""
    from poker_odds.analysis.outs import calculate_outs, get_total_outs

    game = _variant(variant)
    hole_cards, board_cards = _checked_cards(hole, board, game, as_json)
    draws = calculate_outs(hole_cards, board_cards, game, rng=_rng(seed))
    totals = get_total_outs(draws)

    if as_json:
        typer.echo(json.dumps({
            "outs": [
                {
                    "type": d.draw_type.value,
                    "outs": [c.to_short() for c in d.outs],
                    "count": d.count,
                    "isClean": d.is_clean,
                }
                for d in draws
            ],
            "totalCleanOuts": totals.clean,
            "totalDirtyOuts": totals.dirty,
        }, indent=2))
        return

    from poker_odds.formatters.table import TableFormatter
    TableFormatter(console).print_outs(draws, totals)


@app.command()
def beats(
    hole: str = typer.Argument(..., help="Hole cards"),
    board: str = typer.Option(..., "--board", "-b", help="Board cards (flop or later)"),
    variant: str = typer.Option("texasHoldem", "--variant", "-v", help="Game variant"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Show every opponent holding that beats you right now."""
    from poker_odds.analysis.what_beats_me import analyze_what_beats_me

    game = _variant(variant)
    hole_cards, board_cards = _checked_cards(hole, board, game, as_json)
    result = analyze_what_beats_me(hole_cards, board_cards, game)

    if as_json:
        typer.echo(json.dumps({
            "beatingGroups": [
                {
                    "handName": g.hand_name,
                    "combos": g.combos,
                    "probability": g.probability,
                    "exampleHoldings": [[c.to_short() for c in h] for h in g.example_holdings],
                }
                for g in result.beating_groups
            ],
            "totalBeatingCombos": result.total_beating_combos,
            "totalPossibleCombos": result.total_possible_combos,
            "beatingProbability": result.beating_probability,
        }, indent=2))
        return

    if not result.total_possible_combos:
        console.print("[yellow]What beats me needs at least a flop.[/yellow]")
        return

    from poker_odds.formatters.table import TableFormatter
    TableFormatter(console).print_what_beats_me(result, game)


@app.command("pot-odds")
def pot_odds(
    pot: float = typer.Argument(..., help="Pot size before the call"),
    call: float = typer.Argument(..., help="Amount to call"),
    future: Optional[float] = typer.Option(None, "--future",
                                           help="Expected future winnings for implied odds"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Breakeven equity for a call."""
    from poker_odds.analysis.pot_odds import (
        calculate_implied_odds, calculate_pot_odds, format_pot_odds_ratio,
    )

    if pot <= 0 or call <= 0:
        _fail(["Pot size and amount to call must be positive numbers"], as_json)

    odds = calculate_pot_odds(pot, call)
    ratio = format_pot_odds_ratio(pot, call)
    implied = calculate_implied_odds(pot, call, future) if future is not None else None

    if as_json:
        typer.echo(json.dumps({"potOdds": odds, "potOddsRatio": ratio,
                               "impliedOdds": implied}, indent=2))
        return

    from poker_odds.formatters.table import TableFormatter
    TableFormatter(console).print_pot_odds(odds, ratio, implied)


@app.command()
def recognize(
    hand_image: Path = typer.Argument(..., help="Photo of your hole cards",
                                      exists=True, readable=True),
    board_image: Optional[Path] = typer.Option(None, "--board-image",
                                               help="Photo of the board",
                                               exists=True, readable=True),
    variant: str = typer.Option("texasHoldem", "--variant", "-v", help="Game variant"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Read cards from photos with the vision service."""
    from poker_odds import config
    from poker_odds.ai.recognizer import CardRecognizer
    from poker_odds.analysis.validation import validate_cards

    if not config.AI_API_KEY:
        console.print("[red]POKER_ODDS_AI_API_KEY not set.[/red]")
        console.print("Set it via: export POKER_ODDS_AI_API_KEY=your-key-here")
        raise typer.Exit(1)

    game = _variant(variant)
    result = CardRecognizer().recognize(hand_image, board_image, game.hole_card_count)

    errors: List[str] = []
    if not result.ambiguous:
        errors = validate_cards(list(result.hole_cards), list(result.board_cards), game).errors

    if as_json:
        typer.echo(json.dumps({
            "holeCards": list(result.hole_cards),
            "boardCards": list(result.board_cards),
            "confidence": result.confidence,
            "ambiguous": result.ambiguous,
            "message": result.message,
            "errors": errors,
        }, indent=2))
    else:
        from poker_odds.formatters.table import TableFormatter
        fmt = TableFormatter(console)
        fmt.print_recognition(result)
        if errors:
            fmt.print_errors(errors)

    if result.ambiguous or errors:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
