"""
Entry point: ballot totals, aggregated role report and CSV exports.

Every command reads a tournament bundle (JSON with the tournament, its
ballots and the last aggregated report).

Usage:
    python -m src.run totals  data/tournament.json
    python -m src.run report  data/tournament.json --csv output/report.csv --save
    python -m src.run export  data/tournament.json --out output/ballots.csv
    python -m src.run roster  data/tournament.json
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

import src.config as cfg
from src.bundle import apply_roster_to_bundle, load_bundle, refresh_aggregate, save_bundle
from src.export.ballots_csv import export_ballots_to_csv
from src.models import AggregatedReport, Side, TournamentBundle, Winner
from src.scoring.aggregate import aggregated_report_to_csv, format_number
from src.scoring.totals import ballot_totals


def _default_path(prefix: str) -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(cfg.OUTPUT_DIR) / f"{prefix}_{timestamp}.csv"


def _write_csv(content: str, filepath: Path, console: Console) -> Path:
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(content, encoding="utf-8")
    console.print(f"  💾 CSV saved to [bold cyan]{escape(str(filepath))}[/bold cyan]")
    return filepath


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

def print_totals(bundle: TournamentBundle, console: Console) -> None:
    """Ballot list with side totals and the verdict of each ballot."""
    table = Table(title=f"{escape(bundle.tournament.name)} · Ballots", show_header=True)
    table.add_column("Round", justify="right", width=6)
    table.add_column("Judge", width=24)
    table.add_column("P Team", width=8)
    table.add_column("D Team", width=8)
    table.add_column("Our side", width=12)
    table.add_column("P", justify="right", width=5)
    table.add_column("D", justify="right", width=5)
    table.add_column("Diff", justify="right", width=6)
    table.add_column("Winner", width=18)

    for ballot in bundle.ballots:
        totals = ballot_totals(ballot)
        if totals.winner == Winner.PROSECUTION:
            winner = "[green]Prosecution[/green]"
        elif totals.winner == Winner.DEFENSE:
            winner = "[red]Defense[/red]"
        else:
            winner = "[dim]Tie[/dim]"
        table.add_row(
            str(ballot.round_number),
            escape(ballot.judge_name),
            escape(ballot.prosecution_team_number),
            escape(ballot.defense_team_number),
            ballot.our_side.label,
            str(totals.prosecution_total),
            str(totals.defense_total),
            f"{totals.diff:+d}",
            f"{winner} ({totals.margin})",
        )

    console.print(table)


def print_report(report: AggregatedReport, console: Console) -> None:
    for side in (Side.PROSECUTION, Side.DEFENSE):
        entries = report.for_side(side).entries
        style = "green" if side is Side.PROSECUTION else "red"
        if not entries:
            console.print(f"  [{style}]{side.label}[/{style}]: [dim]no ballots[/dim]\n")
            continue

        table = Table(title=f"[{style}]{side.label}[/{style}]", show_header=True)
        table.add_column("Role", width=18)
        table.add_column("Name", width=24)
        for label in ("Direct", "Cross", "Statement", "Stmt +/-", "Cross +/-"):
            table.add_column(label, justify="right", width=9)

        for e in entries:
            table.add_row(
                e.role, escape(e.name),
                format_number(e.avg_direct) or "–",
                format_number(e.avg_cross) or "–",
                format_number(e.avg_statement) or "–",
                format_number(e.statement_pickup) or "–",
                format_number(e.cross_pickup) or "–",
            )
        console.print(table)
        console.print("")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_totals(args, console: Console) -> None:
    bundle = load_bundle(args.bundle)
    print_totals(bundle, console)


def cmd_report(args, console: Console) -> None:
    bundle = refresh_aggregate(load_bundle(args.bundle))
    report = bundle.aggregated_data

    console.print(Panel(
        f"[bold]{escape(bundle.tournament.name)}[/bold]\n"
        f"[dim]{len(bundle.ballots)} ballots · generated {report.generated_at.isoformat()}[/dim]",
        title="📊  ROLE REPORT",
        border_style="blue",
    ))
    print_report(report, console)

    if args.csv:
        _write_csv(aggregated_report_to_csv(report), Path(args.csv), console)
    if args.save:
        save_bundle(bundle, args.bundle)
        console.print(f"  💾 Report stored in [bold cyan]{escape(args.bundle)}[/bold cyan]")


def cmd_export(args, console: Console) -> None:
    bundle = load_bundle(args.bundle)
    content = export_ballots_to_csv(bundle.ballots, bundle.tournament.name)
    filepath = Path(args.out) if args.out else _default_path("ballots")
    _write_csv(content, filepath, console)
    console.print(f"  ✅ Exported {len(bundle.ballots)} ballots")


def cmd_roster(args, console: Console) -> None:
    bundle = apply_roster_to_bundle(load_bundle(args.bundle))
    save_bundle(bundle, args.bundle)
    console.print(
        f"  ✅ Roster applied to {len(bundle.ballots)} ballots → "
        f"[bold cyan]{escape(args.bundle)}[/bold cyan]"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mock-trial ballot scoring and role report")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("totals", help="Show totals and winner for every ballot")
    p.add_argument("bundle", help="Tournament bundle JSON file")
    p.set_defaults(func=cmd_totals)

    p = sub.add_parser("report", help="Recompute and show the aggregated role report")
    p.add_argument("bundle", help="Tournament bundle JSON file")
    p.add_argument("--csv", help="Also write the report as CSV to this path")
    p.add_argument("--save", action="store_true", help="Store the report in the bundle")
    p.set_defaults(func=cmd_report)

    p = sub.add_parser("export", help="Write the per-ballot CSV")
    p.add_argument("bundle", help="Tournament bundle JSON file")
    p.add_argument("--out", help="CSV path (default: OUTPUT_DIR/ballots_<timestamp>.csv)")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("roster", help="Back-fill roster names onto the ballots")
    p.add_argument("bundle", help="Tournament bundle JSON file")
    p.set_defaults(func=cmd_roster)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console(width=cfg.CONSOLE_WIDTH)
    try:
        args.func(args, console)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
