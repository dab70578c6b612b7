"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from caladjust.config import Settings, default_config_path, get_settings
from caladjust.tracking.loader import AdjustmentInput, load_document
from caladjust.tracking.models import CalorieAdjustment, MacroTargets, Severity
from caladjust.tracking.policy import analyze, recompute_macros
from caladjust.tracking.velocity import check_weight_velocity, estimate_weekly_change

app = typer.Typer(
    help="Weight-goal tracking and calorie target adjustment",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Show or create the settings file")
app.add_typer(config_app, name="config")

SEVERITY_STYLES = {
    Severity.INFO: "blue",
    Severity.WARNING: "yellow",
    Severity.SUCCESS: "green",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Weight-goal tracking and calorie target adjustment."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def report_error(message: str, json_output: bool, command: str) -> None:
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]{message}[/red]")


def load_settings(json_flag: bool, command: str) -> Settings:
    """Load the settings file, exiting with a friendly message if it is invalid."""
    try:
        return get_settings()
    except (OSError, ValueError) as e:
        report_error(f"Invalid settings: {e}", json_flag, command)
        raise typer.Exit(1)


def read_input(path: Path, json_output: bool, command: str) -> AdjustmentInput:
    """Load an input document, exiting with a friendly message on failure."""
    try:
        return load_document(path)
    except (OSError, ValueError) as e:
        if json_output:
            output_json({"success": False, "command": command, "errors": [str(e)]})
        else:
            console.print(f"[red]Could not read {path}:[/red] {e}")
        raise typer.Exit(1)


def parse_today(today_str: Optional[str]) -> date:
    if today_str is None:
        return date.today()
    try:
        return date.fromisoformat(today_str)
    except ValueError:
        console.print(f"[red]Invalid date '{today_str}', expected YYYY-MM-DD[/red]")
        raise typer.Exit(1)


def use_json(json_flag: bool, settings: Settings) -> bool:
    return json_flag or settings.defaults.output_format == "json"


def print_adjustment(adjustment: CalorieAdjustment) -> None:
    style = SEVERITY_STYLES[adjustment.severity]
    lines = [
        f"Reason: {adjustment.reason.value}",
        f"Current goal: {adjustment.previous_goal} kcal/day",
    ]
    if adjustment.should_adjust:
        lines.append(
            f"Suggested goal: {adjustment.suggested_goal} kcal/day "
            f"({adjustment.difference:+d})"
        )
    lines.append("")
    lines.append(adjustment.message)

    title = "Adjustment suggested" if adjustment.should_adjust else "No change"
    console.print(Panel("\n".join(lines), title=title, border_style=style))


def print_macros(macros: MacroTargets, calories: int) -> None:
    table = Table(title=f"Macro targets for {calories} kcal/day")
    table.add_column("Macro", style="cyan")
    table.add_column("Grams", justify="right")
    table.add_row("Protein", str(macros.protein))
    table.add_row("Carbs", str(macros.carbs))
    table.add_row("Fats", str(macros.fats))
    console.print(table)


# ============================================================================
# Commands
# ============================================================================


@app.command("analyze")
def analyze_command(
    input_file: Path = typer.Argument(..., help="YAML/JSON file with profile and history"),
    last_weight: Optional[float] = typer.Option(
        None, "--last-weight", "-l", help="Weight (kg) the current targets were calculated at"
    ),
    today_str: Optional[str] = typer.Option(
        None, "--today", "-t", help="Evaluation date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Analyze weight progress and suggest a calorie adjustment."""
    settings = load_settings(json_output, "analyze")
    json_output = use_json(json_output, settings)
    data = read_input(input_file, json_output, "analyze")
    today = parse_today(today_str)

    if last_weight is None:
        last_weight = data.last_calculated_weight

    adjustment = analyze(
        data.profile,
        data.history,
        last_calculated_weight=last_weight,
        today=today,
        thresholds=settings.thresholds,
    )

    macros = None
    if adjustment.should_adjust:
        macros = recompute_macros(adjustment.suggested_goal, data.profile)

    if json_output:
        output_json({
            "success": True,
            "command": "analyze",
            "data": {
                "adjustment": adjustment.to_dict(),
                "macros": macros.to_dict() if macros else None,
            },
            "human_summary": adjustment.message,
        })
        return

    print_adjustment(adjustment)
    if macros is not None:
        print_macros(macros, adjustment.suggested_goal)


@app.command("velocity")
def velocity_command(
    input_file: Path = typer.Argument(..., help="YAML/JSON file with profile and history"),
    today_str: Optional[str] = typer.Option(
        None, "--today", "-t", help="Evaluation date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the weekly weight change and velocity alert."""
    settings = load_settings(json_output, "velocity")
    json_output = use_json(json_output, settings)
    data = read_input(input_file, json_output, "velocity")
    today = parse_today(today_str)

    goal = data.profile.active_goal
    if goal is None:
        weekly_change = estimate_weekly_change(data.history, today)
        if json_output:
            output_json({
                "success": True,
                "command": "velocity",
                "data": {"weekly_change_kg": round(weekly_change, 2), "alert": None},
                "human_summary": "No active weight goal",
            })
        else:
            console.print(f"Weekly change: {weekly_change:+.2f} kg")
            console.print("[yellow]No active weight goal[/yellow]")
        return

    alert = check_weight_velocity(
        data.history, goal, today=today, thresholds=settings.thresholds
    )

    if json_output:
        output_json({
            "success": True,
            "command": "velocity",
            "data": {
                "weekly_change_kg": round(alert.weekly_change, 2),
                "alert": alert.type.value,
                "recommendation": alert.recommendation,
            },
            "human_summary": alert.message,
        })
        return

    console.print(f"Weekly change: {alert.weekly_change:+.2f} kg")
    console.print(f"[bold]{alert.type.value}[/bold]: {alert.message}")
    if alert.recommendation:
        console.print(f"[dim]{alert.recommendation}[/dim]")


@app.command("macros")
def macros_command(
    input_file: Path = typer.Argument(..., help="YAML/JSON file with profile"),
    calories: int = typer.Option(..., "--calories", "-c", help="Daily calorie goal"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Compute macro targets for a calorie goal."""
    settings = load_settings(json_output, "macros")
    json_output = use_json(json_output, settings)
    data = read_input(input_file, json_output, "macros")

    macros = recompute_macros(calories, data.profile)

    if json_output:
        output_json({
            "success": True,
            "command": "macros",
            "data": {"calories": calories, **macros.to_dict()},
            "human_summary": (
                f"{macros.protein}g protein, {macros.carbs}g carbs, {macros.fats}g fats"
            ),
        })
        return

    print_macros(macros, calories)


@config_app.command("show")
def config_show(
    config_path: Optional[Path] = typer.Option(
        None, "--path", "-p", help="Settings file (default: ~/.caladjust/config.yaml)"
    ),
) -> None:
    """Print the effective settings."""
    try:
        settings = Settings.load(config_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Invalid settings:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Thresholds")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in settings.to_dict()["thresholds"].items():
        table.add_row(key, str(value))
    console.print(table)
    console.print(f"Output format: {settings.defaults.output_format}")


@config_app.command("init")
def config_init(
    config_path: Optional[Path] = typer.Option(
        None, "--path", "-p", help="Settings file (default: ~/.caladjust/config.yaml)"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a settings file with the default values."""
    settings = Settings()
    target = config_path or default_config_path()

    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists. Use --force to overwrite.[/yellow]")
        raise typer.Exit(1)

    settings.save(target)
    console.print(f"[green]Wrote default settings to {target}[/green]")


if __name__ == "__main__":
    app()
