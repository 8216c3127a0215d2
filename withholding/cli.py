"""Typer CLI interface for the withholding planner."""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from withholding.models.enums import CalculationMode, FilingStatus, Jurisdiction, Partner

DEFAULT_DB = Path.home() / ".withholding" / "state.db"

app = typer.Typer(
    name="withholding",
    help="Withholding planner: estimate federal + California withholding shortfall for a couple.",
)

console = Console()

_FS_MAP: dict[str, str] = {
    "SINGLE": "SINGLE",
    "MFJ": "MARRIED_FILING_JOINTLY",
    "MFS": "MARRIED_FILING_SEPARATELY",
    "HOH": "HEAD_OF_HOUSEHOLD",
}

_JURISDICTION_MAP: dict[str, Jurisdiction] = {
    "FEDERAL": Jurisdiction.FEDERAL,
    "FED": Jurisdiction.FEDERAL,
    "STATE": Jurisdiction.CALIFORNIA,
    "CA": Jurisdiction.CALIFORNIA,
    "CALIFORNIA": Jurisdiction.CALIFORNIA,
}

DbOption = typer.Option(DEFAULT_DB, "--db", help="Path to the SQLite state file")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Withholding planner: estimate federal + California withholding shortfall for a couple."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_filing_status(value: str) -> FilingStatus:
    key = value.upper()
    try:
        return FilingStatus(_FS_MAP.get(key, key))
    except ValueError:
        valid = ", ".join(_FS_MAP.keys())
        typer.echo(f"Error: Invalid filing status '{value}'. Valid: {valid}", err=True)
        raise typer.Exit(1)


def _parse_jurisdiction(value: str) -> Jurisdiction:
    jurisdiction = _JURISDICTION_MAP.get(value.upper())
    if jurisdiction is None:
        typer.echo(f"Error: Invalid jurisdiction '{value}'. Valid: federal, state", err=True)
        raise typer.Exit(1)
    return jurisdiction


@contextmanager
def _open_repo(db: Path) -> Iterator:
    """Yield a state repository on 'db', closing the connection afterwards."""
    from withholding.db.repository import StateRepository
    from withholding.db.schema import create_schema

    db.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db)
    try:
        yield StateRepository(conn)
    finally:
        conn.close()


def _require_state(repo):
    from withholding.exceptions import StateNotFoundError

    try:
        return repo.require()
    except StateNotFoundError as exc:
        typer.echo(f"Error: {exc}. Run `withholding init` first.", err=True)
        raise typer.Exit(1)


def _money(value: float | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def init(
    db: Path = DbOption,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing state"),
) -> None:
    """Create the initial calculator state."""
    from withholding.models.state import CalculatorState

    with _open_repo(db) as repo:
        if repo.load_raw() is not None and not force:
            typer.echo(f"State already exists in {db}. Use --force to overwrite.")
            raise typer.Exit(1)
        repo.save(CalculatorState.initial())
    typer.echo(f"Initialized calculator state in {db}")


@app.command()
def show(
    db: Path = DbOption,
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Compute and display the withholding estimate."""
    from withholding.engines.calculator import WithholdingCalculator
    from withholding.formatting import format_currency, format_percent

    with _open_repo(db) as repo:
        state = _require_state(repo)
    engine = WithholdingCalculator()
    res = engine.calculate_state(state)

    if json_output:
        payload = res.model_dump(mode="json")
        payload["is_sufficient"] = res.is_sufficient
        typer.echo(json.dumps(payload, indent=2))
        return

    summary = Table(title=f"Withholding Estimate ({res.mode.value}, {res.filing_status.value})")
    summary.add_column("")
    summary.add_column("Federal", justify="right")
    summary.add_column("California", justify="right")
    summary.add_row(
        "Taxable income",
        format_currency(res.federal_taxable_income),
        format_currency(res.state_taxable_income),
    )
    summary.add_row("Estimated tax", format_currency(res.federal_tax), format_currency(res.state_tax))
    summary.add_row(
        "Withheld",
        format_currency(res.total_fed_withheld),
        format_currency(res.total_state_withheld),
    )
    summary.add_row(
        "Additional needed",
        format_currency(res.federal_additional_needed),
        format_currency(res.state_additional_needed),
    )
    console.print(summary)

    partners = Table(title="Per Partner")
    partners.add_column("")
    partners.add_column("You", justify="right")
    partners.add_column("Spouse", justify="right")
    rows = [
        ("Gross", "gross", format_currency),
        ("Total withheld", "total_withheld", format_currency),
        ("Withholding rate", "effective_withholding_rate", format_percent),
        ("Fair share of tax", "fair_share_of_tax", format_currency),
        ("Shortfall (+) / surplus (-)", "shortfall", format_currency),
    ]
    for label, attr, fmt in rows:
        partners.add_row(label, fmt(getattr(res.you, attr)), fmt(getattr(res.spouse, attr)))
    console.print(partners)

    total_style = "green" if res.is_sufficient else "bold red"
    console.print(
        f"Total additional needed: [{total_style}]{format_currency(res.total_additional_needed)}"
        f"[/{total_style}]  (effective tax rate {format_percent(res.effective_tax_rate)})"
    )
    for warning in engine.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def settings(
    db: Path = DbOption,
    mode: CalculationMode | None = typer.Option(None, "--mode", help="top or progressive"),
    filing_status: str | None = typer.Option(
        None,
        "--filing-status",
        "-s",
        help="Filing status: SINGLE, MFJ, MFS, HOH (resets standard deductions)",
    ),
    federal_top_rate: float | None = typer.Option(None, "--federal-top-rate"),
    state_top_rate: float | None = typer.Option(None, "--state-top-rate"),
    federal_deduction: float | None = typer.Option(None, "--federal-deduction"),
    state_deduction: float | None = typer.Option(None, "--state-deduction"),
    other_adjustments: float | None = typer.Option(None, "--other-adjustments"),
    surtax: bool | None = typer.Option(
        None, "--surtax/--no-surtax", help="California 1% MHS surtax above $1M"
    ),
) -> None:
    """Update calculator settings."""
    from withholding.models.inputs import Settings

    with _open_repo(db) as repo:
        state = _require_state(repo)

        current = state.settings
        if filing_status is not None:
            current = current.with_filing_status(_parse_filing_status(filing_status))

        update: dict = {}
        if mode is not None:
            update["mode"] = mode
        if federal_top_rate is not None:
            update["federal_top_rate"] = _money(federal_top_rate)
        if state_top_rate is not None:
            update["state_top_rate"] = _money(state_top_rate)
        if federal_deduction is not None:
            update["federal_standard_deduction"] = _money(federal_deduction)
        if state_deduction is not None:
            update["state_standard_deduction"] = _money(state_deduction)
        if other_adjustments is not None:
            update["other_adjustments"] = _money(other_adjustments)
        if surtax is not None:
            update["california_surtax_enabled"] = surtax

        state.settings = Settings.model_validate({**current.model_dump(), **update})
        repo.save(state)

    for key, value in state.settings.model_dump(mode="json").items():
        typer.echo(f"{key}: {value}")


@app.command(name="add-job")
def add_job(
    partner: Partner = typer.Argument(..., help="you or spouse"),
    name: str = typer.Option("", "--name", help="Job label"),
    gross: float = typer.Option(0.0, "--gross", help="Gross income"),
    fed: float = typer.Option(0.0, "--fed", help="Federal tax withheld"),
    state_withheld: float = typer.Option(0.0, "--state", help="State tax withheld"),
    db: Path = DbOption,
) -> None:
    """Add a job to a partner's job list."""
    from withholding.models.inputs import Job

    with _open_repo(db) as repo:
        state = _require_state(repo)
        job = Job(
            name=name,
            gross=_money(gross),
            fed_withheld=_money(fed),
            state_withheld=_money(state_withheld),
        )
        state.jobs(partner).append(job)
        repo.save(state)
    typer.echo(f"Added job {job.id} for {partner.value}")


@app.command(name="update-job")
def update_job(
    partner: Partner = typer.Argument(..., help="you or spouse"),
    job_id: str = typer.Argument(..., help="Job id to change"),
    name: str | None = typer.Option(None, "--name", help="Job label"),
    gross: float | None = typer.Option(None, "--gross", help="Gross income"),
    fed: float | None = typer.Option(None, "--fed", help="Federal tax withheld"),
    state_withheld: float | None = typer.Option(None, "--state", help="State tax withheld"),
    db: Path = DbOption,
) -> None:
    """Change fields of an existing job. Omitted fields keep their values."""
    from withholding.exceptions import UnknownJobError

    changes: dict = {}
    if name is not None:
        changes["name"] = name
    if gross is not None:
        changes["gross"] = _money(gross)
    if fed is not None:
        changes["fed_withheld"] = _money(fed)
    if state_withheld is not None:
        changes["state_withheld"] = _money(state_withheld)

    with _open_repo(db) as repo:
        state = _require_state(repo)
        try:
            state.update_job(partner, job_id, **changes)
        except UnknownJobError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1)
        repo.save(state)
    typer.echo(f"Updated job {job_id} for {partner.value}")


@app.command(name="remove-job")
def remove_job(
    partner: Partner = typer.Argument(..., help="you or spouse"),
    job_id: str = typer.Argument(..., help="Job id to remove"),
    db: Path = DbOption,
) -> None:
    """Remove a job from a partner's job list."""
    from withholding.exceptions import UnknownJobError

    with _open_repo(db) as repo:
        state = _require_state(repo)
        try:
            state.remove_job(partner, job_id)
        except UnknownJobError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1)
        repo.save(state)
    typer.echo(f"Removed job {job_id} for {partner.value}")


@app.command()
def brackets(
    jurisdiction: str = typer.Argument(..., help="federal or state"),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="Replace the table with the bracket text in this file"
    ),
    filing_status: str | None = typer.Option(
        None,
        "--filing-status",
        "-s",
        help="Table to show or edit (defaults to the current filing status)",
    ),
    db: Path = DbOption,
) -> None:
    """Show or edit a bracket table as JSON text."""
    from withholding.parsing.brackets_text import check_bracket_table
    from withholding.parsing.editor import BracketEditor

    juris = _parse_jurisdiction(jurisdiction)
    with _open_repo(db) as repo:
        state = _require_state(repo)
        fs = _parse_filing_status(filing_status) if filing_status else state.settings.filing_status

        editor = BracketEditor(state.federal_brackets, state.state_brackets)
        if file is None:
            typer.echo(editor.text(juris, fs))
            return

        if not file.exists():
            typer.echo(f"Error: File not found: {file}", err=True)
            raise typer.Exit(1)

        if not editor.edit(juris, fs, file.read_text()):
            typer.echo(f"Error: {editor.errors[juris]}. Brackets unchanged.", err=True)
            raise typer.Exit(1)

        state.federal_brackets = editor.federal_brackets
        state.state_brackets = editor.state_brackets
        repo.save(state)

    typer.echo(f"Updated {juris.value} brackets for {fs.value}")
    for problem in check_bracket_table(editor.tables[juris][fs]):
        typer.echo(f"Warning: {problem}", err=True)


@app.command(name="reset-brackets")
def reset_brackets(db: Path = DbOption) -> None:
    """Restore the default federal and California bracket tables."""
    from withholding.parsing.editor import BracketEditor

    with _open_repo(db) as repo:
        state = _require_state(repo)
        editor = BracketEditor(state.federal_brackets, state.state_brackets)
        editor.reset_to_defaults()
        state.federal_brackets = editor.federal_brackets
        state.state_brackets = editor.state_brackets
        repo.save(state)
    typer.echo("Bracket tables reset to defaults")


@app.command()
def report(
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to a file"),
    db: Path = DbOption,
) -> None:
    """Render the text withholding summary report."""
    from withholding.engines.calculator import WithholdingCalculator
    from withholding.reports.summary import WithholdingSummaryGenerator

    with _open_repo(db) as repo:
        state = _require_state(repo)
    res = WithholdingCalculator().calculate_state(state)
    status = state.settings.filing_status
    text = WithholdingSummaryGenerator().render(
        res,
        state.federal_brackets.get(status, []),
        state.state_brackets.get(status, []),
    )
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    typer.echo(f"Report written to {output}")
