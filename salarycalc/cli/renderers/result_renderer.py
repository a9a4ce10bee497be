"""Rich renderers for salary and employer cost results.

Transforms SDK result models into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from salarycalc.sdk.schemas import EmployerCostResult, IncentiveType, SalaryResult


def render_salary(console: Console, result: SalaryResult) -> None:
    """Render a SalaryResult as employee and employer tables.

    Args:
        console: Rich Console instance
        result: Output of calculate_salary()
    """
    _render_context(console, result)
    _render_employee_table(console, result)
    _render_employer_table(console, result)


def render_employer_cost(console: Console, result: EmployerCostResult) -> None:
    """Render an EmployerCostResult with the ranked incentive candidates."""
    table = Table(title=f"Costo azienda: RAL {_fmt(result.gross_salary)}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=30)
    table.add_column("Importo", justify="right", min_width=14)

    table.add_row("Costo standard", _fmt(result.standard_cost))
    if result.applied_incentive:
        table.add_row(
            f"  - {result.applied_incentive.label}",
            f"[green]-{_fmt(result.applied_incentive.savings)}[/green]",
        )
    else:
        table.add_row("  [dim]Nessuna agevolazione[/dim]", "")
    table.add_row("[bold]Costo finale[/bold]", f"[bold]{_fmt(result.final_cost)}[/bold]")
    table.add_row("Moltiplicatore RAL", f"{result.cost_multiplier:.2f}x", style="dim")
    console.print(table)

    if len(result.candidates) > 1:
        ranked = Table(title="Agevolazioni valutate", box=box.SIMPLE)
        ranked.add_column("#", justify="right", style="dim")
        ranked.add_column("Incentivo")
        ranked.add_column("Risparmio", justify="right")
        for position, candidate in enumerate(result.candidates, start=1):
            ranked.add_row(str(position), candidate.label, _fmt(candidate.savings))
        console.print(ranked)


def _render_context(console: Console, result: SalaryResult) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Regione", result.selected_region or "-")
    table.add_row("Comune", result.selected_municipality)
    table.add_row("Incentivo", _format_incentive(result))

    console.print(Panel(table, title="Parametri", border_style="dim"))


def _format_incentive(result: SalaryResult) -> str:
    if result.incentive_applied == IncentiveType.NONE:
        return "[dim]nessuno[/dim]"
    label = result.incentive.label if result.incentive else result.incentive_applied.value
    if result.company_savings == 0:
        return f"[yellow]{label} (non applicabile)[/yellow]"
    return f"[green]{label}[/green]"


def _render_employee_table(console: Console, result: SalaryResult) -> None:
    table = Table(title=f"Netto dipendente: RAL {_fmt(result.gross_salary)}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=30)
    table.add_column("Annuo", justify="right", min_width=14)

    table.add_row("RAL", _fmt(result.gross_salary))
    table.add_row("  Contributi INPS", _neg(result.employee_contribution))
    table.add_row("Imponibile IRPEF", _fmt(result.taxable_income), style="dim")
    table.add_row("", "")

    table.add_row("[bold]IRPEF[/bold]", "")
    table.add_row("  IRPEF lorda", _fmt(result.gross_income_tax))
    table.add_row("  Detrazioni lavoro", _neg(result.work_deduction))
    table.add_row("  Detrazione cuneo fiscale", _neg(result.wedge_credit))
    table.add_row("  IRPEF netta", _neg(result.net_income_tax))
    table.add_row("  Addizionale regionale", _neg(result.regional_surtax))
    table.add_row("  Addizionale comunale", _neg(result.municipal_surtax))
    table.add_row("", "")

    table.add_row("[bold]BONUS[/bold]", "")
    table.add_row("  Indennità cuneo fiscale", f"[green]+{_fmt(result.wedge_bonus)}[/green]")
    table.add_row("  Trattamento integrativo", f"[green]+{_fmt(result.supplementary_bonus)}[/green]")
    table.add_row("", "")

    table.add_row("[bold]Netto annuo[/bold]", f"[bold]{_fmt(result.annual_net)}[/bold]")
    table.add_row("[bold]Netto mensile (13)[/bold]", f"[bold]{_fmt(result.monthly_net)}[/bold]")
    console.print(table)


def _render_employer_table(console: Console, result: SalaryResult) -> None:
    table = Table(title="Costo azienda", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=30)
    table.add_column("Annuo", justify="right", min_width=14)

    table.add_row("RAL", _fmt(result.gross_salary))
    table.add_row("  Contributi INPS azienda", _fmt(result.employer_contribution))
    if result.company_savings > 0:
        table.add_row("  [dim]di cui risparmio incentivo[/dim]", f"[green]-{_fmt(result.company_savings)}[/green]")
    table.add_row("  INAIL", _fmt(result.insurance_premium))
    table.add_row("  TFR", _fmt(result.severance_accrual))
    table.add_row("[bold]Costo totale[/bold]", f"[bold]{_fmt(result.employer_total_cost)}[/bold]")
    console.print(table)


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"€{amount:,.2f}"


def _neg(amount: float) -> str:
    if not amount:
        return _fmt(0)
    return f"[red]-{_fmt(amount)}[/red]"
