"""Display module for VIOP spread matching results with rich terminal output."""

from decimal import Decimal
from typing import Any, Dict, List, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich.markup import escape

from common.validation import InputParseError

from ..models import ContractMatchResult, MatchReport, OrderSide, RemainderStats, Summary, SummaryReport


def format_amount(value: Optional[Decimal]) -> str:
    """Format a monetary amount with thousands separators and two decimals."""
    if value is None:
        return "-"
    return f"{value:,.2f}"


class VIOPDisplay:
    """Handles all display output for the VIOP spread matching system."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize display with Rich console."""
        self.console = console or Console()

    def show_header(self) -> None:
        """Display the VIOP matching system header."""
        header_text = Text("📈 VIOP SPREAD MATCHING SYSTEM", style="bold blue")
        subtitle = "Futures Order Reconciliation Engine v1.0"

        panel = Panel(
            f"{subtitle}\n\n"
            "📊 Daily and cumulative volume, units and commission\n"
            "🎯 Spread Rule: longs closed against shorts inside the margin window\n"
            "🔄 Greedy Processing: cheapest long meets cheapest eligible short",
            title=header_text,
            border_style="blue",
            padding=(1, 2)
        )

        self.console.print()
        self.console.print(panel)
        self.console.print()

    def show_loading_summary(self, record_count: int, order_count: int, matched_count: int) -> None:
        """Display summary of loaded records.

        Args:
            record_count: Number of raw records read
            order_count: Number of orders kept after normalization and filtering
            matched_count: Number of orders handed to the matcher
        """
        summary = Panel(
            f"📁 Raw Records: {record_count:,}\n"
            f"📁 Orders After Filter: {order_count:,}\n"
            f"📊 Orders To Match: {matched_count:,}",
            title="[bold green]Data Loaded Successfully[/bold green]",
            border_style="green"
        )

        self.console.print(summary)
        self.console.print()

    def show_parse_errors(self, errors: List[InputParseError]) -> None:
        """Display records rejected by the normalizer."""
        if not errors:
            return

        self.console.print(f"[bold red]Rejected Records ({len(errors)}):[/bold red]")

        table = Table(show_header=True, header_style="bold red")
        table.add_column("Record", justify="right", width=8)
        table.add_column("Field", width=10)
        table.add_column("Value", width=20)
        table.add_column("Reason")

        for error in errors[:20]:
            table.add_row(
                str(error.record_index) if error.record_index is not None else "-",
                error.field or "-",
                "-" if error.value is None else escape(str(error.value)),
                escape(error.message),
            )

        self.console.print(table)

        if len(errors) > 20:
            self.console.print(f"[dim]... and {len(errors) - 20} more rejected records[/dim]")

        self.console.print()

    def show_daily_summary(self, report: SummaryReport) -> None:
        """Display per day and contract totals."""
        self.console.print("[bold cyan]Daily Summary:[/bold cyan]")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Date", width=12)
        table.add_column("Contract", width=15)
        table.add_column("Short", justify="right", width=7)
        table.add_column("Long", justify="right", width=7)
        table.add_column("Units", justify="right", width=10)
        table.add_column("Volume", justify="right", width=15)
        table.add_column("Commission", justify="right", width=15)

        for (trade_date, contract), summary in report.iter_daily():
            table.add_row(
                trade_date,
                contract,
                str(summary.total_short),
                str(summary.total_long),
                str(int(summary.total_units)),
                format_amount(summary.total_volume),
                format_amount(summary.total_commission),
            )

        self.console.print(table)
        self.console.print()

    def show_cumulative_summary(self, total: Summary) -> None:
        """Display totals over every order."""
        stats_text = (
            f"Total Short      : {total.total_short}\n"
            f"Total Long       : {total.total_long}\n"
            f"Total Units      : {int(total.total_units)}\n"
            f"Total Volume     : {format_amount(total.total_volume)}\n"
            f"Total Commission : {format_amount(total.total_commission)}"
        )

        panel = Panel(
            stats_text,
            title="[bold yellow]Cumulative Summary[/bold yellow]",
            border_style="yellow"
        )

        self.console.print(panel)
        self.console.print()

    def show_match_results(self, report: MatchReport, show_fills: bool = False) -> None:
        """Display match results and statistics.

        Args:
            report: Match report from the spread matcher
            show_fills: Whether to list every fill per contract
        """
        statistics = report.statistics

        stats_text = (
            f"✅ Matched Units: {report.total_matched_units:,}\n"
            f"💰 Total Profit: {format_amount(report.total_profit)}\n"
            f"📊 Long Match Rate: {statistics.get('long_match_rate', 0):.1f}%\n"
            f"📈 Short Match Rate: {statistics.get('short_match_rate', 0):.1f}%\n"
            f"🎯 Unmatched Long Units: {statistics.get('unmatched_long_units', 0)}\n"
            f"🎯 Unmatched Short Units: {statistics.get('unmatched_short_units', 0)}"
        )

        stats_panel = Panel(
            stats_text,
            title="[bold yellow]Matching Results[/bold yellow]",
            border_style="yellow"
        )

        self.console.print(stats_panel)
        self.console.print()

        self._show_contract_table(report.contracts)

        if show_fills:
            for result in report.contracts:
                self._show_fills(result)

    def _show_contract_table(self, results: List[ContractMatchResult]) -> None:
        if not results:
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Contract", width=15)
        table.add_column("Matched", justify="right", width=8)
        table.add_column("Profit", justify="right", width=14)
        table.add_column("Fills", justify="right", width=6)

        for result in results:
            table.add_row(
                result.contract,
                str(result.matched_units),
                format_amount(result.profit),
                str(len(result.fills)),
            )

        self.console.print(table)
        self.console.print()

    def _show_fills(self, result: ContractMatchResult) -> None:
        if not result.fills:
            return

        self.console.print(f"[bold cyan]{result.contract} Fills:[/bold cyan]")

        table = Table(show_header=True, header_style="bold green")
        table.add_column("Long", width=8)
        table.add_column("Short", width=8)
        table.add_column("Qty", justify="right", width=6)
        table.add_column("Long Px", justify="right", width=10)
        table.add_column("Short Px", justify="right", width=10)
        table.add_column("Spread", justify="right", width=8)
        table.add_column("Profit", justify="right", width=12)

        for fill in result.fills:
            table.add_row(
                fill.long_order_id,
                fill.short_order_id,
                str(fill.quantity),
                format_amount(fill.long_price),
                format_amount(fill.short_price),
                str(fill.spread),
                format_amount(fill.profit),
            )

        self.console.print(table)
        self.console.print()

    def show_pools(self, report: MatchReport) -> None:
        """Display each contract's long and short pools in matching order."""
        for result in report.contracts:
            self.console.print(f"[bold cyan]{result.contract} Pools (matching order):[/bold cyan]")

            table = Table(show_header=True, header_style="bold blue")
            table.add_column("Side", width=6)
            table.add_column("Order", width=8)
            table.add_column("Date", width=12)
            table.add_column("Units", justify="right", width=8)
            table.add_column("Price", justify="right", width=10)

            for label, orders in (("Long", result.long_orders), ("Short", result.short_orders)):
                for order in orders:
                    table.add_row(
                        label,
                        order.order_id,
                        order.trade_date,
                        str(order.units),
                        format_amount(order.price),
                    )

            self.console.print(table)
            self.console.print()

    def show_remainders(self, report: MatchReport) -> None:
        """Display unmatched orders per contract and side."""
        for result in report.contracts:
            for stats in (result.long_remainder, result.short_remainder):
                self._show_remainder(stats)

    def _show_remainder(self, stats: RemainderStats) -> None:
        label = "Long" if stats.side == OrderSide.LONG else "Short"

        if not stats.has_remainder:
            self.console.print(
                f"[dim]{stats.contract} {label}: no remainder[/dim]"
            )
            return

        self.console.print(
            f"[bold red]{stats.contract} Unmatched {label} => "
            f"Units: {stats.total_units}, Average: {format_amount(stats.average_price)}[/bold red]"
        )

        table = Table(show_header=True, header_style="bold red")
        table.add_column("Order", width=8)
        table.add_column("Date", width=12)
        table.add_column("Remaining", justify="right", width=10)
        table.add_column("Units", justify="right", width=8)
        table.add_column("Price", justify="right", width=10)

        for order in stats.orders[:10]:
            table.add_row(
                order.order_id,
                order.trade_date,
                str(order.remaining),
                str(order.units),
                format_amount(order.price),
            )

        self.console.print(table)

        if len(stats.orders) > 10:
            self.console.print(f"[dim]... and {len(stats.orders) - 10} more unmatched orders[/dim]")

        self.console.print()

    def show_error(self, message: str) -> None:
        """Display an error message.

        Args:
            message: Error message to display
        """
        error_panel = Panel(
            f"❌ {message}",
            title="[bold red]Error[/bold red]",
            border_style="red"
        )
        self.console.print(error_panel)

    def show_rule_info(self, rule_info: Dict[str, Any]) -> None:
        """Display information about a matching rule.

        Args:
            rule_info: Dictionary with rule metadata
        """
        rule_text = (
            f"📋 Rule {rule_info['rule_number']}: {rule_info['name']}\n"
            f"📝 {rule_info['description']}\n"
            f"🎯 Window: ({rule_info['margin_min']}, {rule_info['margin_max']})\n"
            f"🔍 Matched Fields: {', '.join(rule_info['matched_fields'])}"
        )

        if "notes" in rule_info:
            rule_text += f"\n💡 Notes: {rule_info['notes']}"

        settings = rule_info.get("settings")
        if settings:
            rule_text += "\n⚙️  Settings: " + ", ".join(
                f"{key}={value}" for key, value in settings.items()
            )

        panel = Panel(
            rule_text,
            title=f"[bold blue]Rule {rule_info['rule_number']} Information[/bold blue]",
            border_style="blue"
        )

        self.console.print(panel)
        self.console.print()
