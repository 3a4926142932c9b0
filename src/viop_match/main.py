"""Main entry point for VIOP spread matching system."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional
import argparse
import sys

from common.validation import ValidationError

from .cli import VIOPDisplay
from .config import ConfigManager, SummarySource
from .core import OrderPool, aggregate_orders, build_summaries, filter_orders
from .exporters import export_orders_csv
from .loaders import get_loader_for_path
from .matchers import SpreadMatcher
from .models import ReconciliationResult
from .normalizers import OrderNormalizer

# Default file paths
DEFAULT_DATA_DIR = Path(__file__).parent / "data"
DEFAULT_INPUT_FILE = "orders.json"


logger = logging.getLogger(__name__)


class VIOPMatchingEngine:
    """Main VIOP spread matching engine."""

    config_manager: ConfigManager
    normalizer: OrderNormalizer
    display: VIOPDisplay
    spread_matcher: SpreadMatcher

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        display: Optional[VIOPDisplay] = None,
    ):
        """Initialize VIOP matching engine.

        Args:
            config_manager: Optional config manager. Creates default if None.
            display: Optional display. Creates a console display if None.
        """
        self.config_manager = config_manager or ConfigManager()
        self.normalizer = OrderNormalizer(self.config_manager)
        self.display = display or VIOPDisplay()
        self.spread_matcher = SpreadMatcher(self.config_manager)

        logger.info("Initialized VIOP matching engine with spread matcher")

    def load_records(self, input_path: Path) -> List[Dict[str, Any]]:
        """Read raw trade records from a JSON or spreadsheet file."""
        loader = get_loader_for_path(input_path, self.config_manager.get_field_mappings())
        return loader.load_records(input_path)

    def run_from_records(self, records: Iterable[Mapping[str, Any]]) -> ReconciliationResult:
        """Run the full pipeline over raw records.

        Normalize, filter, optionally aggregate, summarize and spread-match.

        Args:
            records: Raw records with date/contract/side/units/price keys

        Returns:
            ReconciliationResult with summaries, match report and parse errors

        Raises:
            InputParseError: On the first bad record when fail-fast is configured
        """
        config = self.config_manager.matching_config

        normalization = self.normalizer.normalize_records(records)

        raw_orders = filter_orders(
            normalization.orders, config.allowed_contracts, config.allowed_dates
        )
        logger.info(
            f"{len(raw_orders)} of {len(normalization.orders)} orders passed the filter"
        )

        if config.aggregate_orders:
            matched_orders = aggregate_orders(raw_orders)
        else:
            matched_orders = list(raw_orders)

        summary_orders = (
            raw_orders if config.summary_source == SummarySource.RAW else matched_orders
        )
        summary = build_summaries(
            summary_orders, config.commission_rate, config.contract_multiplier
        )

        pool = OrderPool(matched_orders)
        match_report = self.spread_matcher.find_matches(pool)

        return ReconciliationResult(
            raw_orders=raw_orders,
            matched_orders=matched_orders,
            summary=summary,
            match_report=match_report,
            parse_errors=list(normalization.errors),
            metadata={
                "record_count": normalization.record_count,
                "aggregated": config.aggregate_orders,
                "summary_source": config.summary_source.value,
            },
        )

    def run_matching(
        self,
        input_path: Path,
        show_fills: bool = False,
        export_path: Optional[Path] = None,
        show_pools: bool = False,
    ) -> ReconciliationResult:
        """Run the complete VIOP matching process with display.

        Args:
            input_path: JSON or spreadsheet trade file
            show_fills: Whether to display every fill
            export_path: Optional CSV destination for the filtered orders
            show_pools: Whether to display the sorted long and short pools

        Returns:
            ReconciliationResult of the run
        """
        self.display.show_header()

        try:
            logger.info("Loading VIOP trade data...")
            records = self.load_records(input_path)
            result = self.run_from_records(records)

            self.display.show_loading_summary(
                len(records), len(result.raw_orders), len(result.matched_orders)
            )
            self.display.show_parse_errors(result.parse_errors)
            self.display.show_daily_summary(result.summary)
            self.display.show_cumulative_summary(result.summary.total)
            if show_pools:
                self.display.show_pools(result.match_report)
            self.display.show_match_results(result.match_report, show_fills=show_fills)
            self.display.show_remainders(result.match_report)

            if export_path is not None:
                export_orders_csv(result.raw_orders, export_path)

            return result

        except Exception as e:
            logger.error(f"Error in VIOP matching process: {e}")
            self.display.show_error(f"{e!s}")
            raise

    def show_rules(self) -> None:
        """Display information about the matching rule and settings."""
        self.display.show_header()
        self.display.show_rule_info(self.spread_matcher.describe())


def setup_logging(log_level: str = "NONE") -> None:
    """Set up logging configuration for VIOP matching.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, NONE)
    """
    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_level.upper() == "NONE":
        logging.getLogger().setLevel(logging.CRITICAL + 1)  # Higher than CRITICAL
        return

    # Set up logging based on level
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate CLI arguments into VIOPMatchingConfig overrides."""
    overrides: Dict[str, Any] = {}
    if args.margin_min is not None:
        overrides["margin_min"] = args.margin_min
    if args.margin_max is not None:
        overrides["margin_max"] = args.margin_max
    if args.commission_rate is not None:
        overrides["commission_rate"] = args.commission_rate
    if args.contracts:
        overrides["allowed_contracts"] = frozenset(args.contracts)
    if args.dates:
        overrides["allowed_dates"] = frozenset(args.dates)
    if args.no_aggregate:
        overrides["aggregate_orders"] = False
    if args.summary_source is not None:
        overrides["summary_source"] = SummarySource(args.summary_source)
    if args.fail_fast:
        overrides["fail_fast"] = True
    return overrides


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="VIOP Spread Matching System")
    parser.add_argument("--input-file", type=Path, help="Path to JSON, XLSX or CSV trade file")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f"Data directory containing {DEFAULT_INPUT_FILE} (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument("--contracts", nargs="*", help="Only match these contracts")
    parser.add_argument("--dates", nargs="*", help="Only use these trade dates (YYYY-MM-DD)")
    parser.add_argument("--margin-min", help="Exclusive lower spread bound (default: 0.139)")
    parser.add_argument("--margin-max", help="Exclusive upper spread bound (default: 0.171)")
    parser.add_argument(
        "--commission-rate", help="Commission as a fraction of volume (default: 0.0001478)"
    )
    parser.add_argument(
        "--no-aggregate",
        action="store_true",
        help="Match raw executions instead of aggregated positions",
    )
    parser.add_argument(
        "--summary-source",
        choices=[source.value for source in SummarySource],
        help="Orders feeding the daily summary (default: raw)",
    )
    parser.add_argument(
        "--fail-fast", action="store_true", help="Abort on the first unparseable record"
    )
    parser.add_argument("--export-csv", type=Path, help="Write filtered orders to this CSV file")
    parser.add_argument("--show-fills", action="store_true", help="List every fill per contract")
    parser.add_argument(
        "--show-pools",
        action="store_true",
        help="List each contract's long and short orders in matching order",
    )
    parser.add_argument(
        "--show-rules",
        action="store_true",
        help="Display information about the matching rule and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "NONE"],
        default="NONE",
        help="Set logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for VIOP matching system."""
    args = create_parser().parse_args(argv)

    # Setup logging
    setup_logging(args.log_level)

    try:
        # Initialize matching engine
        engine = VIOPMatchingEngine(ConfigManager(**build_overrides(args)))

        # Show rules if requested
        if args.show_rules:
            engine.show_rules()
            return

        input_path = args.input_file or args.data_dir / DEFAULT_INPUT_FILE

        if not input_path.exists():
            logger.error(
                f"Trade data file not found at '{input_path}'. Please check the file path and try again."
            )
            sys.exit(1)

        result = engine.run_matching(
            input_path,
            show_fills=args.show_fills,
            export_path=args.export_csv,
            show_pools=args.show_pools,
        )

        logger.info(
            f"VIOP matching completed. Matched units: {result.match_report.total_matched_units}"
        )

    except KeyboardInterrupt:
        logger.info("Matching process interrupted by user")
        sys.exit(1)
    except ValidationError as e:
        logger.error(f"Invalid input or configuration: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(
            f"Fatal error during matching process: {e}. Please check the input data and try again."
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
