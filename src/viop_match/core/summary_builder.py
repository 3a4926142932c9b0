"""Daily and cumulative trading summaries."""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable
import logging

from ..models import Order, Summary, SummaryReport

logger = logging.getLogger(__name__)


def build_summaries(
    orders: Iterable[Order],
    commission_rate: Decimal,
    contract_multiplier: int = 100,
) -> SummaryReport:
    """Accumulate per (date, contract) and global totals.

    For each order, volume is ``units * price * multiplier`` and commission
    is ``volume * commission_rate``. Side decides whether units count as
    short or long; units, volume and commission are always added.

    Args:
        orders: Orders to summarize (raw or aggregated, as configured by the caller)
        commission_rate: Fraction of volume charged as commission
        contract_multiplier: Monetary value of one price point per unit

    Returns:
        SummaryReport with daily summaries in lexicographic key order
    """
    daily: defaultdict[tuple[str, str], Summary] = defaultdict(Summary)
    total = Summary()

    for order in orders:
        daily[(order.trade_date, order.contract)].add_order(
            order, commission_rate, contract_multiplier
        )
        total.add_order(order, commission_rate, contract_multiplier)

    report = SummaryReport(
        daily={key: daily[key] for key in sorted(daily)},
        total=total,
    )

    logger.info(
        f"Built {len(report.daily)} daily summaries: volume {total.total_volume}, "
        f"commission {total.total_commission}"
    )
    return report
