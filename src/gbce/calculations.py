import math
from datetime import datetime, timedelta
from typing import Iterable, List

from .exceptions import InvalidPriceError
from .models import Stock, StockType, Trade

VWSP_WINDOW = timedelta(minutes=5)


def validate_price(price: float) -> None:
    """Raise InvalidPriceError unless price is strictly positive."""
    if not price > 0:
        raise InvalidPriceError(price)


def dividend_yield(stock: Stock, price: float) -> float:
    """
    Calculate the dividend yield of a stock at a given market price.

    COMMON stock:    last dividend / price
    PREFERRED stock: (fixed dividend * par value) / price

    Raises:
        InvalidPriceError: if price <= 0
    """
    validate_price(price)

    if stock.stock_type == StockType.COMMON:
        return stock.last_dividend / price
    return (stock.fixed_dividend * stock.par_value) / price


def pe_ratio(stock: Stock, price: float) -> float:
    """
    Calculate the P/E ratio (price / last dividend).

    A stock paying no dividend has no meaningful P/E, so NaN is returned
    rather than raising.

    Raises:
        InvalidPriceError: if price <= 0
    """
    validate_price(price)

    if stock.last_dividend == 0:
        return math.nan
    return price / stock.last_dividend


def trades_in_window(
    trades: Iterable[Trade],
    now: datetime,
    window: timedelta = VWSP_WINDOW
) -> List[Trade]:
    """Keep trades with now - window < timestamp <= now."""
    start = now - window
    return [t for t in trades if start < t.timestamp <= now]


def volume_weighted_stock_price(trades: Iterable[Trade]) -> float:
    """
    Quantity-weighted mean price of the given trades.

    Returns 0.0 when there are no trades.
    """
    total_value = 0.0
    total_quantity = 0

    for trade in trades:
        total_value += trade.price * trade.quantity
        total_quantity += trade.quantity

    if total_quantity == 0:
        return 0.0
    return total_value / total_quantity


def all_share_index(vwsps: Iterable[float]) -> float:
    """
    Geometric mean of per-stock VWSPs.

    A zero VWSP (no recent trades) contributes 1 to the product so illiquid
    stocks do not collapse the index. Returns 0.0 for an empty market.
    """
    values = [v if v > 0 else 1.0 for v in vwsps]
    if not values:
        return 0.0

    # Sum logs; the raw product overflows float range on large markets
    return math.exp(math.fsum(math.log(v) for v in values) / len(values))
