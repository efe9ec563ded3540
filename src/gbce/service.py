"""
Stock valuation and trade aggregation against a MarketDataStore
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from .calculations import (
    VWSP_WINDOW,
    all_share_index,
    dividend_yield,
    pe_ratio,
    trades_in_window,
    volume_weighted_stock_price,
)
from .exceptions import InvalidPriceError, StockNotFoundError
from .models import Stock
from .store import MarketDataStore

logger = logging.getLogger(__name__)


class StockService:
    """
    Calculates GBCE metrics for stocks held in a store.

    The store is read on every call; nothing is cached between calls.
    Reference time comes from the ``now`` argument when given, otherwise
    from the injected ``clock``.
    """

    def __init__(
        self,
        store: MarketDataStore,
        clock: Callable[[], datetime] = datetime.now,
        window: timedelta = VWSP_WINDOW,
    ) -> None:
        self._store = store
        self._clock = clock
        self._window = window

    def _get_stock(self, symbol: str) -> Stock:
        stock = self._store.find_stock_by_symbol(symbol)
        if stock is None:
            logger.error(f"Stock with symbol {symbol} not found")
            raise StockNotFoundError(symbol)
        return stock

    def calculate_dividend_yield(self, symbol: str, price: float) -> float:
        """
        Dividend yield of *symbol* at *price*.

        Raises:
            StockNotFoundError: if *symbol* is unknown.
            InvalidPriceError: if *price* <= 0.
        """
        stock = self._get_stock(symbol)
        try:
            return dividend_yield(stock, price)
        except InvalidPriceError:
            logger.error(f"Invalid price {price} for stock {symbol}")
            raise

    def calculate_pe_ratio(self, symbol: str, price: float) -> float:
        """
        P/E ratio of *symbol* at *price*; NaN when the last dividend is zero.

        Raises:
            StockNotFoundError: if *symbol* is unknown.
            InvalidPriceError: if *price* <= 0.
        """
        stock = self._get_stock(symbol)
        try:
            ratio = pe_ratio(stock, price)
        except InvalidPriceError:
            logger.error(f"Invalid price {price} for stock {symbol}")
            raise

        if stock.last_dividend == 0:
            logger.warning(f"No dividend for stock {symbol}, P/E ratio is NaN")
        return ratio

    def calculate_vwsp(self, symbol: str, now: Optional[datetime] = None) -> float:
        """
        Volume weighted stock price of *symbol* over the trailing window
        ending at *now*. Returns 0.0 when no trade falls inside the window.

        Raises:
            StockNotFoundError: if *symbol* is unknown.
        """
        self._get_stock(symbol)
        if now is None:
            now = self._clock()
        return self._vwsp(symbol, now)

    def _vwsp(self, symbol: str, now: datetime) -> float:
        trades = self._store.find_trades_for_symbol_in_window(
            symbol, now - self._window, now
        )
        # Enforce the half-open window whatever the store returned
        trades = trades_in_window(trades, now, self._window)

        if not trades:
            logger.warning(f"No trades found for stock {symbol} in the last {self._window}")
            return 0.0
        return volume_weighted_stock_price(trades)

    def calculate_all_share_index(self, now: Optional[datetime] = None) -> float:
        """
        GBCE All Share Index: geometric mean of every stock's VWSP at *now*.
        Stocks without recent trades count as 1; an empty market gives 0.0.
        """
        stocks = self._store.find_all_stocks()
        if not stocks:
            logger.warning("No stocks available for GBCE All Share Index calculation")
            return 0.0

        if now is None:
            now = self._clock()
        vwsps = [self._vwsp(stock.symbol, now) for stock in stocks]
        index = all_share_index(vwsps)
        logger.info(f"GBCE All Share Index over {len(stocks)} stocks: {index:.4f}")
        return index
