"""
Trade recording and retrieval
"""
import logging
from datetime import datetime
from typing import List

from .exceptions import StockNotFoundError, TradeNotFoundError
from .models import Trade
from .store import MarketDataStore

logger = logging.getLogger(__name__)


class TradeService:
    def __init__(self, store: MarketDataStore) -> None:
        self._store = store

    def record_trade(self, trade: Trade) -> Trade:
        """Save a trade for a known stock and return it with its id.

        Trade invariants are checked when the Trade is built, so only
        the stock reference is checked here.

        Raises:
            StockNotFoundError: if the trade's stock symbol is unknown.
        """
        if self._store.find_stock_by_symbol(trade.stock_symbol) is None:
            logger.error(f"Cannot record trade for unknown stock {trade.stock_symbol}")
            raise StockNotFoundError(trade.stock_symbol)

        saved = self._store.save_trade(trade)
        logger.info(
            f"Trade recorded: {saved.stock_symbol} - Price: {saved.price} Quantity: {saved.quantity}"
        )
        return saved

    def get_trades_for_stock(self, symbol: str) -> List[Trade]:
        trades = self._store.find_trades_by_symbol(symbol)
        if not trades:
            logger.warning(f"No trades found for stock: {symbol}")
            return []
        logger.info(f"Retrieved {len(trades)} trades for stock: {symbol}")
        return trades

    def get_trades_for_stock_within_time_range(
        self,
        symbol: str,
        start: datetime,
        end: datetime
    ) -> List[Trade]:
        """Trades for *symbol* with start < timestamp <= end."""
        trades = self._store.find_trades_for_symbol_in_window(symbol, start, end)
        if not trades:
            logger.warning(f"No trades found for stock: {symbol} within {start} to {end}")
            return []
        logger.info(f"Retrieved {len(trades)} trades for stock: {symbol} within {start} to {end}")
        return trades

    def get_trade(self, trade_id: int) -> Trade:
        trade = self._store.find_trade_by_id(trade_id)
        if trade is None:
            logger.error(f"Trade not found: {trade_id}")
            raise TradeNotFoundError(trade_id)
        return trade
