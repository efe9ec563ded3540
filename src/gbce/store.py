"""
Port (interface) for the persistence collaborator.
The calculation engine and trade service depend only on this interface;
gbce.db.Database is the sqlite implementation.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from .models import Stock, StockType, Trade


class MarketDataStore(ABC):
    @abstractmethod
    def find_stock_by_symbol(self, symbol: str) -> Optional[Stock]: ...

    @abstractmethod
    def find_all_stocks(self) -> List[Stock]: ...

    @abstractmethod
    def find_stocks_by_type(self, stock_type: StockType) -> List[Stock]: ...

    @abstractmethod
    def find_stocks_by_par_value_greater_than(self, min_par_value: float) -> List[Stock]: ...

    @abstractmethod
    def save_stock(self, stock: Stock) -> Stock:
        """Insert a stock, replacing the attributes of an existing symbol."""

    def save_all_stocks(self, stocks: List[Stock]) -> List[Stock]:
        return [self.save_stock(stock) for stock in stocks]

    @abstractmethod
    def find_trades_for_symbol_in_window(
        self,
        symbol: str,
        start_exclusive: datetime,
        end_inclusive: datetime,
    ) -> List[Trade]: ...

    @abstractmethod
    def find_trades_by_symbol(self, symbol: str) -> List[Trade]: ...

    @abstractmethod
    def find_trade_by_id(self, trade_id: int) -> Optional[Trade]: ...

    @abstractmethod
    def save_trade(self, trade: Trade) -> Trade:
        """Persist a trade and return it with its assigned id."""

    def save_all_trades(self, trades: List[Trade]) -> List[Trade]:
        return [self.save_trade(trade) for trade in trades]
