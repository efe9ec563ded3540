"""
Sample data loader for the GBCE store

Seeds a MarketDataStore with either the preset GBCE stocks or randomly
generated stocks, followed by random trades. Records are validated while
the models are built; invalid records are logged and skipped.
"""
import logging
import random
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .exceptions import StockMarketError
from .models import Stock, StockType, Trade, TradeSide
from .store import MarketDataStore

logger = logging.getLogger(__name__)

BATCH_SIZE = 100

PRESET_STOCKS = [
    {"symbol": "TEA", "stock_type": StockType.COMMON, "last_dividend": 0.0, "par_value": 100.0},
    {"symbol": "POP", "stock_type": StockType.COMMON, "last_dividend": 8.0, "par_value": 100.0},
    {"symbol": "ALE", "stock_type": StockType.COMMON, "last_dividend": 23.0, "par_value": 60.0},
    {"symbol": "GIN", "stock_type": StockType.PREFERRED, "last_dividend": 8.0,
     "fixed_dividend": 0.02, "par_value": 100.0},
    {"symbol": "JOE", "stock_type": StockType.COMMON, "last_dividend": 13.0, "par_value": 250.0},
]


class DataLoader:
    def __init__(
        self,
        store: MarketDataStore,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
        stock_count: int = 1000,
        trade_count: int = 1000,
    ):
        self._store = store
        self._rng = rng or random.Random()
        self._clock = clock
        self.stock_count = stock_count
        self.trade_count = trade_count

    def load_data(self, use_preset_data: bool = True) -> Tuple[int, int]:
        """
        Load stocks and random trades into the store.

        Args:
            use_preset_data: Use the GBCE preset stocks instead of random ones

        Returns:
            (stocks saved, trades saved)
        """
        stock_records = PRESET_STOCKS if use_preset_data else self._random_stock_records()
        logger.info(
            f"Loading data using {'preset' if use_preset_data else 'randomly generated'} data. "
            f"Total stocks to process: {len(stock_records)}"
        )
        stocks = self.load_stocks(stock_records)
        trades = self.load_trades(self._random_trade_records(stocks))
        return len(stocks), len(trades)

    def load_stocks(self, records: List[Dict]) -> List[Stock]:
        stocks = _build_valid(Stock, records, "stock")
        _save_in_batches(stocks, self._store.save_all_stocks, "stocks")
        return stocks

    def load_trades(self, records: List[Dict]) -> List[Trade]:
        trades = _build_valid(Trade, records, "trade")
        return _save_in_batches(trades, self._store.save_all_trades, "trades")

    def _random_stock_records(self) -> List[Dict]:
        rng = self._rng
        return [
            {
                "symbol": f"TICKER{i}",
                "stock_type": rng.choice([StockType.COMMON, StockType.PREFERRED]),
                "last_dividend": rng.random() * 50,
                "fixed_dividend": rng.random() * 5,
                "par_value": rng.random() * 500,
            }
            for i in range(self.stock_count)
        ]

    def _random_trade_records(self, stocks: List[Stock]) -> List[Dict]:
        if not stocks:
            return []

        rng = self._rng
        now = self._clock()
        return [
            {
                "stock_symbol": rng.choice(stocks).symbol,
                "timestamp": now,
                "quantity": rng.randint(1, 100),
                "side": rng.choice([TradeSide.BUY, TradeSide.SELL]),
                "price": rng.random() * 100,
            }
            for _ in range(self.trade_count)
        ]


def _build_valid(model, records: List[Dict], kind: str) -> list:
    valid = []
    invalid = []
    for record in records:
        try:
            valid.append(model(**record))
        except (StockMarketError, ValidationError) as e:
            logger.error(f"Invalid {kind} data {record}: {e}")
            invalid.append(record)

    if invalid:
        logger.warning(f"Skipped {len(invalid)} invalid {kind} records")
    return valid


def _save_in_batches(items: list, save_all: Callable[[list], list], kind: str) -> list:
    saved = []
    for start in range(0, len(items), BATCH_SIZE):
        batch = items[start:start + BATCH_SIZE]
        logger.info(f"Saving batch of {len(batch)} {kind}")
        saved.extend(save_all(batch))
    return saved
