# GBCE stock market calculator
from .calculations import (
    VWSP_WINDOW,
    all_share_index,
    dividend_yield,
    pe_ratio,
    trades_in_window,
    volume_weighted_stock_price,
)
from .db import Database
from .exceptions import (
    InvalidPriceError,
    InvalidStockError,
    InvalidTradeError,
    StockMarketError,
    StockNotFoundError,
    TradeNotFoundError,
)
from .loader import DataLoader
from .models import Stock, StockType, Trade, TradeSide
from .service import StockService
from .store import MarketDataStore
from .trades import TradeService

__all__ = [
    'VWSP_WINDOW',
    'all_share_index',
    'dividend_yield',
    'pe_ratio',
    'trades_in_window',
    'volume_weighted_stock_price',
    'Database',
    'InvalidPriceError',
    'InvalidStockError',
    'InvalidTradeError',
    'StockMarketError',
    'StockNotFoundError',
    'TradeNotFoundError',
    'DataLoader',
    'Stock',
    'StockType',
    'Trade',
    'TradeSide',
    'StockService',
    'MarketDataStore',
    'TradeService',
]
