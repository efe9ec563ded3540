"""
Error kinds raised by the GBCE calculation engine and trade service
"""


class StockMarketError(Exception):
    """Base class for all stock market errors."""
    pass


class StockNotFoundError(StockMarketError):
    """Raised when no stock exists for a symbol."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Stock not found: {symbol}")


class InvalidPriceError(StockMarketError):
    """Raised when a supplied market price is not strictly positive."""

    def __init__(self, price: float):
        self.price = price
        super().__init__(f"Price must be greater than 0, got {price}")


class InvalidTradeError(StockMarketError):
    """Raised when a trade breaks the quantity or price invariants."""
    pass


class InvalidStockError(StockMarketError):
    """Raised when a stock has a blank symbol or negative attributes."""
    pass


class TradeNotFoundError(StockMarketError):
    def __init__(self, trade_id: int):
        self.trade_id = trade_id
        super().__init__(f"Trade not found: {trade_id}")
