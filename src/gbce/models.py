from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import datetime
from enum import Enum
from typing import Optional

from .exceptions import InvalidStockError, InvalidTradeError


class StockType(str, Enum):
    COMMON = "COMMON"
    PREFERRED = "PREFERRED"


class TradeSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class Stock(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    stock_type: StockType
    last_dividend: float  # In pennies
    fixed_dividend: float = 0.0  # Rate, PREFERRED only (0.02 = 2%)
    par_value: float

    @model_validator(mode="after")
    def check_attributes(self) -> "Stock":
        # Non-ValueError exceptions propagate out of pydantic unwrapped
        if not self.symbol or not self.symbol.strip():
            raise InvalidStockError("Stock symbol must be a non-empty string")
        if not self.last_dividend >= 0:
            raise InvalidStockError(
                f"Invalid last dividend for {self.symbol}: {self.last_dividend}"
            )
        if not self.fixed_dividend >= 0:
            raise InvalidStockError(
                f"Invalid fixed dividend for {self.symbol}: {self.fixed_dividend}"
            )
        if not self.par_value >= 0:
            raise InvalidStockError(
                f"Invalid par value for {self.symbol}: {self.par_value}"
            )
        return self


class Trade(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    stock_symbol: str
    timestamp: datetime = Field(default_factory=datetime.now)
    quantity: int
    side: TradeSide
    price: float  # Per share

    @model_validator(mode="after")
    def check_invariants(self) -> "Trade":
        if self.quantity < 1:
            raise InvalidTradeError(
                f"Quantity must be greater than 0, got {self.quantity} for {self.stock_symbol}"
            )
        if not self.price >= 0:
            raise InvalidTradeError(
                f"Price must be non-negative, got {self.price} for {self.stock_symbol}"
            )
        return self

    @property
    def is_buy(self) -> bool:
        return self.side == TradeSide.BUY
