"""
Tests for stock and trade model invariants
"""
import math
import pytest
from datetime import datetime

from gbce.exceptions import InvalidStockError, InvalidTradeError
from gbce.models import Stock, StockType, Trade, TradeSide


class TestTrade:
    def test_valid_trade(self):
        trade = Trade(
            stock_symbol="POP",
            timestamp=datetime(2024, 1, 15, 12, 0),
            quantity=10,
            side=TradeSide.BUY,
            price=100.0
        )

        assert trade.id is None
        assert trade.quantity == 10
        assert trade.is_buy

    def test_timestamp_defaults_to_now(self):
        before = datetime.now()
        trade = Trade(stock_symbol="POP", quantity=1, side=TradeSide.SELL, price=1.0)
        after = datetime.now()

        assert before <= trade.timestamp <= after
        assert not trade.is_buy

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(InvalidTradeError):
            Trade(stock_symbol="POP", quantity=quantity, side=TradeSide.BUY, price=100.0)

    def test_negative_price_rejected(self):
        with pytest.raises(InvalidTradeError):
            Trade(stock_symbol="POP", quantity=1, side=TradeSide.BUY, price=-0.01)

    def test_nan_price_rejected(self):
        with pytest.raises(InvalidTradeError):
            Trade(stock_symbol="POP", quantity=1, side=TradeSide.BUY, price=math.nan)

    def test_zero_price_allowed(self):
        """Zero price is a valid execution price"""
        trade = Trade(stock_symbol="POP", quantity=1, side=TradeSide.SELL, price=0.0)
        assert trade.price == 0.0

    def test_trade_is_immutable(self):
        trade = Trade(stock_symbol="POP", quantity=1, side=TradeSide.BUY, price=1.0)
        with pytest.raises(Exception):
            trade.price = 2.0


class TestStock:
    def test_preferred_stock(self):
        stock = Stock(
            symbol="GIN",
            stock_type=StockType.PREFERRED,
            last_dividend=8.0,
            fixed_dividend=0.02,
            par_value=100.0
        )
        assert stock.stock_type == StockType.PREFERRED
        assert stock.fixed_dividend == 0.02

    def test_fixed_dividend_defaults_to_zero(self):
        stock = Stock(symbol="POP", stock_type="COMMON", last_dividend=8.0, par_value=100.0)
        assert stock.fixed_dividend == 0.0
        assert stock.stock_type == StockType.COMMON

    @pytest.mark.parametrize("field", ["last_dividend", "fixed_dividend", "par_value"])
    def test_negative_attributes_rejected(self, field):
        attrs = dict(symbol="BAD", stock_type=StockType.COMMON,
                     last_dividend=1.0, fixed_dividend=0.0, par_value=100.0)
        attrs[field] = -1.0

        with pytest.raises(InvalidStockError):
            Stock(**attrs)

    @pytest.mark.parametrize("field", ["last_dividend", "fixed_dividend", "par_value"])
    def test_nan_attributes_rejected(self, field):
        attrs = dict(symbol="BAD", stock_type=StockType.COMMON,
                     last_dividend=1.0, fixed_dividend=0.0, par_value=100.0)
        attrs[field] = math.nan

        with pytest.raises(InvalidStockError):
            Stock(**attrs)

    def test_blank_symbol_rejected(self):
        with pytest.raises(InvalidStockError):
            Stock(symbol="  ", stock_type=StockType.COMMON, last_dividend=0.0, par_value=1.0)
