"""
Tests for the sample data loader
"""
import math
import random
import pytest
from datetime import datetime

from gbce.loader import BATCH_SIZE, DataLoader
from gbce.models import StockType
from gbce.service import StockService

NOW = datetime(2024, 1, 15, 12, 0, 0)


def make_loader(store, **kwargs):
    return DataLoader(store, rng=random.Random(7), clock=lambda: NOW, **kwargs)


class TestPresetData:
    def test_loads_gbce_stocks(self, empty_db):
        stock_total, trade_total = make_loader(empty_db, trade_count=50).load_data()

        assert stock_total == 5
        assert trade_total == 50
        symbols = [s.symbol for s in empty_db.find_all_stocks()]
        assert symbols == ["ALE", "GIN", "JOE", "POP", "TEA"]

    def test_gin_is_preferred(self, empty_db):
        make_loader(empty_db, trade_count=0).load_data()

        gin = empty_db.find_stock_by_symbol("GIN")
        assert gin.stock_type == StockType.PREFERRED
        assert gin.fixed_dividend == 0.02

    def test_random_trades_are_valid(self, empty_db):
        make_loader(empty_db, trade_count=200).load_data()

        trades = [t for s in empty_db.find_all_stocks() for t in empty_db.find_trades_by_symbol(s.symbol)]
        assert len(trades) == 200
        for trade in trades:
            assert 1 <= trade.quantity <= 100
            assert 0 <= trade.price < 100
            assert trade.timestamp == NOW


class TestRandomData:
    def test_random_stocks(self, empty_db):
        stock_total, trade_total = make_loader(
            empty_db, stock_count=BATCH_SIZE * 2 + 5, trade_count=10
        ).load_data(use_preset_data=False)

        assert stock_total == BATCH_SIZE * 2 + 5
        assert trade_total == 10
        assert empty_db.find_stock_by_symbol("TICKER0") is not None

    def test_seeded_loader_is_reproducible(self, empty_db, db):
        make_loader(empty_db, stock_count=10, trade_count=0).load_data(use_preset_data=False)
        first = empty_db.find_all_stocks()

        make_loader(db, stock_count=10, trade_count=0).load_data(use_preset_data=False)
        second = [s for s in db.find_all_stocks() if s.symbol.startswith("TICKER")]

        assert first == second

    def test_index_over_random_market_is_finite(self, empty_db):
        make_loader(empty_db).load_data(use_preset_data=False)

        index = StockService(empty_db, clock=lambda: NOW).calculate_all_share_index()

        assert math.isfinite(index)
        assert 0 < index < 100

class TestValidation:
    def test_invalid_stocks_skipped(self, empty_db):
        loader = make_loader(empty_db)
        stocks = loader.load_stocks([
            {"symbol": "OK", "stock_type": "COMMON", "last_dividend": 1.0, "par_value": 10.0},
            {"symbol": "NEG", "stock_type": "COMMON", "last_dividend": -1.0, "par_value": 10.0},
            {"symbol": "BND", "stock_type": "BOND", "last_dividend": 1.0, "par_value": 10.0},
        ])

        assert [s.symbol for s in stocks] == ["OK"]
        assert empty_db.find_stock_by_symbol("NEG") is None
        assert empty_db.find_stock_by_symbol("BND") is None

    def test_invalid_trades_skipped(self, db):
        loader = make_loader(db)
        trades = loader.load_trades([
            {"stock_symbol": "POP", "quantity": 5, "side": "BUY", "price": 10.0},
            {"stock_symbol": "POP", "quantity": 0, "side": "BUY", "price": 10.0},
            {"stock_symbol": "POP", "quantity": 5, "side": "SELL", "price": -1.0},
        ])

        assert len(trades) == 1
        assert trades[0].id is not None
        assert len(db.find_trades_by_symbol("POP")) == 1
