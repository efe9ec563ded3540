import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

from .models import Stock, StockType, Trade, TradeSide
from .store import MarketDataStore

logger = logging.getLogger(__name__)

_STOCK_COLUMNS = "symbol, stock_type, last_dividend, fixed_dividend, par_value"
_TRADE_COLUMNS = "id, stock_symbol, timestamp, quantity, side, price"


def _to_text(ts: datetime) -> str:
    # Fixed width so ISO strings order the same as the datetimes
    return ts.isoformat(timespec="microseconds")


class Database(MarketDataStore):
    def __init__(self, db_path: str = None):
        # Support environment variable for database path
        if db_path is None:
            db_path = os.getenv('GBCE_DB_PATH', 'gbce.db')

        self.db_path = db_path
        self._conn = None
        self._init_db()

    def _get_connection(self):
        """Get a database connection, creating it if necessary."""
        if self.db_path == ":memory:":
            if self._conn is None:
                self._conn = sqlite3.connect(self.db_path)
                self._create_tables(self._conn.cursor())
                self._conn.commit()
            return self._conn
        else:
            return sqlite3.connect(self.db_path)

    def _release(self, conn):
        # Close connection for file-based databases
        if self.db_path != ":memory:":
            conn.close()

    @contextmanager
    def _cursor(self):
        """Yield a cursor; commit on success, roll back on error."""
        conn = self._get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._release(conn)

    def _create_tables(self, cursor):
        """Create database tables if they don't exist."""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS stocks (
                symbol TEXT PRIMARY KEY,
                stock_type TEXT NOT NULL,
                last_dividend REAL NOT NULL,
                fixed_dividend REAL NOT NULL,
                par_value REAL NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS trades (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                stock_symbol TEXT NOT NULL,
                timestamp TEXT NOT NULL,
                quantity INTEGER NOT NULL,
                side TEXT NOT NULL,
                price REAL NOT NULL
            )
        """)

    def _init_db(self):
        """Initialize database and create tables if they don't exist."""
        if self.db_path != ":memory:":
            conn = self._get_connection()
            self._create_tables(conn.cursor())
            conn.commit()
            conn.close()
        logger.debug(f"Database initialized: {self.db_path}")

    @staticmethod
    def _row_to_stock(row) -> Stock:
        return Stock(
            symbol=row[0],
            stock_type=StockType(row[1]),
            last_dividend=row[2],
            fixed_dividend=row[3],
            par_value=row[4],
        )

    @staticmethod
    def _row_to_trade(row) -> Trade:
        return Trade(
            id=row[0],
            stock_symbol=row[1],
            timestamp=datetime.fromisoformat(row[2]),
            quantity=row[3],
            side=TradeSide(row[4]),
            price=row[5],
        )

    def _query_stocks(self, where: str = "", params: tuple = ()) -> List[Stock]:
        with self._cursor() as cursor:
            cursor.execute(
                f"SELECT {_STOCK_COLUMNS} FROM stocks {where} ORDER BY symbol", params
            )
            rows = cursor.fetchall()
        return [self._row_to_stock(row) for row in rows]

    def _query_trades(self, where: str, params: tuple) -> List[Trade]:
        with self._cursor() as cursor:
            cursor.execute(
                f"SELECT {_TRADE_COLUMNS} FROM trades {where} ORDER BY timestamp, id", params
            )
            rows = cursor.fetchall()
        return [self._row_to_trade(row) for row in rows]

    # Stocks

    def find_stock_by_symbol(self, symbol: str) -> Optional[Stock]:
        stocks = self._query_stocks("WHERE symbol = ?", (symbol,))
        return stocks[0] if stocks else None

    def find_all_stocks(self) -> List[Stock]:
        return self._query_stocks()

    def find_stocks_by_type(self, stock_type: StockType) -> List[Stock]:
        return self._query_stocks("WHERE stock_type = ?", (StockType(stock_type).value,))

    def find_stocks_by_par_value_greater_than(self, min_par_value: float) -> List[Stock]:
        return self._query_stocks("WHERE par_value > ?", (min_par_value,))

    def save_stock(self, stock: Stock) -> Stock:
        return self.save_all_stocks([stock])[0]

    def save_all_stocks(self, stocks: List[Stock]) -> List[Stock]:
        with self._cursor() as cursor:
            cursor.executemany(f"""
                INSERT OR REPLACE INTO stocks ({_STOCK_COLUMNS})
                VALUES (?, ?, ?, ?, ?)
            """, [
                (s.symbol, s.stock_type.value, s.last_dividend, s.fixed_dividend, s.par_value)
                for s in stocks
            ])
        return list(stocks)

    # Trades

    def find_trades_for_symbol_in_window(
        self,
        symbol: str,
        start_exclusive: datetime,
        end_inclusive: datetime,
    ) -> List[Trade]:
        return self._query_trades(
            "WHERE stock_symbol = ? AND timestamp > ? AND timestamp <= ?",
            (symbol, _to_text(start_exclusive), _to_text(end_inclusive)),
        )

    def find_trades_by_symbol(self, symbol: str) -> List[Trade]:
        return self._query_trades("WHERE stock_symbol = ?", (symbol,))

    def find_trade_by_id(self, trade_id: int) -> Optional[Trade]:
        trades = self._query_trades("WHERE id = ?", (trade_id,))
        return trades[0] if trades else None

    def save_trade(self, trade: Trade) -> Trade:
        return self.save_all_trades([trade])[0]

    def save_all_trades(self, trades: List[Trade]) -> List[Trade]:
        """Insert trades in one transaction, returning copies carrying their ids."""
        saved = []
        with self._cursor() as cursor:
            for trade in trades:
                cursor.execute("""
                    INSERT INTO trades (stock_symbol, timestamp, quantity, side, price)
                    VALUES (?, ?, ?, ?, ?)
                """, (
                    trade.stock_symbol,
                    _to_text(trade.timestamp),
                    trade.quantity,
                    trade.side.value,
                    trade.price,
                ))
                saved.append(trade.model_copy(update={"id": cursor.lastrowid}))
        return saved

    def close(self):
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
