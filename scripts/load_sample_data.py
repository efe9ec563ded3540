#!/usr/bin/env python3
"""
Seed a GBCE database with the preset stocks and random trades,
then report the metrics for every stock.
"""
import logging
import math
import os

from gbce.db import Database
from gbce.loader import DataLoader
from gbce.service import StockService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    db = Database()
    trade_count = int(os.getenv('GBCE_TRADE_COUNT', '1000'))

    loader = DataLoader(db, trade_count=trade_count)
    stock_total, trade_total = loader.load_data(use_preset_data=True)
    logger.info(f"Loaded {stock_total} stocks and {trade_total} trades into {db.db_path}")

    service = StockService(db)
    for stock in db.find_all_stocks():
        price = service.calculate_vwsp(stock.symbol)
        if price > 0:
            pe = service.calculate_pe_ratio(stock.symbol, price)
            logger.info(
                f"{stock.symbol}: VWSP={price:.4f} "
                f"yield={service.calculate_dividend_yield(stock.symbol, price):.4f} "
                f"P/E={'n/a' if math.isnan(pe) else f'{pe:.4f}'}"
            )
        else:
            logger.info(f"{stock.symbol}: no trades in the last 5 minutes")

    logger.info(f"GBCE All Share Index: {service.calculate_all_share_index():.4f}")


if __name__ == "__main__":
    main()
