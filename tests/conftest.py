import pytest

from gbce.db import Database
from gbce.loader import PRESET_STOCKS
from gbce.models import Stock


@pytest.fixture
def db():
    """In-memory database seeded with the GBCE preset stocks."""
    database = Database(":memory:")
    database.save_all_stocks([Stock(**record) for record in PRESET_STOCKS])
    yield database
    database.close()


@pytest.fixture
def empty_db():
    database = Database(":memory:")
    yield database
    database.close()
