import logging

import pytest
from sqlalchemy import create_engine, text

from config.logging_config import LOG_FORMAT


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Retire le handler console éventuellement installé par les commandes CLI."""
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        formatter = handler.formatter
        if handler not in before and formatter is not None and formatter._fmt == LOG_FORMAT:
            root.removeHandler(handler)
    root.setLevel(level)


CREATE_TABLE = """
    CREATE TABLE shares_epoch_counts (
        chain VARCHAR(32) NOT NULL,
        epoch BIGINT NOT NULL,
        share_count BIGINT NOT NULL
    )
"""


@pytest.fixture
def ops_engine():
    """Base ops en mémoire (SQLite) avec la table shares_epoch_counts."""
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text(CREATE_TABLE))
    yield engine
    engine.dispose()


@pytest.fixture
def insert_shares(ops_engine):
    def _insert(rows):
        with ops_engine.begin() as conn:
            conn.execute(
                text("INSERT INTO shares_epoch_counts (chain, epoch, share_count) VALUES (:chain, :epoch, :share_count)"),
                rows,
            )
    return _insert
