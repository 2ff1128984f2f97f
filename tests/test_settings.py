import logging
from unittest.mock import patch
from config.logging_config import LOG_FORMAT, configure_logging
from config.settings import PollerSettings, PusherSettings


def test_poller_settings_defaults():
    settings = PollerSettings(ops_dsn="ops@tcp(db:3306)/ops")

    assert settings.output_dir == "/opt/node-exporter/prom"
    assert settings.interval_minutes == 5
    assert settings.instance == "jumperserver"


def test_pusher_settings_defaults():
    settings = PusherSettings(ops_dsn="ops@tcp(db:3306)/ops", gateway_url="http://pushgateway:9091")

    assert settings.interval_minutes == 5


@patch('config.logging_config.logging.getLogger')
def test_configure_logging_adds_single_handler(mock_get_logger):
    """Un seul handler console, même si la configuration est rappelée."""
    root = logging.Logger("root-test")
    mock_get_logger.return_value = root

    configure_logging("DEBUG")
    configure_logging("INFO")

    assert len(root.handlers) == 1
    assert root.handlers[0].formatter._fmt == LOG_FORMAT
    assert root.level == logging.INFO


@patch('config.logging_config.logging.getLogger')
def test_configure_logging_keeps_existing_handlers(mock_get_logger):
    root = logging.Logger("root-test")
    existing = logging.NullHandler()
    root.addHandler(existing)
    mock_get_logger.return_value = root

    configure_logging("WARNING")

    assert root.handlers == [existing]
    assert root.level == logging.WARNING
