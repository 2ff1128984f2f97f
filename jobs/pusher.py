import logging
import sys
import time
from typing import Dict

import click
from sqlalchemy.exc import SQLAlchemyError

from config.logging_config import configure_logging
from config.settings import PusherSettings
from db.max_epochs import fetch_max_epochs
from db.ops_connect import create_ops_engine
from jobs.cli_options import interval_option, log_level_option, once_option, ops_dsn_option
from jobs.scheduler import run_forever
from monitoring.pushgateway import push_max_epochs

logger = logging.getLogger(__name__)


def push_once(engine, settings: PusherSettings) -> Dict[str, bool]:
    """Un tick : requête puis push de chaque chaîne vers le Pushgateway."""
    try:
        max_epochs = fetch_max_epochs(engine)
    except (SQLAlchemyError, ValueError, TypeError) as e:
        logger.error(f"Erreur lors de la récupération des max epochs : {e}", exc_info=True)
        return {}
    return push_max_epochs(max_epochs, settings.gateway_url)


def run_pusher(engine, settings: PusherSettings, once: bool = False, sleep=time.sleep) -> int:
    try:
        return run_forever(
            lambda: push_once(engine, settings),
            settings.interval_minutes,
            sleep=sleep,
            max_ticks=1 if once else None,
        )
    finally:
        engine.dispose()


@click.command(name="epoch-pusher")
@ops_dsn_option
@click.option("--gateway", "gateway_url", required=True,
              help="URL du Pushgateway, ex: http://pushgateway:9091")
@interval_option
@once_option
@log_level_option
def cli(ops_dsn, gateway_url, interval, once, log_level):
    """Pousse la plus grande epoch non nulle de chaque chaîne vers le Pushgateway."""
    configure_logging(log_level.upper())
    settings = PusherSettings(ops_dsn=ops_dsn, gateway_url=gateway_url, interval_minutes=interval)
    try:
        engine = create_ops_engine(settings.ops_dsn)
    except (SQLAlchemyError, ValueError) as e:
        logger.critical(f"Impossible d'ouvrir la connexion ops : {e}")
        sys.exit(1)
    run_pusher(engine, settings, once=once)


def main():
    cli()


if __name__ == "__main__":
    main()
