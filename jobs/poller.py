import logging
import sys
import time
from typing import Dict

import click
from sqlalchemy.exc import SQLAlchemyError

from config.logging_config import configure_logging
from config.settings import DEFAULT_INSTANCE, DEFAULT_OUTPUT_DIR, PollerSettings
from db.max_epochs import fetch_max_epochs
from db.ops_connect import create_ops_engine
from jobs.cli_options import interval_option, log_level_option, once_option, ops_dsn_option
from jobs.scheduler import run_forever
from monitoring.prom_file import write_max_epochs

logger = logging.getLogger(__name__)


def poll_once(engine, settings: PollerSettings) -> Dict[str, bool]:
    """Un tick : requête puis écriture des fichiers .prom."""
    try:
        max_epochs = fetch_max_epochs(engine)
    except (SQLAlchemyError, ValueError, TypeError) as e:
        logger.error(f"Erreur lors de la récupération des max epochs : {e}", exc_info=True)
        return {}
    return write_max_epochs(max_epochs, settings.output_dir, settings.instance)


def run_poller(engine, settings: PollerSettings, once: bool = False, sleep=time.sleep) -> int:
    """Boucle du poller ; libère le pool de connexions à la sortie."""
    try:
        return run_forever(
            lambda: poll_once(engine, settings),
            settings.interval_minutes,
            sleep=sleep,
            max_ticks=1 if once else None,
        )
    finally:
        engine.dispose()


@click.command(name="epoch-poller")
@ops_dsn_option
@click.option("--output-dir", "output_dir",
              default=DEFAULT_OUTPUT_DIR, show_default=True,
              type=click.Path(file_okay=False),
              help="Répertoire des fichiers Prometheus (textfile collector)")
@interval_option
@click.option("--instance", default=DEFAULT_INSTANCE, show_default=True,
              help="Valeur du label instance")
@once_option
@log_level_option
def cli(ops_dsn, output_dir, interval, instance, once, log_level):
    """Écrit la plus grande epoch non nulle de chaque chaîne dans des fichiers .prom."""
    configure_logging(log_level.upper())
    settings = PollerSettings(
        ops_dsn=ops_dsn,
        output_dir=output_dir,
        interval_minutes=interval,
        instance=instance,
    )
    try:
        engine = create_ops_engine(settings.ops_dsn)
    except (SQLAlchemyError, ValueError) as e:
        logger.critical(f"Impossible d'ouvrir la connexion ops : {e}")
        sys.exit(1)
    run_poller(engine, settings, once=once)


def main():
    cli()


if __name__ == "__main__":
    main()
