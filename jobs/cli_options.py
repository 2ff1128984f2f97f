import click

from config.settings import DEFAULT_INTERVAL_MINUTES

# Options communes au poller et au pusher
ops_dsn_option = click.option(
    "--ops-dsn", "--opsDsn", "ops_dsn",
    required=True,
    help="DSN MySQL, ex: user:password@tcp(host:3306)/ops_db",
)
interval_option = click.option(
    "--interval", "interval",
    type=click.IntRange(min=1),
    default=DEFAULT_INTERVAL_MINUTES, show_default=True,
    help="Intervalle entre deux vérifications (minutes)",
)
once_option = click.option(
    "--once", is_flag=True, default=False,
    help="Exécute une seule vérification puis s'arrête",
)
log_level_option = click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
