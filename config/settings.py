from dataclasses import dataclass

# Valeurs par défaut reprises de l'ancien outil de supervision
DEFAULT_OUTPUT_DIR = "/opt/node-exporter/prom"
DEFAULT_INTERVAL_MINUTES = 5
DEFAULT_INSTANCE = "jumperserver"


@dataclass(frozen=True)
class PollerSettings:
    """Configuration du poller (écriture des fichiers .prom)."""
    ops_dsn: str
    output_dir: str = DEFAULT_OUTPUT_DIR
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES
    instance: str = DEFAULT_INSTANCE


@dataclass(frozen=True)
class PusherSettings:
    """Configuration du pusher (envoi vers le Pushgateway)."""
    ops_dsn: str
    gateway_url: str
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES
