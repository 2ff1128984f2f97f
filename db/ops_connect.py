import logging
import re
from urllib.parse import parse_qs

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

logger = logging.getLogger(__name__)

MYSQL_DRIVER = "mysql+pymysql"
DEFAULT_TCP_HOST = "127.0.0.1"
DEFAULT_TCP_PORT = 3306
# Seul ce paramètre du DSN Go a la même syntaxe côté PyMySQL
KEPT_DSN_PARAMS = {"charset"}

_NET_RE = re.compile(r"(\w+)(?:\((.*)\))?")


def normalize_dsn(dsn: str) -> URL:
    """
    Convertit le DSN de la base ops en URL SQLAlchemy.

    Deux formes sont acceptées :
    - une URL SQLAlchemy (ex: mysql+pymysql://user:pw@host:3306/ops_db)
    - un DSN au format du driver Go (ex: user:pw@tcp(host:3306)/ops_db)
    """
    if not dsn or not dsn.strip():
        raise ValueError("Le DSN de la base ops est obligatoire.")
    dsn = dsn.strip()

    if "://" in dsn:
        try:
            return make_url(dsn)
        except ArgumentError as e:
            raise ValueError(f"URL SQLAlchemy invalide : {e}") from e

    return _parse_go_dsn(dsn)


def _parse_go_dsn(dsn: str) -> URL:
    # [user[:password]@][protocol[(address)]]/dbname[?param=value&...]
    head, slash, tail = dsn.rpartition("/")
    if not slash:
        raise ValueError("DSN invalide : le nom de la base ('/dbname') est manquant.")
    dbname, _, raw_params = tail.partition("?")

    creds, at, net = head.rpartition("@")
    if not at:
        creds, net = "", head
    user, _, password = creds.partition(":")

    protocol, address = "tcp", ""
    if net:
        match = _NET_RE.fullmatch(net)
        if not match:
            raise ValueError(f"DSN invalide : adresse réseau illisible '{net}'.")
        protocol, address = match.group(1), match.group(2) or ""

    host, port = None, None
    query = {}
    if protocol == "tcp":
        host, _, port_str = (address or f"{DEFAULT_TCP_HOST}:{DEFAULT_TCP_PORT}").rpartition(":")
        if not host:
            host, port_str = port_str, str(DEFAULT_TCP_PORT)
        try:
            port = int(port_str) if port_str else DEFAULT_TCP_PORT
        except ValueError:
            raise ValueError(f"DSN invalide : port '{port_str}' non numérique.")
    elif protocol == "unix":
        if not address:
            raise ValueError("DSN invalide : chemin de socket unix manquant.")
        query["unix_socket"] = address
    else:
        raise ValueError(f"DSN invalide : protocole non supporté '{protocol}'.")

    for key, values in parse_qs(raw_params).items():
        if key in KEPT_DSN_PARAMS:
            query[key] = values[-1]
        else:
            logger.debug(f"Paramètre DSN ignoré (spécifique au driver Go) : {key}")

    return URL.create(
        MYSQL_DRIVER,
        username=user or None,
        password=password or None,
        host=host,
        port=port,
        database=dbname or None,
        query=query,
    )


def ping(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def create_ops_engine(dsn: str) -> Engine:
    """Crée le pool de connexions vers la base ops et vérifie qu'elle répond."""
    url = normalize_dsn(dsn)
    engine = create_engine(url, pool_pre_ping=True, pool_recycle=3600)
    try:
        ping(engine)
    except SQLAlchemyError:
        engine.dispose()
        raise
    logger.info(f"Connexion à la base ops établie : {url.render_as_string(hide_password=True)}")
    return engine
