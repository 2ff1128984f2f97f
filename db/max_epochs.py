import logging
from typing import Dict

from sqlalchemy import text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

# Plus grande epoch ayant au moins une share, par chaîne
MAX_EPOCH_QUERY = """
    SELECT chain, MAX(epoch) AS max_epoch
    FROM shares_epoch_counts
    WHERE share_count != 0
    GROUP BY chain
"""


def fetch_max_epochs(engine: Engine) -> Dict[str, int]:
    """
    Exécute la requête d'agrégation et renvoie {chain: max_epoch}.

    Les chaînes dont le MAX est NULL sont ignorées. Les erreurs SQL ne sont
    pas interceptées ici : c'est l'appelant qui abandonne le tick en cours.
    """
    with engine.connect() as conn:
        rows = conn.execute(text(MAX_EPOCH_QUERY)).all()

    max_epochs = {}
    for chain, max_epoch in rows:
        if max_epoch is None:
            continue
        max_epochs[str(chain)] = int(max_epoch)

    logger.info(f"{len(max_epochs)} chaînes récupérées depuis shares_epoch_counts")
    return max_epochs
