import logging
import os
from typing import Dict

logger = logging.getLogger(__name__)

PROM_FILE_SUFFIX = "_max_epoch_nozero.prom"


def prom_file_path(output_dir: str, chain: str) -> str:
    return os.path.join(output_dir, f"{chain}{PROM_FILE_SUFFIX}")


def escape_label_value(value: str) -> str:
    # échappements imposés par le format d'exposition texte
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def format_shares_line(chain: str, epoch: int, instance: str = "jumperserver") -> str:
    """Ligne au format d'exposition Prometheus lue par le textfile collector."""
    return f'{chain}_shares_count{{instance="{escape_label_value(instance)}",job="{escape_label_value(chain)}"}} {int(epoch)}\n'


def write_to_prom_file(file_path: str, chain: str, epoch: int, instance: str = "jumperserver"):
    # "w" tronque le fichier : une seule ligne, réécrite à chaque tick
    with open(file_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(format_shares_line(chain, epoch, instance))


def write_max_epochs(max_epochs: Dict[str, int], output_dir: str, instance: str = "jumperserver") -> Dict[str, bool]:
    """
    Écrit un fichier .prom par chaîne dans output_dir.

    Une erreur d'écriture est journalisée pour la chaîne concernée, les
    autres chaînes sont quand même écrites. Renvoie le statut par chaîne.
    """
    results = {}
    for chain in sorted(max_epochs):
        file_path = prom_file_path(output_dir, chain)
        logger.info(f"Écriture des métriques dans {file_path}")
        try:
            write_to_prom_file(file_path, chain, max_epochs[chain], instance)
        except OSError as e:
            logger.error(f"Erreur lors de l'écriture du fichier {file_path} : {e}")
            results[chain] = False
            continue
        logger.info(f"Écriture réussie dans {file_path}")
        results[chain] = True
    return results
