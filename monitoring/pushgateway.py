import logging
from typing import Dict

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

logger = logging.getLogger(__name__)


def metric_name(chain: str) -> str:
    return f"{chain}_max_epoch_nonzero"


def push_max_epoch(gateway_url: str, chain: str, epoch: int):
    """Pousse une jauge pour une chaîne, groupée par job=<chain>."""
    # registre dédié : une seule série par push, rien d'autre n'est envoyé
    registry = CollectorRegistry()
    gauge = Gauge(
        metric_name(chain),
        f"Plus grande epoch avec un share_count non nul pour {chain}",
        registry=registry,
    )
    gauge.set(epoch)
    push_to_gateway(gateway_url, job=chain, registry=registry)


def push_max_epochs(max_epochs: Dict[str, int], gateway_url: str) -> Dict[str, bool]:
    results = {}
    for chain in sorted(max_epochs):
        try:
            push_max_epoch(gateway_url, chain, max_epochs[chain])
        except Exception as e:
            logger.error(f"Erreur lors du push Prometheus pour {chain} : {e}")
            results[chain] = False
            continue
        logger.info(f"Métrique {metric_name(chain)}={max_epochs[chain]} poussée vers {gateway_url}")
        results[chain] = True
    return results
