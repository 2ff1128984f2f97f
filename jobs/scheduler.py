import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def run_forever(tick: Callable[[], object], interval_minutes: int,
                sleep: Callable[[float], None] = time.sleep,
                max_ticks: Optional[int] = None) -> int:
    """
    Boucle : tick() complet, puis pause de interval_minutes.

    La pause démarre après la fin du tick, un tick lent décale donc le
    suivant. max_ticks borne la boucle (mode --once) ; aucune pause n'est
    faite après le dernier tick. Renvoie le nombre de ticks exécutés.
    """
    interval_seconds = interval_minutes * 60
    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        started = time.monotonic()
        tick()
        ticks += 1
        logger.debug(f"Tick {ticks} terminé en {time.monotonic() - started:.2f}s")

        if max_ticks is not None and ticks >= max_ticks:
            break
        logger.info(f"Prochaine vérification dans {interval_minutes} min")
        sleep(interval_seconds)
    return ticks
