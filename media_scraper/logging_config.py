"""
Configuration du logging via loguru.

Deux sorties :
- console : coloree, au niveau choisi par l'utilisateur (-v / -q)
- fichier : JSON avec rotation, tous niveaux (appels catalogue en DEBUG)

Les enregistrements emis pendant une tache supervisee portent l'identifiant
de la tache dans extra["task_id"] (voir task_context) ; les autres portent "-".
"""

import sys
from typing import Optional

from loguru import logger

from media_scraper.config import Settings

NO_TASK = "-"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[task_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings, console_level: Optional[str] = None) -> None:
    """
    Installe les sorties loguru a partir des reglages.

    Args:
        settings: Reglages (log_level, log_file, log_rotation_size,
            log_retention_count)
        console_level: Niveau console impose par la ligne de commande
    """
    logger.remove()
    logger.configure(extra={"task_id": NO_TASK})

    logger.add(
        sys.stderr,
        level=console_level or settings.log_level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        "Logging configure",
        log_file=str(settings.log_file),
        rotation=settings.log_rotation_size,
    )


def task_context(task_id: str):
    """Contexte loguru : les logs emis dans le bloc portent task_id."""
    return logger.contextualize(task_id=task_id)
