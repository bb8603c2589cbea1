"""
Configuration du logging de Kalanara via loguru.

Deux sorties :
- stderr, colorée, au niveau configuré (exploitation, serveur uvicorn)
- fichier JSON à rotation, niveau DEBUG (audit des paiements et vouchers)

Les loggers standard d'uvicorn et de SQLAlchemy sont redirigés vers loguru
pour n'avoir qu'un seul format de sortie.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

# Loggers de la bibliothèque standard redirigés vers loguru
THIRD_PARTY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine")

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level> {extra}"
)


class InterceptHandler(logging.Handler):
    """Transmet les enregistrements `logging` à loguru en conservant le niveau."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Remonte la pile jusqu'à l'appelant réel (hors module logging)
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_standard_logging(level: str = "INFO") -> None:
    """Route les loggers uvicorn / SQLAlchemy vers loguru."""
    handler = InterceptHandler()
    for name in THIRD_PARTY_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.propagate = False
    logging.getLogger("uvicorn").setLevel(level)
    # Les requêtes SQL ne sont utiles qu'en DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level.upper() == "DEBUG" else logging.WARNING
    )


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/kalanara.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure les sorties loguru.

    Args :
        log_level : Niveau minimum sur stderr (DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier JSON (le répertoire parent est créé)
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers archivés conservés
    """
    logger.remove()

    logger.add(sys.stderr, level=log_level, format=_CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # uvicorn + threadpool FastAPI
    )

    intercept_standard_logging(log_level)

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
