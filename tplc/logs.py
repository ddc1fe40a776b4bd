from __future__ import annotations

import logging
import os

# -------------------- Logging setup --------------------

_LOG = logging.getLogger("tplc")

DEBUG_ENV = "TPLC_DEBUG"


def setup_logging(level: str = "WARNING") -> None:
    """
    Настраивает логгер пакета tplc (один обработчик на stderr).

    Повторные вызовы только меняют уровень. Переменная окружения
    TPLC_DEBUG принудительно включает DEBUG.
    """
    if os.environ.get(DEBUG_ENV):
        level = "DEBUG"
    _LOG.setLevel(getattr(logging, level))
    if getattr(setup_logging, "_inited", False):
        return
    setup_logging._inited = True  # type: ignore[attr-defined]
    if not _LOG.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        _LOG.addHandler(h)


__all__ = ["setup_logging", "DEBUG_ENV"]
