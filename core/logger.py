"""
Logging structuré avec contexte - site (origin) et page de sitemap demandée
"""
import sys
import logging
from collections import deque
from typing import Optional, Callable
from datetime import datetime
from urllib.parse import urlparse

LOGS_BUFFER_SIZE = 500

# Libellés affichés (INFO sans libellé)
_LABELS = {
    logging.DEBUG: "[DEBUG]",
    logging.INFO: "",
    logging.WARNING: "[⚠️ WARNING]",
    logging.ERROR: "[❌ ERROR]",
}


class ContextLogger:
    """Logger avec contexte de génération (site, page demandée)."""

    def __init__(
        self,
        name: str = "sitemap",
        site: Optional[str] = None,
        page: Optional[str] = None,
        callback: Optional[Callable[[str], None]] = None,
        verbose: bool = False,
        echo: bool = True,
    ):
        """
        Initialise le logger.

        Args:
            name: Nom du logger Python sous-jacent
            site: Origin du site (ex: https://example.com)
            page: Page de sitemap demandée (sitemap{page}.xml), None pour l'index
            callback: Fonction de callback pour les logs (ex: st.caption)
            verbose: Mode verbose (logs DEBUG)
            echo: Recopie les messages sur stdout
        """
        self.name = name
        self.site = site
        self.page = page
        self.callback = callback
        self.verbose = verbose
        self.echo = echo
        self.logs_buffer = deque(maxlen=LOGS_BUFFER_SIZE)

        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    def child(self, page: Optional[str] = None) -> "ContextLogger":
        """Logger pour une page de sitemap, même site et même buffer."""
        child = ContextLogger(
            name=self.name,
            site=self.site,
            page=page,
            callback=self.callback,
            verbose=self.verbose,
            echo=self.echo,
        )
        child.logs_buffer = self.logs_buffer
        return child

    def _context(self) -> str:
        parts = [datetime.now().strftime("%H:%M:%S")]
        if self.site:
            parts.append(f"[{urlparse(self.site).netloc or self.site}]")
        if self.page:
            parts.append(f"[page {self.page}]")
        return " ".join(parts)

    def _emit(self, level: int, message: str, **kwargs):
        label = _LABELS[level]
        formatted = f"{self._context()} {label + ' ' if label else ''}{message}"
        if self.echo:
            print(formatted, file=sys.stdout, flush=True)
        self.logs_buffer.append(formatted)
        if self.callback:
            self.callback(formatted)
        self.logger.log(level, formatted, extra=kwargs)

    def info(self, message: str, **kwargs):
        self._emit(logging.INFO, message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Ignoré hors mode verbose."""
        if self.verbose:
            self._emit(logging.DEBUG, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._emit(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._emit(logging.ERROR, message, **kwargs)

    def get_logs(self, limit: int = 100) -> list:
        """Récupère les logs récents."""
        return list(self.logs_buffer)[-limit:]

    def clear_logs(self):
        self.logs_buffer.clear()


# Logger global (API : un seul site par process)
_default_logger: Optional[ContextLogger] = None


def get_logger(site: Optional[str] = None, callback: Optional[Callable] = None) -> ContextLogger:
    """Récupère ou crée le logger global."""
    global _default_logger
    if _default_logger is None or (site and _default_logger.site != site):
        _default_logger = ContextLogger(site=site, callback=callback)
    return _default_logger


def log_error(message: str):
    """Shorthand pour get_logger().error()."""
    get_logger().error(message)


__all__ = [
    "ContextLogger",
    "get_logger",
    "log_error",
]
