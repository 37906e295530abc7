"""Общий для процесса httpx.Client: один пул соединений на все запуски команды."""
import logging
import threading
from typing import Optional

import httpx

from xconnect_purge.config import HTTP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

_client: Optional[httpx.Client] = None
_client_lock = threading.Lock()


def build_client(timeout: float = HTTP_TIMEOUT_SECONDS) -> httpx.Client:
    return httpx.Client(timeout=httpx.Timeout(timeout))


def get_http_client() -> httpx.Client:
    global _client
    with _client_lock:
        if _client is None or _client.is_closed:
            _client = build_client()
            logger.debug("Shared HTTP client created (timeout=%ss)", HTTP_TIMEOUT_SECONDS)
        return _client


def close_http_client():
    global _client
    with _client_lock:
        if _client is not None:
            _client.close()
            _client = None
