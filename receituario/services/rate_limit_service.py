"""
Serviço de Limitação de Taxa
Limitação de taxa em memória, por cliente, com janela fixa.

O estado é por processo: com vários workers cada um aplica seu próprio limite.
"""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Dict, Optional, Tuple


@dataclass
class RateLimitEntry:
    """Rastreia contagens de requisições de uma chave."""

    count: int
    window_start: float


class RateLimiter:
    """
    Limitador de taxa em memória, thread-safe.

    Args:
        max_requests: Máximo de requisições permitidas na janela
        window_seconds: Duração da janela em segundos
    """

    def __init__(self, max_requests: int, window_seconds: int):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._lock = Lock()
        self._requests: Dict[str, RateLimitEntry] = {}
        self._operation_count = 0

    def is_allowed(self, key: str) -> Tuple[bool, Optional[int]]:
        """
        Verifica e registra uma requisição.

        Returns:
            Tupla de (is_allowed, retry_after_seconds)
        """
        with self._lock:
            self._operation_count += 1
            if self._operation_count >= 100 and len(self._requests) > 1000:
                self._cleanup_unlocked()

            current_time = time.monotonic()
            entry = self._requests.get(key)

            if entry is None or current_time - entry.window_start >= self.window_seconds:
                entry = RateLimitEntry(count=0, window_start=current_time)
                self._requests[key] = entry

            if entry.count >= self.max_requests:
                retry_after = int(entry.window_start + self.window_seconds - current_time)
                return False, max(1, retry_after)

            entry.count += 1
            return True, None

    def _cleanup_unlocked(self):
        """Remove janelas expiradas. Deve ser chamado com lock já mantido."""
        current_time = time.monotonic()
        expired = [
            key
            for key, entry in self._requests.items()
            if current_time - entry.window_start >= self.window_seconds
        ]
        for key in expired:
            del self._requests[key]
        self._operation_count = 0
