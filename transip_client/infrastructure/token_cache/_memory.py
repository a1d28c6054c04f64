import threading

from ...repositories.token_cache import TokenCache


class MemoryTokenCache(TokenCache):

    def __init__(self):
        self._tokens: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._tokens.get(key)

    def set(self, key: str, token: str) -> None:
        with self._lock:
            self._tokens[key] = token
