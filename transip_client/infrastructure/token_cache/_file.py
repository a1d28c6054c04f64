import json
import os
import tempfile
import threading
from pathlib import Path

from ...entities import ConfigurationError
from ...repositories.token_cache import TokenCache
from ...utils.logging_utils import get_logger

logger = get_logger()


class FileTokenCache(TokenCache):
    """
    Keeps tokens in a JSON object on disk, `{key: raw_token}`.

    The whole file is rewritten on every `set`, through a temporary file that
    replaces the original so a crash never leaves a half written cache.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path).expanduser()
        self._lock = threading.Lock()
        self._tokens = self._load()

        logger.debug(f"Initializing {self.__class__.__name__} with path: %s", self.path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        content = self.path.read_text()
        if not content.strip():
            return {}

        try:
            data = json.loads(content)
        except ValueError as e:
            raise ConfigurationError(f"token cache file `{self.path}` is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"token cache file `{self.path}` should hold a JSON object")

        return {str(key): str(value) for key, value in data.items()}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._tokens.get(key)

    def set(self, key: str, token: str) -> None:
        with self._lock:
            self._tokens[key] = token
            self._write()

    def _write(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, temporary_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w") as file:
                json.dump(self._tokens, file, indent=2)
            os.chmod(temporary_path, 0o600)
            os.replace(temporary_path, self.path)
        except BaseException:
            os.unlink(temporary_path)
            raise
