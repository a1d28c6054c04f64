from ...configuration import FileTokenCacheConfig, MemoryTokenCacheConfig, TokenCacheConfig
from ...repositories.token_cache import TokenCache
from ._file import FileTokenCache
from ._memory import MemoryTokenCache


def create_token_cache(config: TokenCacheConfig) -> TokenCache:
    if isinstance(config, MemoryTokenCacheConfig):
        return MemoryTokenCache()

    if isinstance(config, FileTokenCacheConfig):
        return FileTokenCache(config.path)

    raise ValueError(f"Unsupported token cache type: {config.type}")


__all__ = [
    "FileTokenCache",
    "MemoryTokenCache",
    "create_token_cache",
]
