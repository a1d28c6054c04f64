from .properties import DEFAULT_BASE_URL as DEFAULT_BASE_URL
from .properties import ClientConfig as ClientConfig
from .properties import FileLoggingConfig as FileLoggingConfig
from .properties import FileTokenCacheConfig as FileTokenCacheConfig
from .properties import LoggingConfig as LoggingConfig
from .properties import MemoryTokenCacheConfig as MemoryTokenCacheConfig
from .properties import TokenCacheConfig as TokenCacheConfig
