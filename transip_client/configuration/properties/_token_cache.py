from typing import Literal, Union

from pydantic import Field

from ._base import BaseConfig as _BaseConfig


class MemoryTokenCacheConfig(_BaseConfig):
    type: Literal["memory"] = "memory"


class FileTokenCacheConfig(_BaseConfig):
    type: Literal["file"] = "file"
    path: str = Field(..., description="Path to the JSON file holding cached tokens, created when missing")


TokenCacheConfig = Union[MemoryTokenCacheConfig, FileTokenCacheConfig]
