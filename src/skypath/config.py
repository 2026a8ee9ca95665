from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Hashable, Mapping, Optional, Union

from .cache import DEFAULT_MAX_SIZE, LRUCache, NullCache, cache_key

# decimal digits of the TT Julian date kept in cache keys
DEFAULT_PRECISIONS: Mapping[str, int] = MappingProxyType(
    {
        "geometric": 9,  # ~86 microseconds
        "nutation": 2,  # ~14 minutes
        "precession": 2,
    }
)
FALLBACK_PRECISION = DEFAULT_PRECISIONS["geometric"]

_ENV_PREFIX = "SKYPATH_"
_FALSEY = {"0", "false", "no"}


def _env_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Configuration:
    cache_enabled: bool = False
    cache_max_size: int = DEFAULT_MAX_SIZE
    cache_precisions: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_PRECISIONS))
    light_time_max_iterations: int = 10
    light_time_precision: float = 1.0e-12  # seconds

    def __post_init__(self) -> None:
        merged = dict(DEFAULT_PRECISIONS)
        merged.update(self.cache_precisions)
        object.__setattr__(self, "cache_precisions", MappingProxyType(merged))
        if self.light_time_max_iterations < 1:
            raise ValueError("light_time_max_iterations must be >= 1")

    def cache_precision(self, kind: str) -> int:
        return self.cache_precisions.get(kind, FALLBACK_PRECISION)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Configuration":
        env = os.environ if environ is None else environ
        enabled = env.get(f"{_ENV_PREFIX}CACHE", "0").lower() not in _FALSEY
        size_raw = env.get(f"{_ENV_PREFIX}CACHE_SIZE", "")
        max_size = _env_int(f"{_ENV_PREFIX}CACHE_SIZE", size_raw) if size_raw else DEFAULT_MAX_SIZE
        precision_prefix = f"{_ENV_PREFIX}CACHE_PRECISION_"
        precisions = {
            name[len(precision_prefix):].lower(): _env_int(name, raw)
            for name, raw in env.items()
            if name.startswith(precision_prefix)
        }
        return cls(cache_enabled=enabled, cache_max_size=max_size, cache_precisions=precisions)


CacheLike = Union[LRUCache, NullCache]


@dataclass(frozen=True)
class Context:
    """Configuration plus the cache instance every computation shares."""

    config: Configuration = field(default_factory=Configuration)
    cache: CacheLike = field(default_factory=NullCache)

    @classmethod
    def create(cls, config: Optional[Configuration] = None) -> "Context":
        config = config or Configuration()
        cache: CacheLike = LRUCache(config.cache_max_size) if config.cache_enabled else NullCache()
        return cls(config=config, cache=cache)

    @classmethod
    def default(cls) -> "Context":
        return cls(config=Configuration(), cache=NullCache())

    @classmethod
    def from_env(cls) -> "Context":
        return cls.create(Configuration.from_env())

    def key(self, kind: str, instant, *components: Hashable) -> tuple:
        return cache_key(kind, instant, *components, precision=self.config.cache_precision(kind))


def resolve(context: Optional[Context]) -> Context:
    return context if context is not None else Context.default()
