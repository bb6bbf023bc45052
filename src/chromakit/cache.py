"""Memoization layer for expensive color conversions.

This module keeps small, bounded caches in front of the conversions that the
search algorithms call over and over (HSL, LAB, luminance, contrast ratio)
and in front of blending and interpolation.

Cache Strategies:
    - Component caches (HSL, LAB, luminance): keyed by the color's rounded
      RGBA components
    - Contrast cache: keyed by the sorted pair of color keys, since the
      contrast ratio is symmetric
    - Blend cache: ordered pair of color keys plus the blend mode
    - Interpolation cache: ordered pair of color keys, the amount rounded to
      3 decimals and the interpolation space

Each sub-cache has its own capacity (100 entries by default) and evicts the
least recently used entry when full. All access goes through a per-cache lock
so instances can be shared between threads. Two threads racing on the same
key may both compute and store the value; the stored result is identical.

The cache never changes results: a miss always falls through to the real
computation.

Example:
    >>> from chromakit.cache import ConversionCache
    >>> from chromakit.colors import Color
    >>> cache = ConversionCache(max_size=10)
    >>> Color(0.0, 0.0, 1.0).luminance(cache=cache)
    0.0722
    >>> cache.stats()["luminance"]["size"]
    1
"""

import threading
from collections import OrderedDict
from typing import Any, Dict, Hashable, Optional, Sequence, Tuple

__all__ = ["ConversionCache", "get_default_cache", "set_default_cache"]

DEFAULT_MAX_SIZE = 100
KEY_PRECISION = 10


class _LRUStore:
    """A bounded, lock-protected mapping with least-recently-used eviction."""

    def __init__(self, max_size: int):
        if max_size < 1:
            raise ValueError(f"Cache size must be positive, got {max_size}")
        self.max_size = max_size
        self._data: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            try:
                value = self._data[key]
            except KeyError:
                self.misses += 1
                return None
            self._data.move_to_end(key)
            self.hits += 1
            return value

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.max_size:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class ConversionCache:
    """Thread-safe cache for color conversions.

    Colors are accepted as any sequence of 3 or 4 floats (RGB or RGBA); the
    :class:`~chromakit.colors.Color` type is one such sequence.

    Attributes:
        max_size: Capacity of every sub-cache
    """

    _CACHE_NAMES = (
        "hsl",
        "lab",
        "luminance",
        "contrast",
        "blend",
        "interpolation",
    )

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE):
        self.max_size = max_size
        self._stores: Dict[str, _LRUStore] = {
            name: _LRUStore(max_size) for name in self._CACHE_NAMES
        }

    def _get_cache_key(self, color: Sequence[float]) -> str:
        """Canonical key built from the rounded RGBA components."""
        components = list(color)
        if len(components) == 3:
            components.append(1.0)
        return ",".join(f"{round(float(c), KEY_PRECISION)!r}" for c in components)

    # Component caches

    def get_cached_hsl(self, color: Sequence[float]) -> Optional[Tuple[float, float, float]]:
        return self._stores["hsl"].get(self._get_cache_key(color))

    def cache_hsl(self, color: Sequence[float], hsl: Tuple[float, float, float]) -> None:
        self._stores["hsl"].put(self._get_cache_key(color), hsl)

    def get_cached_lab(self, color: Sequence[float]) -> Optional[Tuple[float, float, float]]:
        return self._stores["lab"].get(self._get_cache_key(color))

    def cache_lab(self, color: Sequence[float], lab: Tuple[float, float, float]) -> None:
        self._stores["lab"].put(self._get_cache_key(color), lab)

    def get_cached_luminance(self, color: Sequence[float]) -> Optional[float]:
        return self._stores["luminance"].get(self._get_cache_key(color))

    def cache_luminance(self, color: Sequence[float], luminance: float) -> None:
        self._stores["luminance"].put(self._get_cache_key(color), luminance)

    # Pairwise caches

    def _contrast_key(self, color1: Sequence[float], color2: Sequence[float]) -> str:
        # Contrast is symmetric, so operand order must not create a new entry.
        key1, key2 = sorted((self._get_cache_key(color1), self._get_cache_key(color2)))
        return f"{key1}:{key2}"

    def get_cached_contrast_ratio(
        self, color1: Sequence[float], color2: Sequence[float]
    ) -> Optional[float]:
        return self._stores["contrast"].get(self._contrast_key(color1, color2))

    def cache_contrast_ratio(
        self, color1: Sequence[float], color2: Sequence[float], ratio: float
    ) -> None:
        self._stores["contrast"].put(self._contrast_key(color1, color2), ratio)

    def _blend_key(
        self, color1: Sequence[float], color2: Sequence[float], blend_mode: str
    ) -> str:
        return f"{self._get_cache_key(color1)}:{self._get_cache_key(color2)}:{blend_mode}"

    def get_cached_blended_color(
        self, color1: Sequence[float], color2: Sequence[float], blend_mode: str
    ) -> Optional[Any]:
        return self._stores["blend"].get(self._blend_key(color1, color2, blend_mode))

    def cache_blended_color(
        self,
        color1: Sequence[float],
        color2: Sequence[float],
        blend_mode: str,
        result: Any,
    ) -> None:
        self._stores["blend"].put(self._blend_key(color1, color2, blend_mode), result)

    def _interpolation_key(
        self,
        color1: Sequence[float],
        color2: Sequence[float],
        amount: float,
        color_space: str,
    ) -> str:
        rounded_amount = round(amount, 3)
        return (
            f"{self._get_cache_key(color1)}:{self._get_cache_key(color2)}"
            f":{rounded_amount!r}:{color_space}"
        )

    def get_cached_interpolated_color(
        self,
        color1: Sequence[float],
        color2: Sequence[float],
        amount: float,
        color_space: str,
    ) -> Optional[Any]:
        key = self._interpolation_key(color1, color2, amount, color_space)
        return self._stores["interpolation"].get(key)

    def cache_interpolated_color(
        self,
        color1: Sequence[float],
        color2: Sequence[float],
        amount: float,
        color_space: str,
        result: Any,
    ) -> None:
        key = self._interpolation_key(color1, color2, amount, color_space)
        self._stores["interpolation"].put(key, result)

    # Maintenance

    def clear(self, name: Optional[str] = None) -> None:
        """Clear one sub-cache by name, or all of them."""
        if name is None:
            for store in self._stores.values():
                store.clear()
            return
        try:
            self._stores[name].clear()
        except KeyError:
            raise ValueError(
                f"Unknown cache '{name}'. Expected one of: {', '.join(self._CACHE_NAMES)}"
            ) from None

    def stats(self) -> Dict[str, Dict[str, int]]:
        """Size, hit and miss counters per sub-cache."""
        return {
            name: {"size": len(store), "hits": store.hits, "misses": store.misses}
            for name, store in self._stores.items()
        }


_default_cache: Optional[ConversionCache] = None
_default_cache_lock = threading.Lock()


def get_default_cache() -> ConversionCache:
    """Get or lazily create the process-wide default cache."""
    global _default_cache
    if _default_cache is None:
        with _default_cache_lock:
            if _default_cache is None:
                _default_cache = ConversionCache()
    return _default_cache


def set_default_cache(cache: Optional[ConversionCache]) -> None:
    """Replace the default cache; ``None`` resets it to a fresh lazy instance."""
    global _default_cache
    with _default_cache_lock:
        _default_cache = cache


def resolve_cache(cache: Optional[ConversionCache]) -> ConversionCache:
    return cache if cache is not None else get_default_cache()
