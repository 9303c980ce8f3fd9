"""
Option classification, availability and variant resolution for catalog products.

Merchants name their options freely ("Color", "Shade", "Waist", "Size"...), so
every lookup starts by mapping a product's option names onto a color key and a
primary size key. All functions here are pure and operate on already-fetched
variants.
"""
import math
from functools import lru_cache
from typing import Iterable, List, NamedTuple, Optional, Sequence, Set

from pyuca import Collator

from .models import Variant

COLOR_NAMES = frozenset({"color", "colour", "shade"})
# Highest priority first: overall size beats waist/width, which beat length/inseam.
SIZE_PRIORITY = ("size", "waist", "width", "w", "length", "inseam", "l")
SIZE_NAMES = frozenset(SIZE_PRIORITY)


class OptionKeys(NamedTuple):
    color_key: Optional[str] = None
    size_key: Optional[str] = None


class Availability(NamedTuple):
    colors: Set[str]
    sizes: Set[str]


def norm(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


def is_color_name(name: str) -> bool:
    return norm(name) in COLOR_NAMES


def is_size_name(name: str) -> bool:
    return norm(name) in SIZE_NAMES


def pick_primary_size_key(keys: Sequence[str]) -> Optional[str]:
    """Pick the size-like option that best denotes overall size, by fixed priority."""
    if not keys:
        return None
    normalized = [norm(k) for k in keys]
    for token in SIZE_PRIORITY:
        if token in normalized:
            return keys[normalized.index(token)]
    return keys[0]


def classify_options(option_names: Iterable[str]) -> OptionKeys:
    names = list(option_names)
    color_keys = [n for n in names if is_color_name(n)]
    size_keys = [n for n in names if is_size_name(n)]
    return OptionKeys(
        color_key=color_keys[0] if color_keys else None,
        size_key=pick_primary_size_key(size_keys),
    )


def aggregate_availability(
    variants: Iterable[Variant],
    keys: OptionKeys,
    color_filter: Optional[str] = None,
) -> Availability:
    """
    Collect in-stock colors, and in-stock sizes optionally restricted to one color.

    Values keep their catalog spelling; only the color filter comparison is normalized.
    Variants that are not available for sale contribute nothing.
    """
    colors: Set[str] = set()
    sizes: Set[str] = set()
    wanted = norm(color_filter)

    for variant in variants:
        if not variant.available_for_sale:
            continue
        opts = variant.option_map()
        v_color = opts.get(keys.color_key) if keys.color_key else None
        v_size = opts.get(keys.size_key) if keys.size_key else None

        if v_color:
            colors.add(v_color)
        if not v_size:
            continue
        # A variant without a color value is not constrained by the filter.
        if not wanted or not v_color or norm(v_color) == wanted:
            sizes.add(v_size)

    return Availability(colors=colors, sizes=sizes)


@lru_cache()
def _collator() -> Collator:
    # Loads the Unicode collation table once per process.
    return Collator()


def _text_key(value: str):
    return (_collator().sort_key(value), value)


def _as_number(value: str) -> Optional[float]:
    if "_" in value:  # float() accepts digit separators
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def sort_colors(colors: Iterable[str]) -> List[str]:
    return sorted(colors, key=_text_key)


def sort_sizes(sizes: Iterable[str]) -> List[str]:
    """
    Numeric sizes first in numeric order (30, 32, 34), then the rest lexically.

    Letter sizes are not put in garment order: ["M", "S", "L"] sorts to ["L", "M", "S"].
    """
    numeric = []
    textual = []
    for size in sizes:
        number = _as_number(size)
        if number is None:
            textual.append(size)
        else:
            numeric.append((number, size))
    numeric.sort()
    return [size for _, size in numeric] + sorted(textual, key=_text_key)


def resolve_variant(
    variants: Iterable[Variant],
    keys: OptionKeys,
    size: Optional[str] = None,
    color: Optional[str] = None,
) -> Optional[Variant]:
    """
    Return the first variant, in catalog order, matching the requested size and color.

    Empty requests match anything. Availability is not checked here; callers read
    ``available_for_sale`` on the result.
    """
    want_size = norm(size)
    want_color = norm(color)

    for variant in variants:
        opts = variant.option_map()
        v_color = opts.get(keys.color_key, "") if keys.color_key else ""
        v_size = opts.get(keys.size_key, "") if keys.size_key else ""

        ok_size = not size or norm(v_size) == want_size
        ok_color = not color or norm(v_color) == want_color
        if ok_size and ok_color:
            return variant
    return None
