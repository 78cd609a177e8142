"""Locale tag utilities.

CLDR keys its plural data by language tag ("pt-PT", "es-419", "sr-Latn").
Rule tables are registered under the canonical BCP-47 spelling of the
tag; the raw key is kept as an alias when it differs.
"""

from __future__ import annotations

import functools
import logging

from babel.core import get_locale_identifier, parse_locale

logger = logging.getLogger(__name__)

__all__ = ["canonicalize_tag", "normalize_tag"]


def normalize_tag(tag: str) -> str:
    """Convert a POSIX-style tag (pt_PT) to BCP-47 separators (pt-PT)."""
    return tag.strip().replace("_", "-")


@functools.lru_cache(maxsize=1024)
def canonicalize_tag(tag: str) -> str:
    """Return the canonical BCP-47 spelling of a locale tag.

    Language is lower-cased, script title-cased, region upper-cased and
    variants lower-cased.

    Example:
        >>> canonicalize_tag("pt_pt")
        'pt-PT'
        >>> canonicalize_tag("sr-latn-ba")
        'sr-Latn-BA'

    Tags Babel cannot parse are returned unchanged (apart from separator
    normalization) and logged.
    """
    normalized = normalize_tag(tag)
    try:
        parts = parse_locale(normalized, sep="-")
    except ValueError as e:
        logger.warning("Cannot canonicalize locale tag '%s': %s", tag, e)
        return normalized

    lang, territory, script, variant = parts[:4]
    if variant:
        variant = variant.lower()
    return get_locale_identifier((lang, territory, script, variant) + tuple(parts[4:]), sep="-")
