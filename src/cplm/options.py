"""
Compiler configuration.

Options are plain immutable values handed to compile_plural_rules().
They can also be read from a dict or a YAML document:

    locales: en, fr, pt-PT      # or "*" (default), or a list
    missing_other: skip         # or "abort"
    excluded_others: [und]
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from cplm.errors import ConfigurationError

ALL_LOCALES = "*"


class MissingOtherPolicy(Enum):
    """
    What to do with a locale lacking the mandatory "other" category.

    SKIP: warn and leave the locale out of the output
    ABORT: fail the whole run with DataIntegrityError
    """
    SKIP = "skip"
    ABORT = "abort"


@dataclass(frozen=True)
class CompilerOptions:
    """
    Properties:
        locales:
            "*" for every locale in the input, or an allow-list given as
            a comma-separated string or a sequence of tags
        missing_other:
            Policy for locales without the mandatory "other" category
        excluded_others:
            Tags never listed in the "others" bucket (und is the
            undetermined pseudo-locale)
    """

    locales: Union[str, Tuple[str, ...]] = ALL_LOCALES
    missing_other: MissingOtherPolicy = MissingOtherPolicy.SKIP
    excluded_others: Tuple[str, ...] = ("und",)

    def requested_locales(self) -> Optional[List[str]]:
        """
        Explicitly requested tags, in the order given.

        Returns:
            None when every locale is selected
        """
        if isinstance(self.locales, str):
            if self.locales.strip() == ALL_LOCALES:
                return None
            requested = [t.strip() for t in self.locales.split(",")]
        else:
            requested = [str(t).strip() for t in self.locales]
        return [t for t in requested if t]


def options_from_dict(d: Dict[str, Any] | None) -> CompilerOptions:
    """
    Build options from a plain mapping.

    Raises:
        ConfigurationError: On unknown keys or invalid values
    """
    if d is None:
        return CompilerOptions()
    if not isinstance(d, dict):
        raise ConfigurationError(f"Options must be a mapping, got {type(d).__name__}")

    unknown = set(d) - {"locales", "missing_other", "excluded_others"}
    if unknown:
        raise ConfigurationError(f"Unknown options: {sorted(unknown)}")

    locales = d.get("locales", ALL_LOCALES)
    if isinstance(locales, (list, tuple)):
        locales = tuple(str(t) for t in locales)
    elif not isinstance(locales, str):
        raise ConfigurationError(f"Invalid locales option: {locales!r}")

    try:
        policy = MissingOtherPolicy(str(d.get("missing_other", "skip")).lower())
    except ValueError:
        raise ConfigurationError(f"Invalid missing_other policy: {d.get('missing_other')!r}")

    excluded = d.get("excluded_others", ["und"])
    if not isinstance(excluded, (list, tuple)):
        raise ConfigurationError(f"excluded_others must be a list, got {excluded!r}")

    return CompilerOptions(
        locales=locales,
        missing_other=policy,
        excluded_others=tuple(str(t) for t in excluded),
    )


def options_from_yaml(s: str) -> CompilerOptions:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid options document: {e}")
    return options_from_dict(d)


def options_to_dict(options: CompilerOptions) -> Dict[str, Any]:
    locales = options.locales if isinstance(options.locales, str) else list(options.locales)
    return {
        "locales": locales,
        "missing_other": options.missing_other.value,
        "excluded_others": list(options.excluded_others),
    }
