"""
Exceptions raised by the plural rule compiler.

All of them are fatal for the run (or, for DataIntegrityError under the
skip policy, for one locale). The input is CLDR data and assumed to be
well-formed, so nothing here is retried or repaired.
"""

from typing import Optional


class PluralCompileError(Exception):
    """Base class for every compiler failure."""
    pass


class ParseError(PluralCompileError):
    """Raised when a CLDR relation cannot be parsed."""

    def __init__(
        self,
        message: str,
        relation: str,
        locale: Optional[str] = None,
        position: Optional[int] = None,
    ):
        self.message = message
        self.relation = relation
        self.locale = locale
        self.position = position
        super().__init__(str(self))

    def with_locale(self, locale: str) -> "ParseError":
        return ParseError(self.message, self.relation, locale=locale, position=self.position)

    def __str__(self) -> str:
        where = f" at position {self.position}" if self.position is not None else ""
        culture = f" for locale '{self.locale}'" if self.locale else ""
        return f"{self.message}{where} in relation '{self.relation}'{culture}"


class ConfigurationError(PluralCompileError):
    """Raised when the requested compilation cannot be set up."""
    pass


class DataIntegrityError(PluralCompileError):
    """Raised when locale data violates a CLDR guarantee."""

    def __init__(self, message: str, locale: str):
        self.locale = locale
        super().__init__(f"{locale}: {message}")
