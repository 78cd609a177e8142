"""
Canonical Plural Logic Model (CPLM) Package

Compiles Unicode CLDR plural rules into language-agnostic decision tables.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Where the CLDR data comes from (fetching, JSON decoding)
    - Target-language source generation
    - Evaluating a quantity at runtime

It turns {locale -> category -> relation} into PluralInfo.

All rendering happens in backends or external emitters.
"""

from cplm.compiler import compile_plural_rules
from cplm.errors import ConfigurationError, DataIntegrityError, ParseError, PluralCompileError
from cplm.options import CompilerOptions, MissingOtherPolicy

__version__ = "0.1.0"

__all__ = [
    "CompilerOptions",
    "ConfigurationError",
    "DataIntegrityError",
    "MissingOtherPolicy",
    "ParseError",
    "PluralCompileError",
    "compile_plural_rules",
]
