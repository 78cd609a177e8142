"""
Example CLDR plural data for proof-of-concept runs and tests.

An excerpt of the CLDR supplemental plural rules (cardinal and ordinal),
in the shape the data-fetch layer hands to the compiler. It covers the
interesting shapes: and-only, or-only, and-then-or, ranges over n and
over i, modulo variables, negated lists and locales sharing rules.
"""
from typing import Dict, Optional

from cplm.compiler import compile_plural_rules
from cplm.model import PluralInfo
from cplm.options import CompilerOptions

_EN_OTHER = " @integer 0, 2~16, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …"
_NO_PLURALS = " @integer 0~15, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …"
_ORDINAL_OTHER = " @integer 0~15, 100, 1000, 10000, 100000, 1000000, …"
_ONE_ONLY_OTHER = " @integer 0, 2~16, 100, 1000, 10000, 100000, 1000000, …"


def _one_i1_v0() -> Dict[str, str]:
    return {
        "pluralRule-count-one": "i = 1 and v = 0 @integer 1",
        "pluralRule-count-other": _EN_OTHER,
    }


EXAMPLE_CARDINALS: Dict[str, Dict[str, str]] = {
    "ar": {
        "pluralRule-count-zero": "n = 0 @integer 0 @decimal 0.0, 0.00, 0.000, 0.0000",
        "pluralRule-count-one": "n = 1 @integer 1 @decimal 1.0, 1.00, 1.000, 1.0000",
        "pluralRule-count-two": "n = 2 @integer 2 @decimal 2.0, 2.00, 2.000, 2.0000",
        "pluralRule-count-few": "n % 100 = 3..10 @integer 3~10, 103~110, 1003, … @decimal 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0, 103.0, 1003.0, …",
        "pluralRule-count-many": "n % 100 = 11..99 @integer 11~26, 111, 1011, … @decimal 11.0, 12.0, 13.0, 14.0, 15.0, 16.0, 17.0, 18.0, 111.0, 1011.0, …",
        "pluralRule-count-other": " @integer 100~102, 200~202, 300~302, 400~402, 500~502, 600, 1000, 10000, 100000, 1000000, … @decimal 0.1~0.9, 1.1~1.7, 10.1, 100.1, 1000.1, …",
    },
    "de": _one_i1_v0(),
    "en": _one_i1_v0(),
    "fr": {
        "pluralRule-count-one": "i = 0,1 @integer 0, 1 @decimal 0.0~1.5",
        "pluralRule-count-other": " @integer 2~17, 100, 1000, 10000, 100000, 1000000, … @decimal 2.0~3.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …",
    },
    "ja": {
        "pluralRule-count-other": _NO_PLURALS,
    },
    "lt": {
        "pluralRule-count-one": "n % 10 = 1 and n % 100 != 11..19 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, … @decimal 1.0, 21.0, 31.0, 41.0, 51.0, 61.0, 71.0, 81.0, 101.0, 1001.0, …",
        "pluralRule-count-few": "n % 10 = 2..9 and n % 100 != 11..19 @integer 2~9, 22~29, 102, 1002, … @decimal 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 22.0, 102.0, 1002.0, …",
        "pluralRule-count-many": "f != 0   @decimal 0.1~0.9, 1.1~1.7, 10.1, 100.1, 1000.1, …",
        "pluralRule-count-other": " @integer 0, 10~20, 30, 40, 50, 60, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0, 10.0, 11.0, 12.0, 13.0, 14.0, 15.0, 16.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …",
    },
    "lv": {
        "pluralRule-count-zero": "n % 10 = 0 or n % 100 = 11..19 or v = 2 and f % 100 = 11..19 @integer 0, 10~20, 30, 40, 50, 60, 100, 1000, 10000, 100000, 1000000, … @decimal 0.0, 10.0, 11.0, 12.0, 13.0, 14.0, 15.0, 16.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …",
        "pluralRule-count-one": "n % 10 = 1 and n % 100 != 11 or v = 2 and f % 10 = 1 and f % 100 != 11 or v != 2 and f % 10 = 1 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, … @decimal 0.1, 1.0, 1.1, 2.1, 3.1, 4.1, 5.1, 6.1, 7.1, 10.1, 100.1, 1000.1, …",
        "pluralRule-count-other": " @integer 2~9, 22~29, 102, 1002, … @decimal 0.2~0.9, 1.2~1.9, 10.2, 100.2, 1000.2, …",
    },
    "nl": _one_i1_v0(),
    "pt": {
        "pluralRule-count-one": "i = 0..1 @integer 0, 1 @decimal 0.0~1.5",
        "pluralRule-count-other": " @integer 2~17, 100, 1000, 10000, 100000, 1000000, … @decimal 2.0~3.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …",
    },
    "pt-PT": _one_i1_v0(),
    "ru": {
        "pluralRule-count-one": "v = 0 and i % 10 = 1 and i % 100 != 11 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, …",
        "pluralRule-count-few": "v = 0 and i % 10 = 2..4 and i % 100 != 12..14 @integer 2~4, 22~24, 32~34, 42~44, 52~54, 62, 102, 1002, …",
        "pluralRule-count-many": "v = 0 and i % 10 = 0 or v = 0 and i % 10 = 5..9 or v = 0 and i % 100 = 11..14 @integer 0, 5~19, 100, 1000, 10000, 100000, 1000000, …",
        "pluralRule-count-other": "   @decimal 0.0~1.5, 10.0, 100.0, 1000.0, 10000.0, 100000.0, 1000000.0, …",
    },
    "sv": _one_i1_v0(),
    "und": {
        "pluralRule-count-other": _NO_PLURALS,
    },
    "vi": {
        "pluralRule-count-other": _NO_PLURALS,
    },
}

EXAMPLE_ORDINALS: Dict[str, Dict[str, str]] = {
    "ar": {"pluralRule-count-other": _ORDINAL_OTHER},
    "de": {"pluralRule-count-other": _ORDINAL_OTHER},
    "en": {
        "pluralRule-count-one": "n % 10 = 1 and n % 100 != 11 @integer 1, 21, 31, 41, 51, 61, 71, 81, 101, 1001, …",
        "pluralRule-count-two": "n % 10 = 2 and n % 100 != 12 @integer 2, 22, 32, 42, 52, 62, 72, 82, 102, 1002, …",
        "pluralRule-count-few": "n % 10 = 3 and n % 100 != 13 @integer 3, 23, 33, 43, 53, 63, 73, 83, 103, 1003, …",
        "pluralRule-count-other": " @integer 0, 4~18, 100, 1000, 10000, 100000, 1000000, …",
    },
    "fr": {
        "pluralRule-count-one": "n = 1 @integer 1",
        "pluralRule-count-other": _ONE_ONLY_OTHER,
    },
    "ja": {"pluralRule-count-other": _ORDINAL_OTHER},
    "lt": {"pluralRule-count-other": _ORDINAL_OTHER},
    "lv": {"pluralRule-count-other": _ORDINAL_OTHER},
    "nl": {"pluralRule-count-other": _ORDINAL_OTHER},
    "pt": {"pluralRule-count-other": _ORDINAL_OTHER},
    "ru": {"pluralRule-count-other": _ORDINAL_OTHER},
    "sv": {
        "pluralRule-count-one": "n % 10 = 1,2 and n % 100 != 11,12 @integer 1, 2, 21, 22, 31, 32, 41, 42, 51, 52, 61, 62, 71, 72, 81, 82, 101, 1001, …",
        "pluralRule-count-other": " @integer 0, 3~17, 100, 1000, 10000, 100000, 1000000, …",
    },
    "vi": {
        "pluralRule-count-one": "n = 1 @integer 1",
        "pluralRule-count-other": _ONE_ONLY_OTHER,
    },
}


def build_example_plural_info(options: Optional[CompilerOptions] = None) -> PluralInfo:
    return compile_plural_rules(EXAMPLE_CARDINALS, EXAMPLE_ORDINALS, options)
