"""
Locale Rule Table Builder (Layer 3: one locale's rule strings → table).

Drives the parser and the condition compiler over the categories of a
locale, for the cardinal rules and, when present, the ordinal rules, then
lets the resolver compute the shared operand preamble.

Input is the CLDR supplemental shape for one locale:

    {
        "pluralRule-count-one": "i = 1 and v = 0 @integer 1",
        "pluralRule-count-other": " @integer 0, 2~16, 100, … @decimal …",
    }
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from cplm.conditions import compile_relation
from cplm.errors import DataIntegrityError, ParseError
from cplm.model import (
    COMPILE_ORDER,
    SAMPLE_ORDER,
    Category,
    CategoryPredicate,
    LocaleRuleTable,
    LocaleSamples,
    SampleSet,
)
from cplm.operands import ModuloVariable
from cplm.relation_parser import parse_relation, parse_samples
from cplm.resolver import resolve_operands

logger = logging.getLogger(__name__)

RuleMap = Mapping[str, str]


@dataclass(frozen=True)
class CompiledLocale:
    """A locale's table together with its sample fixtures."""

    tag: str
    table: LocaleRuleTable
    samples: LocaleSamples


def check_mandatory_other(tag: str, cardinal: Optional[RuleMap], ordinal: Optional[RuleMap]) -> None:
    """
    Verify the CLDR guarantee that every rule set defines "other".

    Raises:
        DataIntegrityError: If cardinal rules are missing or lack "other",
            or ordinal rules exist without "other"
    """
    key = Category.OTHER.rule_key
    if not cardinal:
        raise DataIntegrityError("no cardinal plural rules defined", tag)
    if key not in cardinal:
        raise DataIntegrityError("cardinal rules miss the mandatory `other` category", tag)
    if ordinal is not None and key not in ordinal:
        raise DataIntegrityError("ordinal rules miss the mandatory `other` category", tag)


def compile_rule_set(
    tag: str,
    rules: RuleMap,
    modulo_variables: List[ModuloVariable],
) -> Tuple[CategoryPredicate, ...]:
    """
    Compile the categories of one rule set in COMPILE_ORDER.

    Args:
        tag: Locale tag, for error reporting
        rules: Category key → relation string
        modulo_variables: Locale-wide registry, extended in place with
            newly seen modulo variables

    Returns:
        One CategoryPredicate per category present; "other" carries no
        condition

    Raises:
        ParseError: If a relation is malformed
    """
    predicates = []
    for category in COMPILE_ORDER:
        relation = rules.get(category.rule_key)
        if relation is None:
            continue

        if category == Category.OTHER:
            predicates.append(CategoryPredicate(category))
            continue

        parsed = parse_relation(relation, locale=tag)
        if parsed.is_empty:
            raise ParseError(f"Category `{category.value}` has no condition", relation, tag)

        for variable in parsed.modulo_variables:
            if variable not in modulo_variables:
                modulo_variables.append(variable)

        predicates.append(CategoryPredicate(category, compile_relation(parsed)))

    return tuple(predicates)


def collect_samples(rules: Optional[RuleMap]) -> Tuple[SampleSet, ...]:
    """Lift the @integer / @decimal clauses of a rule set."""
    if not rules:
        return ()
    samples = []
    for category in SAMPLE_ORDER:
        relation = rules.get(category.rule_key)
        if relation is None:
            continue
        integers, decimals = parse_samples(relation)
        samples.append(SampleSet(category, integers, decimals))
    return tuple(samples)


def build_locale_table(
    tag: str,
    cardinal: Optional[RuleMap],
    ordinal: Optional[RuleMap] = None,
) -> CompiledLocale:
    """
    Compile one locale.

    Args:
        tag: Locale tag
        cardinal: Cardinal rule set (mandatory)
        ordinal: Ordinal rule set, or None when CLDR has none

    Returns:
        CompiledLocale with its rule table and samples

    Raises:
        DataIntegrityError: If a mandatory "other" category is missing
        ParseError: If a relation is malformed
    """
    check_mandatory_other(tag, cardinal, ordinal)

    modulo_variables: List[ModuloVariable] = []
    ordinal_predicates = None
    if ordinal is not None:
        ordinal_predicates = compile_rule_set(tag, ordinal, modulo_variables)
    cardinal_predicates = compile_rule_set(tag, cardinal, modulo_variables)

    conditions = [p.condition for p in cardinal_predicates + (ordinal_predicates or ())]
    resolution = resolve_operands(conditions, modulo_variables)

    table = LocaleRuleTable(
        cardinal=cardinal_predicates,
        ordinal=ordinal_predicates,
        operands=resolution.operands,
        modulo_variables=resolution.modulo_variables,
        preamble=resolution.preamble,
    )
    samples = LocaleSamples(
        cardinal=collect_samples(cardinal),
        ordinal=collect_samples(ordinal),
    )

    logger.debug(
        "Compiled %s: %d cardinal, %d ordinal, operands=%s",
        tag,
        len(cardinal_predicates),
        len(ordinal_predicates or ()),
        "".join(op.symbol for op in resolution.operands) or "-",
    )
    return CompiledLocale(tag=tag, table=table, samples=samples)


__all__ = [
    "CompiledLocale",
    "build_locale_table",
    "check_mandatory_other",
    "collect_samples",
    "compile_rule_set",
]
