"""
Core Plural Model Objects

Defines the data structures the rule compiler produces:
    - Categories (the six CLDR plural forms)
    - Category predicates (one compiled condition per form)
    - Locale rule tables (cardinal + ordinal switches and their preamble)
    - Sample sets (conformance fixtures lifted from the CLDR relations)
    - Cultures and the PluralInfo root container

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about the target language of the emitter
        - Are immutable once compiled
        - Are fully serializable
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .expressions import Assignment, Expression
from .operands import ModuloVariable, Operand


class Category(Enum):
    """The six CLDR plural categories."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"

    @property
    def rule_key(self) -> str:
        """Key of this category in CLDR supplemental plural data."""
        return f"pluralRule-count-{self.value}"


# Order categories are compiled and emitted in. "other" leads because it
# becomes the default branch; the rest never overlap in CLDR data.
COMPILE_ORDER: Tuple[Category, ...] = (
    Category.OTHER,
    Category.ZERO,
    Category.ONE,
    Category.TWO,
    Category.FEW,
    Category.MANY,
)

# Order sample fixtures are collected in.
SAMPLE_ORDER: Tuple[Category, ...] = (
    Category.ONE,
    Category.TWO,
    Category.FEW,
    Category.MANY,
    Category.ZERO,
    Category.OTHER,
)


@dataclass(frozen=True)
class CategoryPredicate:
    """
    A plural category paired with its compiled condition.

    Properties:
        category: The plural form selected when the condition holds
        condition: Boolean Expression over operands and modulo variables.
            None for "other", which is the unconditional fallback.
    """

    category: Category
    condition: Optional[Expression] = None

    @property
    def is_fallback(self) -> bool:
        return self.condition is None


@dataclass(frozen=True)
class LocaleRuleTable:
    """
    The compiled plural rules of one locale.

    Two locales are interchangeable exactly when their tables compare
    equal. Equality is the generated dataclass equality over these fields
    in declaration order; every field is an immutable value (tuples,
    enums, frozen AST nodes), so the comparison is structural.

    Properties:
        cardinal:
            Category predicates for counting, in COMPILE_ORDER.
            Always starts with the "other" fallback.
        ordinal:
            Same for ordinal numbers, or None when the locale has no
            ordinal rules.
        operands:
            Live operands, in Operand declaration order
        modulo_variables:
            Distinct modulo variables, in first-seen order
        preamble:
            Assignments computing the live operands and modulo variables

    INVARIANTS:
        - cardinal is never empty
        - no category appears twice in one switch
    """

    cardinal: Tuple[CategoryPredicate, ...]
    ordinal: Optional[Tuple[CategoryPredicate, ...]] = None
    operands: Tuple[Operand, ...] = ()
    modulo_variables: Tuple[ModuloVariable, ...] = ()
    preamble: Tuple[Assignment, ...] = ()

    @property
    def has_cardinal(self) -> bool:
        """True when at least one cardinal category has a condition."""
        return any(not c.is_fallback for c in self.cardinal)

    @property
    def has_ordinal(self) -> bool:
        """True when at least one ordinal category has a condition."""
        return any(not c.is_fallback for c in (self.ordinal or ()))

    @property
    def has_rules(self) -> bool:
        return self.has_cardinal or self.has_ordinal

    def get_predicate(self, category: Category, ordinal: bool = False) -> Optional[CategoryPredicate]:
        """
        Retrieve the predicate compiled for a category.

        Args:
            category: Plural category
            ordinal: Look in the ordinal switch instead of the cardinal one

        Returns:
            CategoryPredicate or None if the category is not defined
        """
        for predicate in (self.ordinal or ()) if ordinal else self.cardinal:
            if predicate.category == category:
                return predicate
        return None


@dataclass(frozen=True)
class SampleSet:
    """
    Sample values CLDR lists for one category.

    Values stay strings so decimals keep their visible trailing zeros
    ("1.0" and "1.00" are different samples).
    """

    category: Category
    integers: Tuple[str, ...] = ()
    decimals: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LocaleSamples:
    """Sample sets of one locale, in SAMPLE_ORDER."""

    cardinal: Tuple[SampleSet, ...] = ()
    ordinal: Tuple[SampleSet, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.cardinal or self.ordinal)


@dataclass(frozen=True)
class SampleTest:
    """One conformance vector: value must classify as expected."""

    ordinal: bool
    expected: Category
    value: str
    decimal: bool = False


def sample_tests(samples: LocaleSamples) -> Tuple[SampleTest, ...]:
    """
    Flatten sample sets into test vectors.

    Cardinal vectors come first, then ordinal ones; within a set the
    integers precede the decimals.
    """
    tests: List[SampleTest] = []
    for ordinal, sets in ((False, samples.cardinal), (True, samples.ordinal)):
        for sample_set in sets:
            for value in sample_set.integers:
                tests.append(SampleTest(ordinal, sample_set.category, value))
            for value in sample_set.decimals:
                tests.append(SampleTest(ordinal, sample_set.category, value, decimal=True))
    return tuple(tests)


@dataclass(frozen=True)
class CultureRules:
    """
    A canonical rule table shared by one or more locale tags.

    Properties:
        name: Canonical tag of the first locale compiled into this entry
        langs: Every tag (raw and canonical) resolving to this table,
            deduplicated and sorted
        table: The compiled rules
        samples: Samples of the canonical locale
    """

    name: str
    langs: Tuple[str, ...]
    table: LocaleRuleTable
    samples: LocaleSamples = field(default_factory=LocaleSamples)

    @property
    def sample_tests(self) -> Tuple[SampleTest, ...]:
        return sample_tests(self.samples)


@dataclass(frozen=True)
class PluralInfo:
    """
    Root container of a compilation run.

    This is what the external emitter consumes.

    Properties:
        cultures: Canonical rule tables, in compilation order
        others: Sorted tags of locales with no applicable rules
            (their plural form is always "other")
    """

    cultures: Tuple[CultureRules, ...] = ()
    others: Tuple[str, ...] = ()

    def cultures_map(self) -> Dict[str, CultureRules]:
        """Map every known tag to the culture that owns it."""
        mapping: Dict[str, CultureRules] = {}
        for culture in self.cultures:
            mapping[culture.name] = culture
            for lang in culture.langs:
                mapping.setdefault(lang, culture)
        return mapping

    def get_culture(self, tag: str) -> Optional[CultureRules]:
        """
        Retrieve the culture owning a tag.

        Args:
            tag: Raw or canonical locale tag

        Returns:
            CultureRules or None if the tag has no rule table
        """
        for culture in self.cultures:
            if tag == culture.name or tag in culture.langs:
                return culture
        return None

    def is_others(self, tag: str) -> bool:
        return tag in self.others
