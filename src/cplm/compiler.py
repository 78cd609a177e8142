"""
Locale Deduplicator and compiler entry point (Layer 4).

compile_plural_rules() is a pure function from the CLDR plural maps to a
PluralInfo:

    cardinals: {locale-tag: {"pluralRule-count-<category>": relation}}
    ordinals:  same shape, optional

Locales are processed in lexical tag order. Each compiled table is
compared with every canonical table registered so far; a structurally
equal one absorbs the new tag as an alias instead of producing a second
entry. Locales whose tables carry no condition at all end up in the
"others" bucket.

All bookkeeping lives in a CompilationContext owned by one call.
"""

import logging
import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Set

from cplm.builder import CompiledLocale, RuleMap, build_locale_table
from cplm.errors import ConfigurationError, DataIntegrityError
from cplm.locales import canonicalize_tag
from cplm.model import CultureRules, LocaleRuleTable, LocaleSamples, PluralInfo
from cplm.options import CompilerOptions, MissingOtherPolicy

logger = logging.getLogger(__name__)

PluralData = Mapping[str, RuleMap]


@dataclass
class CultureEntry:
    """A canonical table while the run is still collecting aliases."""

    name: str
    table: LocaleRuleTable
    samples: LocaleSamples
    langs: List[str] = field(default_factory=list)

    def add_lang(self, tag: str, canonical: str) -> None:
        self.langs.append(tag)
        if canonical != tag:
            self.langs.append(canonical)


@dataclass
class CompilationContext:
    """
    State of one compilation run.

    Properties:
        options: Options of the run
        cultures: Canonical entries, in registration order (append-only)
        by_tag: Canonical tag → entry owning it
        others: Tags of locales without applicable rules
        other_tags: Canonical tags already routed to others
        skipped: Tags dropped under MissingOtherPolicy.SKIP
    """

    options: CompilerOptions = field(default_factory=CompilerOptions)
    cultures: List[CultureEntry] = field(default_factory=list)
    by_tag: Dict[str, CultureEntry] = field(default_factory=dict)
    others: List[str] = field(default_factory=list)
    other_tags: Set[str] = field(default_factory=set)
    skipped: List[str] = field(default_factory=list)

    def find_equivalent(self, table: LocaleRuleTable) -> Optional[CultureEntry]:
        """Return the first canonical entry whose table equals this one."""
        for entry in self.cultures:
            if entry.table == table:
                return entry
        return None

    def register(self, compiled: CompiledLocale, canonical: str) -> CultureEntry:
        entry = CultureEntry(name=canonical, table=compiled.table, samples=compiled.samples)
        entry.add_lang(compiled.tag, canonical)
        self.cultures.append(entry)
        self.by_tag[canonical] = entry
        return entry

    def add_alias(self, entry: CultureEntry, tag: str, canonical: str) -> None:
        entry.add_lang(tag, canonical)
        self.by_tag.setdefault(canonical, entry)

    def add_other(self, tag: str, canonical: str) -> None:
        self.others.append(tag)
        if canonical != tag:
            self.others.append(canonical)
        self.other_tags.add(canonical)

    def finalize(self) -> PluralInfo:
        """Freeze the collected entries into the output structure."""
        cultures = tuple(
            CultureRules(
                name=entry.name,
                langs=tuple(sorted(set(entry.langs))),
                table=entry.table,
                samples=entry.samples,
            )
            for entry in self.cultures
        )
        excluded = set(self.options.excluded_others)
        others = tuple(sorted(set(self.others) - excluded))
        return PluralInfo(cultures=cultures, others=others)


def select_locales(cardinals: PluralData, options: CompilerOptions) -> List[str]:
    """
    Resolve the locale filter against the input.

    Returns:
        Selected tags, sorted lexically

    Raises:
        ConfigurationError: If a requested tag is absent or nothing is
            selected
    """
    requested = options.requested_locales()
    if requested is None:
        tags = list(cardinals)
    else:
        for tag in requested:
            if tag not in cardinals:
                raise ConfigurationError(f"Aborted, `{tag}` not found in plural data")
        tags = requested

    tags = sorted(set(tags))
    if not tags:
        raise ConfigurationError("Not enough data to compile: no locale selected")
    return tags


def compile_locale(
    context: CompilationContext,
    tag: str,
    cardinals: PluralData,
    ordinals: Optional[PluralData],
) -> None:
    """Compile one locale into the context."""
    canonical = canonicalize_tag(tag)
    logger.debug("%s => %s", tag, canonical)

    entry = context.by_tag.get(canonical)
    if entry is not None:
        context.add_alias(entry, tag, canonical)
        return
    if canonical in context.other_tags:
        context.add_other(tag, canonical)
        return

    cardinal = cardinals.get(tag)
    ordinal = ordinals.get(tag) if ordinals else None
    try:
        compiled = build_locale_table(tag, cardinal, ordinal)
    except DataIntegrityError as e:
        if context.options.missing_other == MissingOtherPolicy.ABORT:
            raise
        logger.warning("Skipping locale %s: %s", tag, e)
        warnings.warn(f"Skipping locale {tag}: {e}", UserWarning)
        context.skipped.append(tag)
        return

    if not compiled.table.has_rules:
        context.add_other(tag, canonical)
        return

    existing = context.find_equivalent(compiled.table)
    if existing is not None:
        logger.debug("%s shares the rules of %s", tag, existing.name)
        context.add_alias(existing, tag, canonical)
        return

    context.register(compiled, canonical)


def compile_plural_rules(
    cardinals: PluralData,
    ordinals: Optional[PluralData] = None,
    options: Optional[CompilerOptions] = None,
) -> PluralInfo:
    """
    Compile CLDR plural rules into deduplicated rule tables.

    Args:
        cardinals: Locale tag → cardinal rule set
        ordinals: Locale tag → ordinal rule set (optional)
        options: CompilerOptions; defaults select every locale

    Returns:
        PluralInfo with the canonical tables and the "others" list

    Raises:
        ConfigurationError: If the locale selection is invalid or yields
            nothing to compile
        ParseError: If a relation is malformed
        DataIntegrityError: If "other" is missing and the policy is ABORT
    """
    options = options or CompilerOptions()
    if not cardinals:
        raise ConfigurationError("Not enough data to compile: no cardinal plural rules")

    context = CompilationContext(options=options)
    for tag in select_locales(cardinals, options):
        compile_locale(context, tag, cardinals, ordinals)

    info = context.finalize()
    if not info.cultures and not info.others:
        raise ConfigurationError(
            "Not enough data to compile: every selected locale was skipped or excluded"
        )

    logger.info(
        "Compiled %d rule tables, %d others, %d skipped",
        len(info.cultures),
        len(info.others),
        len(context.skipped),
    )
    return info


__all__ = [
    "CompilationContext",
    "compile_locale",
    "compile_plural_rules",
    "select_locales",
]
