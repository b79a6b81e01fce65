"""
Field Catalog - Specification fields and their matching rules

Each field of a part description (PRODUCT TYPE, SIZE, MATERIAL, ...) is tied
to an ordered list of rules. A rule is a regex that must match the whole
candidate string plus an extractor that turns the match into the
standardized value for the field.

The catalog is a fixed table. Field order is the column order of every
result, and rule order is the order matches are reported in.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

# Reserved field kind for tokens that matched nothing
UNRECOGNIZED = "UNRECOGNIZED"

Extractor = Callable[["re.Match[str]"], Optional[str]]


# =============================================================================
# Extractors
# Closed set of ways a rule turns a regex match into a standardized value
# =============================================================================

def constant(value: str) -> Extractor:
    """Always produce the same canonical value (e.g. FLG -> FLANGE)."""
    return lambda m: value


def group(index: int) -> Extractor:
    """Produce a captured group (e.g. the number in 20")."""
    return lambda m: m.group(index)


def whole_match(m: "re.Match[str]") -> Optional[str]:
    """Produce the full matched text."""
    return m.group(0)


_NUMBER = re.compile(r"\d+", re.ASCII)


def first_number(m: "re.Match[str]") -> Optional[str]:
    """Produce the first run of digits in the matched text."""
    number = _NUMBER.search(m.group(0))
    return number.group(0) if number else None


# =============================================================================
# Rule and field records
# =============================================================================

@dataclass(frozen=True)
class MatchRule:
    """A single pattern-and-extract rule belonging to a field."""
    kind: str                   # Readable rule name, e.g. "SCHEDULE STANDARD"
    pattern: "re.Pattern[str]"  # Anchored via fullmatch, never search
    extract: Extractor

    def match(self, s: str) -> Optional[str]:
        """
        Return the standardized value for `s`, or None if it does not match.

        The whole string must conform to the pattern; text that merely
        contains a match (e.g. "XFLANGE") is not a hit.
        """
        if not isinstance(s, str):
            return None
        m = self.pattern.fullmatch(s)
        if not m:
            return None
        value = self.extract(m)
        return value or None


@dataclass(frozen=True)
class FieldSpec:
    """A named field of the part specification and the rules that fill it."""
    kind: str
    matchers: Tuple[MatchRule, ...]


def rule(kind: str, pattern: str, extract: Extractor) -> MatchRule:
    """Build a MatchRule from a pattern string."""
    return MatchRule(kind=kind, pattern=re.compile(pattern, re.ASCII), extract=extract)


# =============================================================================
# The catalog
# =============================================================================

SPECIFICATION: Tuple[FieldSpec, ...] = (
    FieldSpec("PRODUCT TYPE", (
        rule("FLANGE", r"FLANGE|FLNG|FLG", constant("FLANGE")),
        rule("PIPE", r"PIPE", constant("PIPE")),
    )),
    FieldSpec("SIZE", (
        # 3", 20", 1.5"
        rule("INCHES", r'(\d+(?:\.\d)?)"', group(1)),
    )),
    FieldSpec("FLANGE TYPE", (
        # WELD NECK, WLD NCK FLNG, WELDNECK FLANGE, WNWELD, WNFWELD
        rule("WELD NECK", r"WE?LD ?NE?CK(?: FLA?NGE?)?|WNF?WELD", constant("WELD NECK")),
    )),
    FieldSpec("PRESSURE RATING", (
        # 150#, 300 LB, 600 PSI, 150 CL, 150CL, CL 150
        rule("POUNDS", r"\d{3}#|\d{3} (?:LB|PSI)|\d{3} ?CL|CL \d{3}", first_number),
    )),
    FieldSpec("BORE SCHEDULE SIZE", (
        rule("SCHEDULE INCHES", r"S(?:CH(?:EDULE)?)?[\- ](\d+)", group(1)),
        rule("SCHEDULE STANDARD", r"S(?:CH(?:EDULE)?)? (?:STD|STANDARD)|STANDARD",
             constant("STANDARD")),
        rule("SCHEDULE EXTRA HEAVY", r"XHB?|EXTRA HEAVY", constant("EXTRA HEAVY")),
    )),
    FieldSpec("MATERIAL", (
        rule("ASME STANDARD", r"ASME B\d+\.?\d+", whole_match),
        # FCS prefix (forged carbon steel) is dropped from the value
        rule("STEEL TYPE", r"(?:FCS )?(S?A\d{3}N?)", group(1)),
        rule("CARBON STEEL", r"CS|CARBON(?: STEEL)?", constant("CARBON STEEL")),
    )),
)


# =============================================================================
# Lookup helpers
# =============================================================================

def field_kinds(catalog: Iterable[FieldSpec] = SPECIFICATION) -> List[str]:
    """Field kinds in catalog order, followed by UNRECOGNIZED."""
    return [spec_field.kind for spec_field in catalog] + [UNRECOGNIZED]


def get_field(kind: str, catalog: Iterable[FieldSpec] = SPECIFICATION) -> Optional[FieldSpec]:
    """Find a field by kind, or None."""
    for spec_field in catalog:
        if spec_field.kind == kind:
            return spec_field
    return None


def validate_catalog(catalog: Iterable[FieldSpec]) -> Tuple[FieldSpec, ...]:
    """
    Check an injected catalog and return it as a tuple.

    Raises:
        ValueError: duplicate field kinds, duplicate rule kinds within a
            field, or a field using the reserved UNRECOGNIZED kind
    """
    fields = tuple(catalog)
    seen = set()
    for spec_field in fields:
        if spec_field.kind == UNRECOGNIZED:
            raise ValueError(f"Field kind {UNRECOGNIZED!r} is reserved")
        if spec_field.kind in seen:
            raise ValueError(f"Duplicate field kind: {spec_field.kind!r}")
        seen.add(spec_field.kind)

        rule_kinds = [matcher.kind for matcher in spec_field.matchers]
        duplicates = {k for k in rule_kinds if rule_kinds.count(k) > 1}
        if duplicates:
            raise ValueError(
                f"Duplicate rule kinds in field {spec_field.kind!r}: {sorted(duplicates)}"
            )
    return fields
