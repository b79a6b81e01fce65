"""
Token Matcher - Classifies a single token against the whole field catalog

Every rule of every field is tried. A token can match several rules and
several fields at once; all hits are kept, in catalog order.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .field_catalog import FieldSpec, SPECIFICATION


@dataclass(frozen=True)
class TokenMatch:
    """One rule hit for a token."""
    spec_field_kind: str     # e.g. "MATERIAL"
    field_match_kind: str    # e.g. "STEEL TYPE"
    standardized_value: str  # e.g. "A105"

    def to_dict(self) -> Dict[str, str]:
        return {
            "spec_field_kind": self.spec_field_kind,
            "field_match_kind": self.field_match_kind,
            "standardized_value": self.standardized_value,
        }


@dataclass
class TokenMatchResult:
    """A token and every rule it matched."""
    token: str
    matches: List[TokenMatch] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return len(self.matches) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "matches": [m.to_dict() for m in self.matches],
        }

    def __repr__(self):
        kinds = ", ".join(f"{m.spec_field_kind}={m.standardized_value}" for m in self.matches)
        return f"TokenMatchResult({self.token!r}, [{kinds}])"


def parse_token(token: str, catalog: Iterable[FieldSpec] = SPECIFICATION) -> TokenMatchResult:
    """
    Match a token against every rule in the catalog.

    Args:
        token: Candidate text, already split from its line
        catalog: Ordered field specifications

    Returns:
        TokenMatchResult whose matches follow field order, then rule order.
        An empty match list means the token is unrecognized.
    """
    result = TokenMatchResult(token=token)
    for spec_field in catalog:
        for field_matcher in spec_field.matchers:
            value = field_matcher.match(token)
            if value:
                result.matches.append(TokenMatch(
                    spec_field_kind=spec_field.kind,
                    field_match_kind=field_matcher.kind,
                    standardized_value=value,
                ))
    return result


def has_match(token: str, catalog: Iterable[FieldSpec] = SPECIFICATION) -> bool:
    """True if any rule in the catalog matches the token."""
    return parse_token(token, catalog).matched
