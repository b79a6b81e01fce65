"""
Field Aggregator - Groups a line's token matches by specification field

Produces one populated field per catalog field (in catalog order), plus a
final UNRECOGNIZED field holding every token that matched nothing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .field_catalog import FieldSpec, SPECIFICATION, UNRECOGNIZED
from .token_matcher import TokenMatchResult


@dataclass(frozen=True)
class FieldEntry:
    """A token that filled a field, and the value it produced."""
    kind: str    # Rule kind, or UNRECOGNIZED
    token: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "token": self.token, "value": self.value}


@dataclass
class PopulatedField:
    """Specification field populated with matched tokens and parsed values."""
    kind: str
    matches: List[FieldEntry] = field(default_factory=list)

    @property
    def values(self) -> List[str]:
        return [entry.value for entry in self.matches]

    def display(self, separator: str = " | ") -> str:
        """Values joined for a table cell."""
        return separator.join(self.values)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "matches": [m.to_dict() for m in self.matches]}


def populate_spec_fields(
    match_results: List[TokenMatchResult],
    catalog: Iterable[FieldSpec] = SPECIFICATION
) -> List[PopulatedField]:
    """
    Build the field-grouped view of a parsed line.

    Entries within a field keep the left-to-right order of their tokens.
    A token matching two rules of the same field appears twice in that
    field; a token matching two fields appears once in each.
    """
    result: List[PopulatedField] = []
    for spec_field in catalog:
        new_field = PopulatedField(kind=spec_field.kind)
        for token_result in match_results:
            for match in token_result.matches:
                if match.spec_field_kind == spec_field.kind:
                    new_field.matches.append(FieldEntry(
                        kind=match.field_match_kind,
                        token=token_result.token,
                        value=match.standardized_value,
                    ))
        result.append(new_field)

    # Extra field for unmatched tokens
    result.append(PopulatedField(
        kind=UNRECOGNIZED,
        matches=[
            FieldEntry(kind=UNRECOGNIZED, token=mr.token, value=mr.token)
            for mr in match_results if not mr.matched
        ],
    ))
    return result


def summarize_fields(fields: List[PopulatedField]) -> Dict[str, List[str]]:
    """Map of field kind -> values, in field order."""
    return {f.kind: f.values for f in fields}
