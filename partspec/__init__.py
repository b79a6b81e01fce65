# Part specification field extraction
from .field_catalog import (
    FieldSpec,
    MatchRule,
    SPECIFICATION,
    UNRECOGNIZED,
    field_kinds,
    get_field,
    validate_catalog,
)
from .token_matcher import TokenMatch, TokenMatchResult, parse_token, has_match
from .tokenizer import split_candidates, merge_candidates, split_unrecognized
from .field_aggregator import FieldEntry, PopulatedField, summarize_fields
from .line_parser import (
    LineParser,
    ParsedLine,
    tokenize_line,
    parse_line,
    populate_spec_fields,
)

__all__ = [
    "FieldSpec",
    "MatchRule",
    "SPECIFICATION",
    "UNRECOGNIZED",
    "field_kinds",
    "get_field",
    "validate_catalog",
    "TokenMatch",
    "TokenMatchResult",
    "parse_token",
    "has_match",
    "split_candidates",
    "merge_candidates",
    "split_unrecognized",
    "FieldEntry",
    "PopulatedField",
    "summarize_fields",
    "LineParser",
    "ParsedLine",
    "tokenize_line",
    "parse_line",
    "populate_spec_fields",
]
