"""
Line Parser - Public entry points for parsing part description lines

    line -> tokenize_line -> parse_token (per token) -> populate_spec_fields

The module-level functions use the built-in catalog. LineParser bundles a
catalog with tokenizer options, for callers that inject their own rules or
turn on the unrecognized-token split pass.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .field_aggregator import PopulatedField, populate_spec_fields as _populate
from .field_catalog import FieldSpec, SPECIFICATION, validate_catalog
from .token_matcher import TokenMatchResult, parse_token
from .tokenizer import DEFAULT_DELIMITER, split_unrecognized, tokenize_line as _tokenize

logger = logging.getLogger(__name__)


@dataclass
class ParsedLine:
    """Everything derived from one input line."""
    line: str
    results: List[TokenMatchResult] = field(default_factory=list)
    fields: List[PopulatedField] = field(default_factory=list)

    @property
    def tokens(self) -> List[str]:
        return [r.token for r in self.results]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "tokens": [r.to_dict() for r in self.results],
            "fields": [f.to_dict() for f in self.fields],
        }


class LineParser:
    """
    Parser bound to one catalog and one set of tokenizer options.

    Instances hold no mutable state; one parser can be shared across
    any number of lines.
    """

    def __init__(
        self,
        catalog: Optional[Iterable[FieldSpec]] = None,
        delimiter: str = DEFAULT_DELIMITER,
        legacy_pair_merge: bool = False,
        split_unrecognized: bool = False
    ):
        if catalog is None:
            self.catalog = SPECIFICATION
        else:
            self.catalog = validate_catalog(catalog)
        self.delimiter = delimiter
        self.legacy_pair_merge = legacy_pair_merge
        self.split_unrecognized = split_unrecognized

    @classmethod
    def from_config(cls, config, catalog: Optional[Iterable[FieldSpec]] = None) -> 'LineParser':
        """Build a parser from a PartSpecConfig."""
        tokenizer = config.tokenizer
        return cls(
            catalog=catalog,
            delimiter=tokenizer.delimiter,
            legacy_pair_merge=tokenizer.legacy_pair_merge,
            split_unrecognized=tokenizer.split_unrecognized,
        )

    def tokenize(self, line: str) -> List[str]:
        """Final tokens for a line."""
        tokens = _tokenize(line, self.catalog, self.delimiter, self.legacy_pair_merge)
        if self.split_unrecognized:
            tokens = split_unrecognized(tokens, self.catalog, self.legacy_pair_merge)
        return tokens

    def parse(self, line: str) -> List[TokenMatchResult]:
        """Each final token with its matches."""
        return [parse_token(token, self.catalog) for token in self.tokenize(line)]

    def populate(self, match_results: List[TokenMatchResult]) -> List[PopulatedField]:
        """Field-grouped view of parsed tokens."""
        return _populate(match_results, self.catalog)

    def parse_line(self, line: str) -> ParsedLine:
        results = self.parse(line)
        return ParsedLine(line=line, results=results, fields=self.populate(results))

    def parse_lines(self, lines: Iterable[str]) -> List[ParsedLine]:
        """Parse independent lines in order."""
        parsed = [self.parse_line(line) for line in lines]
        logger.debug(f"Parsed {len(parsed)} lines")
        return parsed


# =============================================================================
# Module-level API (built-in catalog, default options)
# =============================================================================

def tokenize_line(line: str) -> List[str]:
    """Final tokens of a line, for display."""
    return _tokenize(line)


def parse_line(line: str) -> List[TokenMatchResult]:
    """Each final token of a line with its matches."""
    return [parse_token(token) for token in tokenize_line(line)]


def populate_spec_fields(match_results: List[TokenMatchResult]) -> List[PopulatedField]:
    """Catalog fields populated from a parsed line, plus UNRECOGNIZED."""
    return _populate(match_results)
