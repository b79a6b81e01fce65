"""
Line Tokenizer - Splits a part description line into tokens

First, break up the line by commas. It's not that simple though: sometimes
a single value contains a comma (e.g. a compound material code), so a
candidate is merged with its next one or two neighbors whenever the merged
text matches a rule somewhere in the catalog.

Merging is greedy, left to right, with the 3-candidate window tried before the
2-candidate window. The first window that matches wins and there is no
backtracking.
"""

import logging
import re
from typing import Iterable, List

from .field_catalog import FieldSpec, SPECIFICATION
from .token_matcher import parse_token

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = r", ?"

# Character the original 2-window merge appended to its candidate text
LEGACY_PAIR_SUFFIX = "}"


def split_candidates(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """
    Split a line on the delimiter regex. Empty pieces are kept.

    Text captured by groups in the delimiter is dropped; only the pieces
    between delimiters are candidates.
    """
    pattern = re.compile(delimiter)
    pieces = pattern.split(line)
    # re.split interleaves captured groups between the pieces
    return pieces[::pattern.groups + 1]


def merge_candidates(
    candidates: List[str],
    catalog: Iterable[FieldSpec] = SPECIFICATION,
    legacy_pair_merge: bool = False
) -> List[str]:
    """
    Merge runs of 3 or 2 neighboring candidates that form a catalog match.

    Args:
        candidates: Ordered pieces of a line
        catalog: Field specifications used to test merged windows
        legacy_pair_merge: Test (and emit) 2-windows as "a b}", reproducing
            the original tool's output exactly. Such windows never match the
            built-in catalog, so pairs are effectively never merged.

    Returns:
        Ordered final tokens
    """
    catalog = tuple(catalog)
    result: List[str] = []
    i = 0
    while i < len(candidates):
        remaining = len(candidates) - i

        if remaining >= 3:
            s = f"{candidates[i]} {candidates[i + 1]} {candidates[i + 2]}"
            merged = parse_token(s, catalog)
            if merged.matched:
                logger.debug(f"Merged 3 candidates: {merged!r}")
                result.append(s)
                i += 3
                continue

        if remaining >= 2:
            s = f"{candidates[i]} {candidates[i + 1]}"
            if legacy_pair_merge:
                s += LEGACY_PAIR_SUFFIX
            merged = parse_token(s, catalog)
            if merged.matched:
                logger.debug(f"Merged 2 candidates: {merged!r}")
                result.append(s)
                i += 2
                continue

        result.append(candidates[i])
        i += 1

    return result


def tokenize_line(
    line: str,
    catalog: Iterable[FieldSpec] = SPECIFICATION,
    delimiter: str = DEFAULT_DELIMITER,
    legacy_pair_merge: bool = False
) -> List[str]:
    """
    Tokenize a raw line into final tokens.

    Example:
        >>> tokenize_line('FLG, CL 150, SCH STD, 20"')
        ['FLG', 'CL 150', 'SCH STD', '20"']
    """
    return merge_candidates(
        split_candidates(line, delimiter), catalog, legacy_pair_merge
    )


def split_unrecognized(
    tokens: List[str],
    catalog: Iterable[FieldSpec] = SPECIFICATION,
    legacy_pair_merge: bool = False
) -> List[str]:
    """
    Second pass: break unrecognized tokens apart on spaces.

    A token such as "FCS A105 ASME B16.5" holds two values with no comma
    between them. Its words are re-merged with the same window rules, so it
    becomes "FCS A105" and "ASME B16.5". Tokens that already match a rule,
    and single-word tokens, pass through unchanged.

    Words are separated by single spaces only. Runs of spaces count as one
    separator; tabs and other whitespace stay inside their word.
    """
    catalog = tuple(catalog)
    result: List[str] = []
    for token in tokens:
        words = [word for word in token.split(" ") if word]
        if len(words) < 2 or parse_token(token, catalog).matched:
            result.append(token)
            continue

        pieces = merge_candidates(words, catalog, legacy_pair_merge)
        logger.debug(f"Split {token!r} into {pieces}")
        result.extend(pieces)
    return result
