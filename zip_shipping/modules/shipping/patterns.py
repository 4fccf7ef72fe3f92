"""
Postcode Allow-List Patterns

Parses the free-text "allowed postcodes" setting into an ordered,
immutable PatternSet:
- One code per line, or comma-separated
- Formatting spaces inside a code are ignored ("110 00" == "11000")
- A code containing "*" is a prefix wildcard ("35*" allows 350.., 351..)
- A lone "*" allows every destination

Parsing never fails. Anything that is not a wildcard is kept as a literal
code; postcode syntax is not validated here.
"""
import enum
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator, Optional, Tuple

from zip_shipping.core.config import settings

logger = logging.getLogger(__name__)

WILDCARD = "*"

# Codes are separated by line breaks and commas. Spaces and tabs inside a
# line are formatting and get stripped from the code.
_TOKEN_SEPARATOR = re.compile(r"\s*[\r\n,]+\s*")
_WHITESPACE = re.compile(r"\s+")


def strip_whitespace(value: Optional[Any]) -> str:
    """Trim and drop every whitespace character, None -> "", 11000 -> "11000"."""
    if value is None:
        return ""
    return _WHITESPACE.sub("", str(value).strip())


class PatternKind(str, enum.Enum):
    """How an allow-pattern is compared to a destination."""
    EXACT = "exact"
    PREFIX_WILDCARD = "prefix_wildcard"


@dataclass(frozen=True)
class AllowPattern:
    """A single configured allow rule."""
    raw: str
    kind: PatternKind
    normalized_value: str

    @classmethod
    def from_token(cls, token: str) -> "AllowPattern":
        """Build a pattern from one non-empty configured token."""
        cleaned = strip_whitespace(token)
        if WILDCARD in cleaned:
            return cls(
                raw=token,
                kind=PatternKind.PREFIX_WILDCARD,
                normalized_value=cleaned.replace(WILDCARD, ""),
            )
        if _WHITESPACE.search(token.strip()):
            logger.debug(f"Allow-list line {token!r} read as the single code {cleaned!r}")
        return cls(raw=token, kind=PatternKind.EXACT, normalized_value=cleaned)

    def matches(self, destination: str) -> bool:
        """
        Test an already-normalized destination postcode.

        An empty wildcard prefix matches everything, including "".
        """
        if self.kind == PatternKind.PREFIX_WILDCARD:
            return destination.startswith(self.normalized_value)
        return destination == self.normalized_value


@dataclass(frozen=True)
class PatternSet:
    """
    Ordered allow-list.

    Order is configuration order and only decides which pattern is
    credited with a match, never whether a destination matches.
    An empty set matches nothing.
    """
    patterns: Tuple[AllowPattern, ...] = ()

    @classmethod
    def parse(cls, raw_text: Optional[str]) -> "PatternSet":
        """
        Parse raw settings text.

        Results are cached per raw string; the cached sets are immutable
        and shared between callers.
        """
        return _parse_cached(raw_text or "")

    @classmethod
    def _parse(cls, raw_text: str) -> "PatternSet":
        tokens = [token.strip() for token in _TOKEN_SEPARATOR.split(raw_text)]
        patterns = tuple(
            AllowPattern.from_token(token)
            for token in tokens
            if strip_whitespace(token)
        )
        logger.debug(f"Parsed {len(patterns)} postcode allow-patterns")
        return cls(patterns=patterns)

    def match(self, destination: str) -> Optional[AllowPattern]:
        """Return the first pattern matching a normalized destination, or None."""
        for pattern in self.patterns:
            if pattern.matches(destination):
                return pattern
        return None

    def __iter__(self) -> Iterator[AllowPattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


_parse_cached = lru_cache(maxsize=settings.PATTERN_CACHE_SIZE)(PatternSet._parse)


def clear_pattern_cache() -> None:
    """Drop all cached PatternSets (e.g. after settings are saved)."""
    _parse_cached.cache_clear()
