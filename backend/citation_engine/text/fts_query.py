"""FTS5 query builder.

Protects the FTS5 query parser from malformed input (unbalanced quotes,
stray operators, punctuation) while letting users who deliberately write
FTS5 syntax keep it.
"""

import re
from dataclasses import dataclass

# Straight and typographic double quotes, boolean keywords, trailing wildcard
EXPLICIT_FTS_SYNTAX = re.compile(r"[\"“”„]|\bAND\b|\bOR\b|\bNOT\b|\*$")

# Characters with special meaning in FTS5 query syntax
FTS5_SPECIAL_CHARS = re.compile(r"[\"“”„(){}^:+\-~*]")

# Anything that is not a letter, digit, underscore or hyphen (Unicode-aware)
NON_TOKEN_CHARS = re.compile(r"[^\w-]")

# A letter or digit; tokens without one (e.g. "--") carry no searchable text
ALPHANUMERIC = re.compile(r"[^\W_]")


@dataclass(frozen=True)
class FtsQueryVariants:
    """Query expressions to try in order.

    Attributes:
        primary: Expression to run first.
        fallback: Broader expression that always parses, used when the
            primary fails to parse or finds nothing.
    """

    primary: str
    fallback: str | None = None


def sanitize_token(token: str) -> str:
    """Strip everything except word characters and hyphens from a token."""
    return NON_TOKEN_CHARS.sub("", token)


def _tokens(text: str) -> list[str]:
    """Whitespace-split, sanitize and drop tokens with no searchable text."""
    tokens = [sanitize_token(t) for t in text.split()]
    return [t for t in tokens if ALPHANUMERIC.search(t)]


def _quoted_prefix(token: str) -> str:
    return f'"{token}"*'


def build_sanitized_fallback(query: str) -> str | None:
    """Build a safe OR-query from raw input by quoting its surviving tokens.

    Returns:
        The fallback expression, or None if no token survives.
    """
    tokens = _tokens(FTS5_SPECIAL_CHARS.sub(" ", query))
    if not tokens:
        return None
    return " OR ".join(_quoted_prefix(t) for t in tokens)


def build_fts_query_variants(query: str) -> FtsQueryVariants:
    """Convert a raw search string into primary and fallback FTS5 expressions.

    Input already using FTS5 syntax is passed through unchanged as the
    primary, with a sanitized fallback in case it does not parse. Plain
    input becomes an implicit-AND prefix query with an OR fallback.
    """
    trimmed = query.strip()

    if EXPLICIT_FTS_SYNTAX.search(trimmed):
        return FtsQueryVariants(primary=trimmed, fallback=build_sanitized_fallback(trimmed))

    tokens = _tokens(trimmed)
    if not tokens:
        return FtsQueryVariants(primary=trimmed)

    return FtsQueryVariants(
        primary=" ".join(_quoted_prefix(t) for t in tokens),
        fallback=" OR ".join(_quoted_prefix(t) for t in tokens),
    )
