"""Tokenization of raw recipe text."""

import dataclasses
import re
from typing import List

# Letter runs (with accented letters and hyphens), digit/decimal runs, or any
# single other character. Newlines are not matched by "." and are recovered
# by the gap pass in tokenize().
TOKEN_PATTERN = re.compile(r"[a-zà-ÿ\-]+|[0-9._]+|.", re.IGNORECASE)


@dataclasses.dataclass(frozen=True)
class Token:
    """A slice of the original text.

    ``start`` and ``end`` are code point offsets into the string the token
    was produced from, so ``text == source[start:end]`` always holds.
    """

    text: str
    start: int
    end: int

    @property
    def is_space(self) -> bool:
        return self.text.isspace()

    @property
    def lower(self) -> str:
        return self.text.lower()


def tokenize(text: str, remove_spaces: bool = True) -> List[Token]:
    """Split text into word, number and single-character tokens.

    Args:
        text: Raw ingredient line or instruction step.
        remove_spaces: Drop whitespace tokens. Keep them when the caller
            needs to re-assemble the original spacing.

    Returns:
        Tokens in document order. Empty input gives an empty list.

    Examples:
        >>> [t.text for t in tokenize("1/2 cup flour")]
        ['1', '/', '2', 'cup', 'flour']
    """
    if not text:
        return []

    tokens: List[Token] = []
    last_end = 0
    for match in TOKEN_PATTERN.finditer(text):
        if last_end < match.start():
            tokens.append(Token(text[last_end : match.start()], last_end, match.start()))
        tokens.append(Token(match.group(0), match.start(), match.end()))
        last_end = match.end()

    if last_end < len(text):
        tokens.append(Token(text[last_end:], last_end, len(text)))

    if remove_spaces:
        return [token for token in tokens if not token.is_space]
    return tokens
