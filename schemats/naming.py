"""Identifier casing helpers for generated type and property names."""

import re
import string
from typing import List

# Upper-case run not followed by a lower-case letter (HTTP in HTTPServer),
# a capitalised or lower-case word, a digit run, or any other letter run.
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+|[^\W\d_A-Za-z]+")

# Only ASCII letters change case so the transforms stay locale independent.
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def split_words(identifier: str) -> List[str]:
    """Split an identifier into its words.

    Underscores, dashes, dots and whitespace separate words, as do case
    changes and digit runs:

        split_words("role_enum")      -> ["role", "enum"]
        split_words("HTTPServer")     -> ["HTTP", "Server"]
        split_words("b2b_orders")     -> ["b", "2", "b", "orders"]
    """
    return _WORD_PATTERN.findall(identifier)


def _capitalize(word: str) -> str:
    return word[:1].translate(_TO_UPPER) + word[1:].translate(_TO_LOWER)


def to_pascal_case(identifier: str) -> str:
    """Convert an identifier to PascalCase (role_enum -> RoleEnum)."""
    return "".join(_capitalize(word) for word in split_words(identifier))


def to_camel_case(identifier: str) -> str:
    """Convert an identifier to camelCase (created_at -> createdAt)."""
    words = split_words(identifier)
    if not words:
        return ""
    return words[0].translate(_TO_LOWER) + "".join(_capitalize(word) for word in words[1:])
