"""
Key casing between internal tokens and CloudFormation wire keys.

Internal tokens are kebab-case (``site-bucket``, ``d-n-s-name``); CloudFormation
expects PascalCase (``SiteBucket``, ``DNSName``). Each kebab segment maps to
exactly one capitalised word, so a single-letter segment becomes a single
upper-case letter and the inverse can split before every capital. Over
tokens accepted by ``is_wire_safe`` the two functions are inverses.
"""

import re
from typing import Iterable, Set

WIRE_SAFE_TOKEN = re.compile(r'^[a-z][a-z0-9]*(?:-[a-z][a-z0-9]*)*$')

_WORD_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def is_wire_safe(token: str) -> bool:
    """True if ``token`` survives to_wire/from_wire unchanged."""
    return bool(WIRE_SAFE_TOKEN.match(token))


def to_wire(token: str) -> str:
    """``site-cdn-url`` -> ``SiteCdnUrl``"""
    return "".join(part[:1].upper() + part[1:] for part in token.split("-"))


def from_wire(key: str) -> str:
    """``SiteCdnUrl`` -> ``site-cdn-url``"""
    return _WORD_BOUNDARY.sub("-", key).lower()


def to_wire_set(tokens: Iterable[str]) -> Set[str]:
    return {to_wire(t) for t in tokens}


def from_wire_set(keys: Iterable[str]) -> Set[str]:
    return {from_wire(k) for k in keys}
