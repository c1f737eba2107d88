"""
Runtime helper imported by generated Python records.

Only the "make a named value" entry point lives here. Encoding, I/O
and versioning belong to whatever archive the caller passes in.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NameValuePair:
    """A serialization key paired with the value stored under it."""

    name: str
    value: Any


def make_nvp(name: str, value: Any) -> NameValuePair:
    return NameValuePair(name=name, value=value)


__all__ = ["NameValuePair", "make_nvp"]
