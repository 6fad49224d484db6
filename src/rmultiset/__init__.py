"""
Recursive Multiset Package

A bag container whose elements are either atomic strings or other
bags, with count-aware set algebra and a brace text format:

    {apple, apple, banana, {salt, pepper}}

ARCHITECTURAL GUARANTEE:
------------------------
Element identity is STRUCTURAL everywhere:
    - Nested multisets compare by content, never by object identity
    - Hashing is derived from the same definition as equality

The container is synchronous and keeps no global state.
"""

from rmultiset.elements import Atom, Element, Nested, element_equal, element_hash, multiset_hash
from rmultiset.multiset import ElementNotFoundError, RecursiveMultiset, as_element
from rmultiset.text_format import (
    MultisetParseError,
    format_multiset,
    parse_multiset,
    read_multiset,
    write_multiset,
)

__version__ = "0.1.0"

__all__ = [
    "Atom",
    "Element",
    "ElementNotFoundError",
    "MultisetParseError",
    "Nested",
    "RecursiveMultiset",
    "as_element",
    "element_equal",
    "element_hash",
    "format_multiset",
    "multiset_hash",
    "parse_multiset",
    "read_multiset",
    "write_multiset",
]
