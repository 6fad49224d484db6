"""
Element Types for Recursive Multisets

Every key stored in a RecursiveMultiset is an Element, a tagged union of:
    - Atom:   an atomic string
    - Nested: a reference to another RecursiveMultiset

Equality and hashing are STRUCTURAL:
    - Two Atoms are equal iff their text is equal
    - Two Nested elements are equal iff the multisets they reference
      have the same content (not the same identity)
    - An Atom never equals a Nested, so {1} != {{1}}

ARCHITECTURAL RULE:
    element_equal() and element_hash() are the only definitions of
    element identity. Element.__eq__ and Element.__hash__ delegate to
    them, which keeps "equal implies equal hash" true for dict lookups.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from rmultiset.multiset import RecursiveMultiset


class Element(ABC):
    """
    Base class for multiset keys.

    Structure only. Subclasses hold data; identity is defined by the
    module-level element_equal()/element_hash() pair.
    """

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return element_equal(self, other)

    def __hash__(self) -> int:
        return element_hash(self)


@dataclass(frozen=True, eq=False)
class Atom(Element):
    """
    An atomic string element.

    Examples:
        - "apple"
        - "1"
        - ""  (an empty atom is legal)

    Properties:
        text: The atom's string value
    """

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"Atom text must be str, got {type(self.text).__name__}")


@dataclass(frozen=True, eq=False)
class Nested(Element):
    """
    A nested multiset element.

    The referenced multiset is SHARED, not copied: every parent that
    holds this element points at the same RecursiveMultiset object.

    IMPORTANT:
        Once a multiset is used as a key in another multiset it must be
        treated as a value. Mutating it changes its hash, exactly like
        mutating any other dict key.
        The hash is computed once per Nested object and then cached, so
        hashing a deep structure never re-walks levels already hashed.

    Properties:
        multiset: The referenced RecursiveMultiset
    """

    multiset: "RecursiveMultiset"
    _hash: Optional[int] = field(default=None, init=False, repr=False)


def element_equal(left: Element, right: Element) -> bool:
    """
    Structural equality over the Element union.

    Args:
        left: First element
        right: Second element

    Returns:
        True if both are Atoms with equal text, or both are Nested with
        recursively equal multisets. False for mixed variants.
    """
    if isinstance(left, Atom) and isinstance(right, Atom):
        return left.text == right.text
    if isinstance(left, Nested) and isinstance(right, Nested):
        if left.multiset is right.multiset:
            return True
        return left.multiset == right.multiset
    return False


def element_hash(element: Element) -> int:
    """Hash an element consistently with element_equal()."""
    if isinstance(element, Atom):
        return hash(element.text)
    if isinstance(element, Nested):
        if element._hash is None:
            object.__setattr__(element, "_hash", multiset_hash(element.multiset))
        return element._hash
    raise TypeError(f"Unsupported Element type: {type(element)}")


def multiset_hash(multiset: "RecursiveMultiset") -> int:
    """
    Order-independent hash of a multiset's content.

    XOR-folds the hash of every (element hash, count) pair, so two
    multisets with the same counts hash equally regardless of the order
    their elements were inserted in.
    """
    value = 0
    for element, count in multiset.items():
        value ^= hash((element_hash(element), count))
    return value
