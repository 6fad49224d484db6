"""
Recursive Multiset Container

A RecursiveMultiset maps Elements (atoms or nested multisets) to a
positive occurrence count.

INVARIANTS:
    - Every stored count is >= 1
    - A key whose count reaches 0 is removed
    - size() is the sum of all counts
    - len(get_elements()) is the number of distinct keys

Set algebra is defined per distinct key:
    - Union (+):        max(count_a, count_b)
    - Intersection (*): min(count_a, count_b), keys missing from
                        either side are dropped
    - Difference (-):   count_a - count_b when positive, otherwise
                        dropped; keys found ONLY on the right-hand side
                        are kept with their right-hand count

The difference rule is deliberately asymmetric: {x} - {y} == {x, y}
while A - A is always empty. Existing data relies on it, so keep it.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from rmultiset.elements import Atom, Element, Nested


ElementLike = Union[str, "RecursiveMultiset", Element]


class ElementNotFoundError(LookupError):
    """Raised when removing an element that has no remaining occurrences."""
    pass


def as_element(value: ElementLike) -> Element:
    """
    Coerce a client value into an Element.

    Converts:
        str               -> Atom
        RecursiveMultiset -> Nested (shared, not copied)
        Element           -> unchanged

    Raises:
        TypeError: For any other value
    """
    if isinstance(value, Element):
        return value
    if isinstance(value, str):
        return Atom(value)
    if isinstance(value, RecursiveMultiset):
        return Nested(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a multiset element")


def _union_counts(left: Mapping[Element, int], right: Mapping[Element, int]) -> Dict[Element, int]:
    result = dict(left)
    for element, count in right.items():
        result[element] = max(result.get(element, 0), count)
    return result


def _intersection_counts(left: Mapping[Element, int], right: Mapping[Element, int]) -> Dict[Element, int]:
    return {
        element: min(count, right[element])
        for element, count in left.items()
        if element in right
    }


def _difference_counts(left: Mapping[Element, int], right: Mapping[Element, int]) -> Dict[Element, int]:
    result: Dict[Element, int] = {}
    for element, count in left.items():
        remaining = count - right.get(element, 0)
        if remaining > 0:
            result[element] = remaining
    # Right-only keys survive with their right-hand count.
    for element, count in right.items():
        if element not in left:
            result[element] = count
    return result


class RecursiveMultiset:
    """
    A multiset whose elements are strings or other multisets.

    Example:
        >>> fruit = RecursiveMultiset(["apple", "apple", "banana"])
        >>> fruit.size()
        3
        >>> basket = RecursiveMultiset([fruit, "bread"])
        >>> basket.is_contains(RecursiveMultiset(["banana", "apple", "apple"]))
        True

    Values passed to any method are coerced with as_element(), so plain
    strings and multisets can be used directly.

    Iteration yields every occurrence (a key with count 3 is yielded
    three times) in insertion order of the distinct keys.
    """

    def __init__(self, iterable: Optional[Iterable[ElementLike]] = None) -> None:
        self._elements: Dict[Element, int] = {}
        if iterable is not None:
            for value in iterable:
                self.add_element(value)

    # Core operations

    def add_element(self, value: ElementLike) -> None:
        """Add one occurrence of an element."""
        element = as_element(value)
        self._elements[element] = self._elements.get(element, 0) + 1

    def remove_element(self, value: ElementLike) -> None:
        """
        Remove one occurrence of an element.

        The key is deleted once its count reaches zero.

        Raises:
            ElementNotFoundError: If the element has no occurrences
        """
        element = as_element(value)
        count = self._elements.get(element, 0)
        if count == 0:
            raise ElementNotFoundError(f"Element does not exist in the multiset: {element!r}")
        if count == 1:
            del self._elements[element]
        else:
            self._elements[element] = count - 1

    def is_contains(self, value: ElementLike) -> bool:
        return as_element(value) in self._elements

    def is_empty(self) -> bool:
        return not self._elements

    def size(self) -> int:
        """Total number of occurrences, counting duplicates."""
        return sum(self._elements.values())

    def count(self, value: ElementLike) -> int:
        """Occurrences of an element (0 if absent)."""
        return self._elements.get(as_element(value), 0)

    def build_boolean(self) -> RecursiveMultiset:
        """
        Build a set-of-presence view of this multiset.

        Returns:
            A new multiset with the same keys, each with count 1.
            This multiset is not modified.
        """
        return self._from_counts({element: 1 for element in self._elements})

    def get_elements(self) -> Dict[Element, int]:
        """Return a copy of the element -> count mapping."""
        return dict(self._elements)

    def set_elements(self, elements: Mapping[Union[str, Element], int]) -> None:
        """
        Replace the content of this multiset.

        Keys are coerced with as_element(); keys that coerce to equal
        elements have their counts summed. Multisets are unhashable, so
        nested keys must be wrapped in Nested.

        Raises:
            ValueError: If a count is not a positive integer
        """
        result: Dict[Element, int] = {}
        for value, count in elements.items():
            if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                raise ValueError(f"Count for {value!r} must be a positive integer, got {count!r}")
            element = as_element(value)
            result[element] = result.get(element, 0) + count
        self._elements = result

    def items(self) -> Iterator[Tuple[Element, int]]:
        return iter(list(self._elements.items()))

    def copy(self) -> RecursiveMultiset:
        """Shallow copy; nested multisets are shared."""
        return self._from_counts(self._elements)

    @classmethod
    def _from_counts(cls, counts: Mapping[Element, int]) -> RecursiveMultiset:
        result = cls()
        result._elements = dict(counts)
        return result

    # Set algebra

    def union(self, other: RecursiveMultiset) -> RecursiveMultiset:
        return self._from_counts(_union_counts(self._elements, other._elements))

    def intersection(self, other: RecursiveMultiset) -> RecursiveMultiset:
        return self._from_counts(_intersection_counts(self._elements, other._elements))

    def difference(self, other: RecursiveMultiset) -> RecursiveMultiset:
        return self._from_counts(_difference_counts(self._elements, other._elements))

    def __add__(self, other: object) -> RecursiveMultiset:
        if not isinstance(other, RecursiveMultiset):
            return NotImplemented
        return self.union(other)

    def __mul__(self, other: object) -> RecursiveMultiset:
        if not isinstance(other, RecursiveMultiset):
            return NotImplemented
        return self.intersection(other)

    def __sub__(self, other: object) -> RecursiveMultiset:
        if not isinstance(other, RecursiveMultiset):
            return NotImplemented
        return self.difference(other)

    def __iadd__(self, other: object) -> RecursiveMultiset:
        if not isinstance(other, RecursiveMultiset):
            return NotImplemented
        self._elements = _union_counts(self._elements, other._elements)
        return self

    def __imul__(self, other: object) -> RecursiveMultiset:
        if not isinstance(other, RecursiveMultiset):
            return NotImplemented
        self._elements = _intersection_counts(self._elements, other._elements)
        return self

    def __isub__(self, other: object) -> RecursiveMultiset:
        if not isinstance(other, RecursiveMultiset):
            return NotImplemented
        self._elements = _difference_counts(self._elements, other._elements)
        return self

    # Python protocol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecursiveMultiset):
            return NotImplemented
        return self._elements == other._elements

    # Mutable container; wrap in Nested to use as a key.
    __hash__ = None  # type: ignore[assignment]

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (str, Element, RecursiveMultiset)):
            return False
        return self.is_contains(value)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Element]:
        for element, count in self.items():
            for _ in range(count):
                yield element

    def __str__(self) -> str:
        from rmultiset.text_format import format_multiset
        return format_multiset(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"
