"""
Serialization helpers for recursive multisets.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from rmultiset.elements import Atom, Element, Nested
from rmultiset.multiset import RecursiveMultiset


def element_to_dict(element: Element) -> Dict[str, Any]:
    if isinstance(element, Atom):
        return {"type": "atom", "text": element.text}
    if isinstance(element, Nested):
        return multiset_to_dict(element.multiset)
    raise TypeError(f"Unsupported Element type: {type(element)}")


def element_from_dict(d: Dict[str, Any]) -> Element:
    t = d.get("type")
    if t == "atom":
        return Atom(d["text"])
    if t == "multiset":
        return Nested(multiset_from_dict(d))
    raise TypeError(f"Unsupported element dict type: {t}")


def multiset_to_dict(ms: RecursiveMultiset) -> Dict[str, Any]:
    return {
        "type": "multiset",
        "elements": [
            {"element": element_to_dict(element), "count": count}
            for element, count in ms.items()
        ],
    }


def multiset_from_dict(d: Dict[str, Any]) -> RecursiveMultiset:
    t = d.get("type")
    if t != "multiset":
        raise TypeError(f"Unsupported multiset dict type: {t}")
    counts: Dict[Element, int] = {}
    for entry in d.get("elements", []):
        element = element_from_dict(entry["element"])
        count = entry.get("count", 1)
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"Count must be a positive integer, got {count!r}")
        counts[element] = counts.get(element, 0) + count
    ms = RecursiveMultiset()
    ms.set_elements(counts)
    return ms


def multiset_to_json(ms: RecursiveMultiset) -> str:
    return json.dumps(multiset_to_dict(ms), sort_keys=True)


def multiset_from_json(s: str) -> RecursiveMultiset:
    d = json.loads(s)
    return multiset_from_dict(d)


def multiset_to_yaml(ms: RecursiveMultiset) -> str:
    return yaml.safe_dump(multiset_to_dict(ms))


def multiset_from_yaml(s: str) -> RecursiveMultiset:
    d = yaml.safe_load(s)
    return multiset_from_dict(d)
