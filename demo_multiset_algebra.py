#!/usr/bin/env python3
"""
Demo: Parse, combine and serialize recursive multisets.

Shows the text format, the three algebra operators and YAML output.
"""

from rmultiset import parse_multiset, format_multiset
from rmultiset.examples import build_example_pantry, build_example_shopping_list
from rmultiset.serialization import multiset_to_yaml


def main():
    pantry = build_example_pantry()
    shopping = build_example_shopping_list()

    print("=" * 70)
    print("RECURSIVE MULTISET DEMO")
    print("=" * 70)
    print(f"  Pantry:        {format_multiset(pantry)}")
    print(f"  Shopping list: {format_multiset(shopping)}")
    print(f"  Pantry size:   {pantry.size()} ({len(pantry.get_elements())} distinct)")
    print()

    print("ALGEBRA")
    print("-" * 70)
    print(f"  pantry + shopping = {pantry + shopping}")
    print(f"  pantry * shopping = {pantry * shopping}")
    print(f"  pantry - shopping = {pantry - shopping}")
    print(f"  boolean(pantry)   = {pantry.build_boolean()}")
    print()

    print("PARSING")
    print("-" * 70)
    text = "{apple, banana, apple, {a, b}}"
    parsed = parse_multiset(text)
    print(f"  {text!r} -> size {parsed.size()}, apple x{parsed.count('apple')}")
    print()

    print("YAML")
    print("-" * 70)
    print(multiset_to_yaml(shopping))


if __name__ == "__main__":
    main()
