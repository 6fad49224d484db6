"""
Example multiset builders for demos and tests.

Builds a small pantry inventory with repeated atoms, a shared nested
bag and a two-level nested bag, plus a shopping list to combine with it.
"""
from rmultiset.multiset import RecursiveMultiset


def build_example_pantry() -> RecursiveMultiset:
    """
    {flour, flour, sugar, {apple, apple, banana}, {apple, apple, banana},
     {{pepper, salt}, oregano}}
    """
    pantry = RecursiveMultiset(["flour", "flour", "sugar"])

    # The same fruit bowl object is inserted twice (shared, count 2)
    fruit_bowl = RecursiveMultiset(["apple", "apple", "banana"])
    pantry.add_element(fruit_bowl)
    pantry.add_element(fruit_bowl)

    grinders = RecursiveMultiset(["pepper", "salt"])
    spice_rack = RecursiveMultiset([grinders, "oregano"])
    pantry.add_element(spice_rack)

    return pantry


def build_example_shopping_list() -> RecursiveMultiset:
    """{flour, eggs, eggs, {banana, apple, apple}}"""
    shopping = RecursiveMultiset(["flour", "eggs", "eggs"])
    # Same content as the pantry's fruit bowl, built in a different order
    shopping.add_element(RecursiveMultiset(["banana", "apple", "apple"]))
    return shopping
