"""Small helpers over sequences."""

from collections.abc import Hashable, Iterable


def all_unique(values: Iterable[Hashable]) -> bool:
    """
    Check that no value occurs more than once.

    Values are compared exactly, so "foo" and "foo " are distinct.
    An empty sequence is unique.
    """
    seen: set[Hashable] = set()
    for value in values:
        if value in seen:
            return False
        seen.add(value)
    return True


def duplicates(values: Iterable[Hashable]) -> list[Hashable]:
    """Return each repeated value once, in order of its first repetition."""
    seen: set[Hashable] = set()
    repeated: list[Hashable] = []
    for value in values:
        if value in seen and value not in repeated:
            repeated.append(value)
        seen.add(value)
    return repeated
