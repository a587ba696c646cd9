"""Coordinate multiset used to accumulate receptive field contributions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from convscope.geometry.types import Coordinate


class NodeMultiset:
    """Bag of coordinates with per-coordinate occurrence counts.

    Counts only ever grow during one resolver run; there is no removal or
    decrement apart from clear(). Every stored count is >= 1.
    """

    def __init__(self, coordinates: Iterable[Coordinate] = ()) -> None:
        self._counts: dict[Coordinate, int] = {}
        self.add_all(coordinates)

    def add(self, coordinate: Coordinate, times: int = 1) -> None:
        """Increment the count for a coordinate, creating it at `times` if absent.

        Args:
            coordinate: Node position (out-of-range positions are kept)
            times: Multiplicity to add (must be >= 1)
        """
        if times < 1:
            raise ValueError(f"times must be positive, got {times}")
        self._counts[coordinate] = self._counts.get(coordinate, 0) + times

    def add_all(self, coordinates: Iterable[Coordinate]) -> None:
        """Add each element once; duplicates accumulate."""
        for coordinate in coordinates:
            self.add(coordinate)

    def count(self, coordinate: Coordinate) -> int:
        return self._counts.get(coordinate, 0)

    def max_count(self) -> int:
        """Largest stored count, or 0 when empty."""
        return max(self._counts.values(), default=0)

    def all(self) -> list[tuple[Coordinate, int]]:
        """All (coordinate, count) pairs. Order carries no meaning."""
        return list(self._counts.items())

    def coordinates(self) -> list[Coordinate]:
        return list(self._counts)

    def clear(self) -> None:
        self._counts.clear()

    def total(self) -> int:
        """Sum of all counts."""
        return sum(self._counts.values())

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._counts

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeMultiset):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        items = ", ".join(
            f"({c.x}, {c.y}): {n}" for c, n in sorted(self._counts.items())
        )
        return f"NodeMultiset({{{items}}})"
