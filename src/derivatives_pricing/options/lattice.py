"""Recombining triangular lattice storage and the stock-price lattice builder.

A lattice with `n` periods holds one value per `(step, node)` pair with
`0 <= node <= step <= n`, where `node` counts the down-moves taken by `step`.
Values live in one flat array at offset `step * (step + 1) // 2 + node`, so
the whole tree is a single contiguous buffer of `(n + 1) * (n + 2) // 2`
entries.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


def lattice_size(steps: int) -> int:
    """Number of nodes in a recombining lattice with `steps` periods."""
    if steps < 0:
        raise ValueError("steps must be >= 0")
    return (steps + 1) * (steps + 2) // 2


def node_offset(step: int, node: int) -> int:
    """Flat-array offset of `(step, node)`."""
    return step * (step + 1) // 2 + node


@dataclass(frozen=True, eq=False)
class TriangularLattice:
    """Read-only values indexed by `(step, node)`.

    The backing array is copied and flagged non-writeable on construction, so
    a lattice cannot change once built.
    """

    steps: int
    values: np.ndarray

    def __post_init__(self) -> None:
        expected = lattice_size(self.steps)
        arr = np.array(self.values, copy=True)
        if arr.ndim != 1 or arr.size != expected:
            raise ValueError(
                f"lattice with {self.steps} steps needs {expected} values, "
                f"got shape {arr.shape}"
            )
        arr.flags.writeable = False
        object.__setattr__(self, "values", arr)

    @classmethod
    def from_rows(cls, rows: list[np.ndarray]) -> TriangularLattice:
        """Assemble a lattice from per-step rows (row `i` has `i + 1` nodes)."""
        if not rows:
            raise ValueError("at least one row is required")
        for step, row in enumerate(rows):
            if len(row) != step + 1:
                raise ValueError(
                    f"row {step} must have {step + 1} nodes, got {len(row)}"
                )
        return cls(steps=len(rows) - 1, values=np.concatenate(rows))

    @property
    def dtype(self) -> np.dtype:
        return self.values.dtype

    def _check(self, step: int, node: int) -> None:
        if not 0 <= step <= self.steps:
            raise IndexError(f"step {step} outside [0, {self.steps}]")
        if not 0 <= node <= step:
            raise IndexError(f"node {node} outside [0, {step}] at step {step}")

    def __getitem__(self, index: tuple[int, int]):
        step, node = index
        self._check(step, node)
        return self.values[node_offset(step, node)].item()

    def row(self, step: int) -> np.ndarray:
        """Read-only view of every node at `step`, ordered by down-move count."""
        self._check(step, 0)
        start = node_offset(step, 0)
        return self.values[start : start + step + 1]

    def rows(self) -> Iterator[np.ndarray]:
        for step in range(self.steps + 1):
            yield self.row(step)

    def indices(self) -> Iterator[tuple[int, int]]:
        for step in range(self.steps + 1):
            for node in range(step + 1):
                yield step, node

    def to_nested(self) -> list[list]:
        """Plain nested lists, `nested[step][node]`."""
        return [row.tolist() for row in self.rows()]

    def __len__(self) -> int:
        return self.values.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TriangularLattice):
            return NotImplemented
        return (
            self.steps == other.steps
            and self.values.dtype == other.values.dtype
            and self.values.tobytes() == other.values.tobytes()
        )

    __hash__ = None


def build_stock_lattice(
    spot: float, up: float, down: float, steps: int
) -> TriangularLattice:
    """Stock prices `spot * up**(step - node) * down**node` for every node."""
    if steps < 0:
        raise ValueError("steps must be >= 0")

    rows = []
    for step in range(steps + 1):
        j = np.arange(step + 1)
        rows.append(spot * (up ** (step - j)) * (down**j))
    return TriangularLattice.from_rows(rows)
