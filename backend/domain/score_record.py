"""
ScoreRecord - the immutable result of one finished game.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

Cell = Tuple[int, int]


def _to_cells(raw) -> Tuple[Cell, ...]:
    cells = []
    for item in raw:
        row, col = item
        cells.append((int(row), int(col)))
    return tuple(cells)


@dataclass(frozen=True)
class ScoreRecord:
    """
    Snapshot of a completed game.

    The move and fruit logs are kept so the game can be replayed later.
    """
    name: str
    points: int
    moves: Tuple[Cell, ...] = field(default_factory=tuple)
    fruits: Tuple[Cell, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists from callers and JSON, store tuples
        object.__setattr__(self, "moves", _to_cells(self.moves))
        object.__setattr__(self, "fruits", _to_cells(self.fruits))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly dict, fields in file order."""
        return {
            "name": self.name,
            "points": self.points,
            "moves": [list(cell) for cell in self.moves],
            "fruits": [list(cell) for cell in self.fruits],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreRecord":
        """
        Build a record from its stored form.

        Raises:
            ValueError: if a field is missing or has the wrong shape
        """
        try:
            name = str(data["name"])
            points = int(data["points"])
            moves = _to_cells(data.get("moves", []))
            fruits = _to_cells(data.get("fruits", []))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed score record {data!r}: {e}") from e

        if points < 0:
            raise ValueError(f"Score record {name!r} has negative points: {points}")

        return cls(name=name, points=points, moves=moves, fruits=fruits)
