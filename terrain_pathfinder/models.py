# models.py
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, NamedTuple, Optional


class Coordinate(NamedTuple):
    row: int
    col: int


class TerrainClass(IntEnum):
    WATER = 0
    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3
    LEVEL_4 = 4
    ROBOT_PATH = 5
    UNKNOWN = 6


class PlanStatus(Enum):
    SUCCESS = "success"
    INVALID_ENDPOINT = "invalid_endpoint"
    UNREACHABLE = "unreachable"


@dataclass(order=True, frozen=True)
class SearchNode:
    # field order is the frontier order: f, then h, then coordinate
    f: int
    h: int
    coordinate: Coordinate
    g: int = field(compare=False)

    @classmethod
    def at(cls, coordinate: Coordinate, g: int, h: int) -> "SearchNode":
        return cls(g + h, h, coordinate, g)


@dataclass
class PlanResult:
    route: List[Coordinate]
    status: PlanStatus
    cost: Optional[int] = None
    expansions: int = 0
    expanded_order: List[Coordinate] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is PlanStatus.SUCCESS
