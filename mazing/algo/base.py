import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mazing.core.distance import DistanceMap
from mazing.core.grid import Address
from mazing.core.maze import Maze


class StatusKind(Enum):
    CONTINUING = "continuing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Status:
    kind: StatusKind
    reason: Optional[str] = None

    @classmethod
    def aborted(cls, reason: str) -> "Status":
        return cls(StatusKind.ABORTED, reason)

    @property
    def is_continuing(self) -> bool:
        return self.kind is StatusKind.CONTINUING

    @property
    def is_done(self) -> bool:
        return self.kind is StatusKind.DONE

    @property
    def is_aborted(self) -> bool:
        return self.kind is StatusKind.ABORTED


CONTINUING = Status(StatusKind.CONTINUING)
DONE = Status(StatusKind.DONE)


class TaskKind(Enum):
    BINARY_TREE = "binary_tree"
    SIDEWINDER = "sidewinder"
    ALDOUS_BRODER = "aldous_broder"
    WILSON = "wilson"
    DISTANCE_SCAN = "distance_scan"


class EventKind(Enum):
    INITIALISED = "initialised"
    FORCED_CARVE = "forced carve"
    RANDOM_CARVE = "random carve"
    EXTEND_RUN = "extend run"
    CLOSE_RUN = "close run"
    CARVE = "carve"
    MOVE = "move"
    WALK = "walk"
    LOOP_ERASED = "loop erased"
    COMMITTED = "committed"
    RELOCATED = "relocated"
    SCANNED = "scanned"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class StepEvent:
    """What a single tick did. Formatting is left to the logging side."""
    kind: EventKind
    at: Optional[Address] = None
    target: Optional[Address] = None
    detail: str = ""


@dataclass
class Args:
    maze: Maze
    distance_map: Optional[DistanceMap] = None


class Task(ABC):
    name = "Task"
    kind: TaskKind

    def __init__(self, maze: Maze, seed: int = None):
        self.seed = seed
        self.rng = random.Random(seed)
        # Every task starts on the grid's first cell
        self.location = next(maze.grid.crumbs())
        self.step_count = 0
        self.last_event: Optional[StepEvent] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(at={self.location}, steps={self.step_count})"

    @abstractmethod
    def execute_one(self, args: Args) -> Status:
        """Advances by one atomic action and reports where the task stands."""

    def context(self) -> Optional[StepEvent]:
        """Event describing the state before the next tick, if the task has one."""
        return None

    def action(self) -> Optional[StepEvent]:
        """Event describing what the last tick did."""
        return self.last_event

    def emit(self, kind: EventKind, at: Address = None, target: Address = None, detail: str = ""):
        self.last_event = StepEvent(kind, at if at is not None else self.location, target, detail)

    def abort(self, reason: str) -> Status:
        self.emit(EventKind.FAILED, detail=reason)
        return Status.aborted(reason)


class RowMajorCarver(Task):
    """Cursor that visits each cell once, left to right then top to bottom."""

    def is_done_walking(self, maze: Maze) -> bool:
        return self.location.is_past_end(maze.grid)

    def advance(self, maze: Maze):
        maze.set_current(self.location, False)
        maze.set_visited(self.location)
        self.location = self.location.next_crumb(maze.grid)
        if not self.is_done_walking(maze):
            maze.set_current(self.location)

    def carve_right(self, maze: Maze, addr: Address = None):
        addr = addr if addr is not None else self.location
        maze.carve(addr, Address(addr.column + 1, addr.line))

    def carve_down(self, maze: Maze, addr: Address = None):
        addr = addr if addr is not None else self.location
        maze.carve(addr, Address(addr.column, addr.line + 1))


class RandomWalker(Task):
    """Cursor that wanders to uniformly chosen neighbours."""

    def pick_next(self, maze: Maze) -> Optional[Address]:
        candidates = maze.grid.neighbours(self.location)
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def finish(self, maze: Maze) -> Status:
        maze.clear_transient()
        self.emit(EventKind.COMPLETE, detail="maze is complete")
        return DONE
