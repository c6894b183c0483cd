from typing import List, Optional

from mazing.algo.base import CONTINUING, Args, EventKind, RandomWalker, Status, StepEvent, TaskKind
from mazing.core.grid import Address
from mazing.core.maze import Maze


class Wilson(RandomWalker):
    """
    Loop-erased random walk. Starting from a random unvisited cell, the walk
    wanders until it hits the maze; any loop it forms on itself is erased
    as soon as it closes, and the surviving path is then carved in one go.
    Produces a uniform spanning tree.

    `walk` holds the uncommitted path up to, but excluding, the cursor.
    """
    name = "Wilson"
    kind = TaskKind.WILSON

    def __init__(self, maze: Maze, seed: int = None):
        super().__init__(maze, seed)
        self.started = False
        self.walk: List[Address] = []

    def context(self) -> Optional[StepEvent]:
        # An empty walk means the cursor sits on a fresh start cell
        if self.started and not self.walk:
            return StepEvent(EventKind.RELOCATED, self.location,
                             detail=f"walk starts at {self.location}")
        return None

    def walk_to(self, addr: Address, maze: Maze):
        maze.set_current(self.location, False)
        maze.set_active(self.location)
        self.walk.append(self.location)
        maze.set_current(addr)
        self.location = addr

    def commit_walk(self, addr: Address, maze: Maze) -> int:
        path = self.walk + [self.location, addr]
        for source, dest in zip(path, path[1:]):
            maze.set_active(source, False)
            maze.set_visited(source)
            maze.carve(source, dest)
        maze.set_current(self.location, False)
        self.walk = []
        return len(path) - 1

    def rewind_to(self, addr: Address, maze: Maze):
        # Erase from the first occurrence, the one that closed the loop
        first = self.walk.index(addr)
        for looped in self.walk[first:]:
            maze.set_active(looped, False)
        self.walk = self.walk[:first]

        maze.set_current(self.location, False)
        maze.set_current(addr)
        self.location = addr

    def relocate_rand(self, maze: Maze) -> Status:
        maze.set_current(self.location, False)
        target = maze.grid.random_matching(self.rng, lambda addr: not maze.is_visited(addr))
        if target is None:
            return self.abort("impossible situation - no more unvisited cell")
        self.location = target
        maze.set_current(target)
        return CONTINUING

    def execute_one(self, args: Args) -> Status:
        maze = args.maze
        self.step_count += 1

        if not self.started:
            self.started = True
            start = self.location
            maze.set_visited(start)
            if maze.is_visitation_complete():
                return self.finish(maze)
            status = self.relocate_rand(maze)
            if status.is_continuing:
                self.emit(EventKind.INITIALISED, at=start, target=self.location,
                          detail=f"initialised, walk starts at {self.location}")
            return status

        next_addr = self.pick_next(maze)
        if next_addr is None:
            return self.abort("impossible situation - no neighbours")

        if maze.is_visited(next_addr):
            carved = self.commit_walk(next_addr, maze)
            if maze.is_visitation_complete():
                return self.finish(maze)
            status = self.relocate_rand(maze)
            if status.is_continuing:
                self.emit(EventKind.COMMITTED, at=next_addr, target=self.location,
                          detail=f"walk joined the maze, {carved} gates carved, "
                                 f"new walk starts at {self.location}")
            return status

        if next_addr in self.walk:
            self.rewind_to(next_addr, maze)
            self.emit(EventKind.LOOP_ERASED, detail=f"loop detected at {next_addr}, rewind")
        else:
            self.walk_to(next_addr, maze)
            self.emit(EventKind.WALK, detail="walk continues")
        return CONTINUING
