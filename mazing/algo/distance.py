from collections import deque
from typing import Deque, Set

from mazing.algo.base import CONTINUING, DONE, Args, EventKind, Status, Task, TaskKind
from mazing.core.grid import Address
from mazing.core.maze import Maze


class DistanceScan(Task):
    """
    Breadth-first flood over the carved maze, filling the distance map
    with each cell's depth from `start`. One frontier cell per tick.
    """
    name = "DistanceScan"
    kind = TaskKind.DISTANCE_SCAN

    def __init__(self, maze: Maze, start: Address = None, seed: int = None):
        super().__init__(maze, seed)
        if start is not None:
            self.location = start
        self.start = self.location
        self.started = False
        self.in_sight: Deque[Address] = deque()
        self.queued: Set[Address] = set()

    def execute_one(self, args: Args) -> Status:
        maze = args.maze
        distance_map = args.distance_map

        if distance_map is None:
            return self.abort("no distance map to fill")

        if not self.started:
            self.started = True
            if not maze.grid.contains(*self.start):
                return self.abort(f"start {self.start} is outside the maze")
            distance_map.reset()
            self.in_sight.append(self.start)
            self.queued.add(self.start)

        if not self.in_sight:
            return DONE

        self.step_count += 1
        pos = self.in_sight.popleft()
        self.location = pos

        candidates = []
        for neighbour in maze.reachable_neighbours(pos):
            depth = distance_map.height(neighbour)
            if depth is not None:
                candidates.append(depth)
            elif neighbour not in self.queued:
                self.queued.add(neighbour)
                self.in_sight.append(neighbour)

        depth = 1 + min(candidates) if candidates else 0
        distance_map.set_depth(pos, depth)
        self.emit(EventKind.SCANNED, detail=f"depth {depth}, {len(self.in_sight)} in sight")

        if not self.in_sight:
            self.emit(EventKind.COMPLETE,
                      detail=f"scan complete, highest depth {distance_map.highest}")
            return DONE
        return CONTINUING
