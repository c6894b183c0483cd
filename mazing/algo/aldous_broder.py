from typing import List

from mazing.algo.base import CONTINUING, Args, EventKind, RandomWalker, Status, TaskKind
from mazing.core.grid import Address
from mazing.core.maze import Maze


class AldousBroder(RandomWalker):
    """
    Uninformed random walk over the whole grid. A gate is opened only when
    the walk steps into a cell it has never seen, so the maze is finished
    once every cell has been visited.

    The walk buffer only highlights the current leg: it is wiped on the tick
    after the walk steps back into already visited territory.
    """
    name = "AldousBroder"
    kind = TaskKind.ALDOUS_BRODER

    def __init__(self, maze: Maze, seed: int = None):
        super().__init__(maze, seed)
        self.started = False
        self.walk: List[Address] = []
        self.restart_walk = False

    def clear_walk(self, maze: Maze):
        for addr in self.walk:
            maze.set_active(addr, False)
        self.walk.clear()

    def walk_to(self, addr: Address, maze: Maze):
        maze.set_current(self.location, False)
        maze.set_active(self.location)
        self.walk.append(self.location)
        maze.set_current(addr)
        self.location = addr

    def execute_one(self, args: Args) -> Status:
        maze = args.maze

        if not self.started:
            self.started = True
            self.step_count += 1
            maze.set_visited(self.location)
            maze.set_current(self.location)
            if maze.is_visitation_complete():
                return self.finish(maze)
            self.emit(EventKind.INITIALISED, detail="start cell visited")
            return CONTINUING

        if self.restart_walk:
            self.clear_walk(maze)
            self.restart_walk = False

        next_addr = self.pick_next(maze)
        if next_addr is None:
            return self.abort("impossible situation - no neighbours")

        must_carve = not maze.is_visited(next_addr)
        if must_carve:
            maze.carve(self.location, next_addr)
            maze.set_visited(next_addr)
            self.emit(EventKind.CARVE, target=next_addr, detail=f"carve to {next_addr}")
        else:
            self.emit(EventKind.MOVE, target=next_addr,
                      detail=f"no carving because {next_addr} is already visited")

        self.restart_walk = not must_carve or next_addr in self.walk
        self.walk_to(next_addr, maze)
        self.step_count += 1

        if maze.is_visitation_complete():
            self.walk.clear()
            return self.finish(maze)
        return CONTINUING
