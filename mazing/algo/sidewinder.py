from typing import Optional, Tuple

from mazing.algo.base import CONTINUING, DONE, Args, EventKind, RowMajorCarver, Status, TaskKind
from mazing.core.grid import Address
from mazing.core.maze import Maze


class Sidewinder(RowMajorCarver):
    """
    Groups cells of a line into runs joined rightwards. Closing a run opens
    one door down from a random cell of the run. The bottom line is a single
    run with no door below it.
    """
    name = "Sidewinder"
    kind = TaskKind.SIDEWINDER

    def __init__(self, maze: Maze, seed: int = None):
        super().__init__(maze, seed)
        self.run_start = self.location.column
        # (line, first column, last column, door column) of the last closed run
        self.last_run: Optional[Tuple[int, int, int, Optional[int]]] = None

    def close_run(self, maze: Maze):
        loc = self.location
        for column in range(self.run_start, loc.column + 1):
            maze.set_active(loc.move_column(column), False)

        if loc.is_on_down_border(maze.grid):
            self.last_run = (loc.line, self.run_start, loc.column, None)
            self.emit(EventKind.CLOSE_RUN, detail="bottom line, run closed without a door")
            return

        door = loc.move_column(self.rng.randint(self.run_start, loc.column))
        self.carve_down(maze, door)
        self.last_run = (loc.line, self.run_start, loc.column, door.column)
        self.emit(EventKind.CLOSE_RUN, target=door,
                  detail=f"close run, carve down at {door}")

    def extend_run(self, maze: Maze):
        loc = self.location
        maze.set_active(loc)
        self.carve_right(maze)
        self.emit(EventKind.EXTEND_RUN, target=Address(loc.column + 1, loc.line),
                  detail="extend run, carve right")

    def execute_one(self, args: Args) -> Status:
        maze = args.maze
        grid = maze.grid

        if self.is_done_walking(maze):
            return DONE

        new_run = False
        if self.location.is_on_right_border(grid):
            self.close_run(maze)
            new_run = True
        elif self.location.is_on_down_border(grid):
            self.extend_run(maze)
        elif self.rng.random() < 0.5:
            self.extend_run(maze)
        else:
            self.close_run(maze)
            new_run = True

        self.step_count += 1
        self.advance(maze)

        if new_run:
            self.run_start = self.location.column

        if self.is_done_walking(maze):
            maze.clear_transient()
            return DONE
        return CONTINUING
