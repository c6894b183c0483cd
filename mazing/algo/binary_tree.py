from mazing.algo.base import CONTINUING, DONE, Args, EventKind, RowMajorCarver, Status, TaskKind
from mazing.core.grid import Address


class BinaryTree(RowMajorCarver):
    """
    Carves down or right from every cell, walking row-major.
    The bottom row can only go right and the right column only down,
    which leaves the bottom-right cell as the single terminal cell.
    """
    name = "BinaryTree"
    kind = TaskKind.BINARY_TREE

    def execute_one(self, args: Args) -> Status:
        maze = args.maze
        grid = maze.grid

        if self.is_done_walking(maze):
            return DONE

        loc = self.location
        on_down = loc.is_on_down_border(grid)
        on_right = loc.is_on_right_border(grid)

        if on_down and on_right:
            self.emit(EventKind.COMPLETE, detail="terminal cell, nothing to carve")
        elif on_down:
            self.carve_right(maze)
            self.emit(EventKind.FORCED_CARVE, target=Address(loc.column + 1, loc.line),
                      detail="bottom border, forced to carve right")
        elif on_right:
            self.carve_down(maze)
            self.emit(EventKind.FORCED_CARVE, target=Address(loc.column, loc.line + 1),
                      detail="right border, forced to carve down")
        elif self.rng.random() < 0.5:
            self.carve_down(maze)
            self.emit(EventKind.RANDOM_CARVE, target=Address(loc.column, loc.line + 1),
                      detail="randomly chose to carve down")
        else:
            self.carve_right(maze)
            self.emit(EventKind.RANDOM_CARVE, target=Address(loc.column + 1, loc.line),
                      detail="randomly chose to carve right")

        self.step_count += 1
        self.advance(maze)

        if self.is_done_walking(maze):
            maze.clear_transient()
            return DONE
        return CONTINUING
