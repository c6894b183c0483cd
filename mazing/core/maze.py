import threading
from typing import List, Optional

from mazing.core.grid import Address, Grid


class CarveError(ValueError):
    """Raised when a carve does not join two adjacent in-bounds cells."""


class MazeCell:
    """Read-only view over one cell's flags."""

    __slots__ = ('flags',)

    def __init__(self, flags: int):
        self.flags = flags

    def __repr__(self) -> str:
        return f"MazeCell({self.flags:#07b})"

    @property
    def can_move_down(self) -> bool:
        return bool(self.flags & Maze.GATE_DOWN)

    @property
    def can_move_right(self) -> bool:
        return bool(self.flags & Maze.GATE_RIGHT)

    @property
    def is_active(self) -> bool:
        return bool(self.flags & Maze.ACTIVE)

    @property
    def is_current(self) -> bool:
        return bool(self.flags & Maze.CURRENT)

    @property
    def is_visited(self) -> bool:
        return bool(self.flags & Maze.VISITED)


class Maze:
    # Gates, stored on the upper / left cell of the pair they join
    GATE_DOWN  = 0b00001
    GATE_RIGHT = 0b00010

    # Flags
    ACTIVE  = 0b00100  # part of an in-progress walk or run
    CURRENT = 0b01000  # algorithm cursor
    VISITED = 0b10000  # committed to the maze

    GATES = GATE_DOWN | GATE_RIGHT
    TRANSIENT = ACTIVE | CURRENT

    __slots__ = ('grid', 'lock', 'visited_count')

    def __init__(self, columns: int, lines: int):
        if columns < 1 or lines < 1:
            raise ValueError(f"A maze needs at least one cell, got {columns}x{lines}")
        # 'B' (unsigned char) -> 1 byte per cell, no gate open
        self.grid = Grid(columns, lines, 0, typecode='B')
        self.visited_count = 0
        # Held by the background worker around each tick, and by readers that
        # want a non-torn view while it runs
        self.lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Maze({self.columns}x{self.lines})"

    @property
    def columns(self) -> int:
        return self.grid.columns

    @property
    def lines(self) -> int:
        return self.grid.lines

    def cell(self, addr: Address) -> Optional[MazeCell]:
        flags = addr.resolve(self)
        if flags is None:
            return None
        return MazeCell(flags)

    # --- Connectivity ---

    def carve(self, src: Address, dst: Address):
        """
        Opens the gate between two orthogonally adjacent cells.
        The bit lands on whichever of the two cells stores that edge.
        """
        if not (self.grid.contains(*src) and self.grid.contains(*dst)):
            raise CarveError(f"Cannot carve {src} -> {dst}: out of bounds")

        dx = dst.column - src.column
        dy = dst.line - src.line

        if (dx, dy) == (1, 0):
            self._set(src, self.GATE_RIGHT)
        elif (dx, dy) == (-1, 0):
            self._set(dst, self.GATE_RIGHT)
        elif (dx, dy) == (0, 1):
            self._set(src, self.GATE_DOWN)
        elif (dx, dy) == (0, -1):
            self._set(dst, self.GATE_DOWN)
        else:
            raise CarveError(f"Cannot carve {src} -> {dst}: cells are not adjacent")

    def gates_at(self, addr: Address) -> int:
        """Open directions out of `addr`, as Grid.NORTH | EAST | SOUTH | WEST bits."""
        column, line = addr
        gates = 0
        own = self.grid.at(column, line)
        if own is None:
            return gates

        if own & self.GATE_DOWN:
            gates |= Grid.SOUTH
        if own & self.GATE_RIGHT:
            gates |= Grid.EAST

        # Up and left live on the neighbour
        above = self.grid.at(column, line - 1) if line > 0 else None
        if above is not None and above & self.GATE_DOWN:
            gates |= Grid.NORTH
        left = self.grid.at(column - 1, line) if column > 0 else None
        if left is not None and left & self.GATE_RIGHT:
            gates |= Grid.WEST

        return gates

    def can_move(self, addr: Address, direction: int) -> bool:
        return (self.gates_at(addr) & direction) != 0

    def reachable_neighbours(self, addr: Address) -> List[Address]:
        gates = self.gates_at(addr)
        result = []
        for direction in (Grid.NORTH, Grid.SOUTH, Grid.EAST, Grid.WEST):
            if gates & direction:
                result.append(Address(addr.column + Grid.DX[direction],
                                      addr.line + Grid.DY[direction]))
        return result

    def edge_count(self) -> int:
        count = 0
        for val in self.grid.cells:
            if val & self.GATE_DOWN:
                count += 1
            if val & self.GATE_RIGHT:
                count += 1
        return count

    # --- Flags ---

    def _set(self, addr: Address, bits: int):
        idx = self.grid.get_index(*addr)
        self.grid.cells[idx] |= bits

    def _clear(self, addr: Address, bits: int):
        idx = self.grid.get_index(*addr)
        self.grid.cells[idx] &= ~bits

    def _flag(self, addr: Address, bits: int, on: bool):
        # Out-of-range addresses are ignored, like the gates of a border cell
        if not self.grid.contains(*addr):
            return
        if on:
            self._set(addr, bits)
        else:
            self._clear(addr, bits)

    def _has(self, addr: Address, bits: int) -> bool:
        flags = addr.resolve(self)
        return flags is not None and (flags & bits) != 0

    def set_visited(self, addr: Address, visited: bool = True):
        was_visited = self.is_visited(addr)
        self._flag(addr, self.VISITED, visited)
        if self.is_visited(addr) != was_visited:
            self.visited_count += 1 if visited else -1

    def set_active(self, addr: Address, active: bool = True):
        self._flag(addr, self.ACTIVE, active)

    def set_current(self, addr: Address, current: bool = True):
        self._flag(addr, self.CURRENT, current)

    def is_visited(self, addr: Address) -> bool:
        return self._has(addr, self.VISITED)

    def is_active(self, addr: Address) -> bool:
        return self._has(addr, self.ACTIVE)

    def is_current(self, addr: Address) -> bool:
        return self._has(addr, self.CURRENT)

    def is_visitation_complete(self) -> bool:
        return self.visited_count == self.grid.cell_count

    def clear_transient(self):
        cells = self.grid.cells
        for i in range(len(cells)):
            cells[i] &= ~self.TRANSIENT

    def reset(self):
        self.grid.fill(0)
        self.visited_count = 0
