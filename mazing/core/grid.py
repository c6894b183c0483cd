from array import array
from typing import Callable, Generic, Iterator, List, NamedTuple, Optional, TypeVar

T = TypeVar("T")


class Address(NamedTuple):
    """
    A (column, line) coordinate. Holds no reference to any grid; it is
    resolved on demand against whatever owns the cells.
    """
    column: int
    line: int

    def __str__(self) -> str:
        return f"{self.column}:{self.line}"

    def resolve(self, within):
        """Returns the cell value in `within.grid`, or None when out of bounds."""
        return within.grid.at(self.column, self.line)

    def move_column(self, column: int) -> "Address":
        return Address(column, self.line)

    def next_crumb(self, grid: "Grid") -> "Address":
        # Row-major successor, may lie past the last cell
        column, line = self.column + 1, self.line
        if column >= grid.columns:
            column, line = 0, line + 1
        return Address(column, line)

    def is_on_right_border(self, grid: "Grid") -> bool:
        return self.column + 1 == grid.columns

    def is_on_down_border(self, grid: "Grid") -> bool:
        return self.line + 1 == grid.lines

    def is_past_end(self, grid: "Grid") -> bool:
        return self.line >= grid.lines or self.column >= grid.columns


class Grid(Generic[T]):
    # Direction bits
    NORTH = 0b0001
    EAST  = 0b0010
    SOUTH = 0b0100
    WEST  = 0b1000

    DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

    __slots__ = ('columns', 'lines', 'cells')

    def __init__(self, columns: int, lines: int, default: T = None, typecode: str = None):
        if columns < 0 or lines < 0:
            raise ValueError(f"Invalid grid size {columns}x{lines}")
        self.columns = columns
        self.lines = lines
        # 'B' packs one byte per cell; a plain list holds anything else (e.g. None)
        if typecode:
            self.cells = array(typecode, [default] * (columns * lines))
        else:
            self.cells = [default] * (columns * lines)

    def __repr__(self) -> str:
        return f"Grid({self.columns}x{self.lines})"

    @property
    def cell_count(self) -> int:
        return self.columns * self.lines

    def contains(self, column: int, line: int) -> bool:
        return 0 <= column < self.columns and 0 <= line < self.lines

    def get_index(self, column: int, line: int) -> int:
        if self.contains(column, line):
            return line * self.columns + column
        raise IndexError(f"Coordinate ({column}, {line}) out of bounds")

    def pin(self, index: int) -> Address:
        line, column = divmod(index, self.columns)
        return Address(column, line)

    def at(self, column: int, line: int) -> Optional[T]:
        if not self.contains(column, line):
            return None
        return self.cells[line * self.columns + column]

    def put(self, column: int, line: int, value: T) -> bool:
        if not self.contains(column, line):
            return False
        self.cells[line * self.columns + column] = value
        return True

    def fill(self, value: T):
        for i in range(len(self.cells)):
            self.cells[i] = value

    def crumbs(self) -> Iterator[Address]:
        """Row-major walk over every address. Each call starts a fresh walk."""
        for line in range(self.lines):
            for column in range(self.columns):
                yield Address(column, line)

    def neighbours(self, addr: Address) -> List[Address]:
        """In-bounds orthogonal neighbours, in N, S, E, W order."""
        column, line = addr
        result = []
        if line > 0 and column < self.columns:
            result.append(Address(column, line - 1))
        if line < self.lines - 1 and column < self.columns:
            result.append(Address(column, line + 1))
        if column < self.columns - 1 and line < self.lines:
            result.append(Address(column + 1, line))
        if column > 0 and line < self.lines:
            result.append(Address(column - 1, line))
        return result

    def center(self) -> Optional[Address]:
        if self.cell_count == 0:
            return None
        return Address(self.columns // 2, self.lines // 2)

    def random_cell(self, rng) -> Optional[Address]:
        if self.cell_count == 0:
            return None
        return self.pin(rng.randrange(self.cell_count))

    def random_matching(self, rng, predicate: Callable[[Address], bool]) -> Optional[Address]:
        """
        Draws random cells until one satisfies `predicate`.
        At most `cell_count` candidates are tried. Draws are made without
        replacement (lazy Fisher-Yates), so the answer is uniform among the
        matching cells and None means no cell matches at all.
        """
        indices = list(range(self.cell_count))
        for tried in range(len(indices)):
            pick = rng.randrange(tried, len(indices))
            indices[tried], indices[pick] = indices[pick], indices[tried]
            candidate = self.pin(indices[tried])
            if predicate(candidate):
                return candidate
        return None
