from typing import Optional

from mazing.core.grid import Address, Grid


class DistanceMap:
    """
    Per-cell BFS depth overlay, same shape as the maze it describes.
    A depth is written once; later writes to the same cell are refused.
    """

    __slots__ = ('grid', 'highest')

    def __init__(self, columns: int, lines: int):
        self.grid: Grid[Optional[int]] = Grid(columns, lines, None)
        self.highest = 0

    def __repr__(self) -> str:
        return f"DistanceMap({self.grid.columns}x{self.grid.lines}, highest={self.highest})"

    def height(self, addr: Address) -> Optional[int]:
        return addr.resolve(self)

    def set_depth(self, addr: Address, depth: int) -> bool:
        if depth < 0:
            raise ValueError(f"Negative depth {depth} at {addr}")
        if not self.grid.contains(*addr) or self.height(addr) is not None:
            return False
        self.grid.put(addr.column, addr.line, depth)
        if depth > self.highest:
            self.highest = depth
        return True

    def reached_count(self) -> int:
        return sum(1 for depth in self.grid.cells if depth is not None)

    def reset(self):
        self.grid.fill(None)
        self.highest = 0
