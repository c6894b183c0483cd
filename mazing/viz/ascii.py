from enum import Enum
from typing import List, Optional

from mazing.core.distance import DistanceMap
from mazing.core.grid import Address, Grid
from mazing.core.maze import Maze


class SymbolSet(Enum):
    LIGHT = "light"
    DASHED = "dashed"


# hori_closed, hori_open, vert_closed, vert_open, join
SYMBOLS = {
    SymbolSet.LIGHT:  ('-', ' ', '|', ' ', '+'),
    SymbolSet.DASHED: ('=', '-', '‖', '¦', '#'),
}


class AsciiRenderer:
    """
    Plain-text drawing of a maze, two characters per cell interior:

        +--+--+
        |     |
        +  +--+
        |     |
        +--+--+
    """

    def __init__(self, symbol_set: SymbolSet = SymbolSet.LIGHT):
        self.symbol_set = symbol_set
        hori_closed, hori_open, vert_closed, vert_open, join = SYMBOLS[symbol_set]
        self.closed_hori_gate = join + hori_closed * 2
        self.opened_hori_gate = join + hori_open * 2
        self.closed_vert_gate = vert_closed
        self.opened_vert_gate = vert_open
        self.join = join
        self.vert = vert_closed

    def border(self, columns: int) -> str:
        return self.closed_hori_gate * columns + self.join

    def draw(self, maze: Maze, distance_map: Optional[DistanceMap] = None) -> List[str]:
        columns, lines = maze.columns, maze.lines
        result = [self.border(columns)]

        for line in range(lines):
            vert_line = []
            hori_line = []
            for column in range(columns):
                addr = Address(column, line)
                gates = maze.gates_at(addr)

                gate = self.opened_vert_gate if gates & Grid.WEST else self.closed_vert_gate
                vert_line.append(gate + self.interior(addr, distance_map))
                hori_line.append(self.opened_hori_gate if gates & Grid.SOUTH else self.closed_hori_gate)

            result.append("".join(vert_line) + self.vert)
            if line + 1 < lines:
                result.append("".join(hori_line) + self.join)
            else:
                result.append(self.border(columns))

        return result

    @staticmethod
    def interior(addr: Address, distance_map: Optional[DistanceMap]) -> str:
        if distance_map is None:
            return "  "
        depth = distance_map.height(addr)
        if depth is None:
            return "  "
        # Two columns per cell, deep mazes wrap around
        return f"{depth % 100:>2}"
