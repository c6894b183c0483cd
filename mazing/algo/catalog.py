from typing import Dict, Type, Union

from mazing.algo.aldous_broder import AldousBroder
from mazing.algo.base import Task, TaskKind
from mazing.algo.binary_tree import BinaryTree
from mazing.algo.distance import DistanceScan
from mazing.algo.sidewinder import Sidewinder
from mazing.algo.wilson import Wilson
from mazing.core.maze import Maze

# Closed set: one class per kind
TASKS: Dict[TaskKind, Type[Task]] = {
    TaskKind.BINARY_TREE: BinaryTree,
    TaskKind.SIDEWINDER: Sidewinder,
    TaskKind.ALDOUS_BRODER: AldousBroder,
    TaskKind.WILSON: Wilson,
    TaskKind.DISTANCE_SCAN: DistanceScan,
}

CARVERS = {
    kind.value: kind
    for kind in TaskKind
    if kind is not TaskKind.DISTANCE_SCAN
}


def make_task(kind: Union[TaskKind, str], maze: Maze, seed: int = None) -> Task:
    if isinstance(kind, str):
        try:
            kind = TaskKind(kind)
        except ValueError:
            raise ValueError(f"Unknown algorithm '{kind}'. Choices are {', '.join(CARVERS)}.") from None
    return TASKS[kind](maze, seed=seed)
