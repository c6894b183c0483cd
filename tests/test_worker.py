import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazing.algo.base import Args
from mazing.algo.distance import DistanceScan
from mazing.algo.executor import Executor
from mazing.algo.wilson import Wilson
from mazing.core.distance import DistanceMap
from mazing.core.maze import Maze


class TestBackgroundRunner(unittest.TestCase):
    def test_runs_queue_to_completion(self):
        from mazing.algo.worker import BackgroundRunner

        maze = Maze(12, 10)
        args = Args(maze, DistanceMap(12, 10))
        executor = Executor()
        executor.stack(Wilson(maze, seed=8))
        executor.stack(DistanceScan(maze))

        runner = BackgroundRunner(executor, args, batch=16)
        runner.start()

        # Readers see whole ticks only
        for _ in range(5):
            with maze.lock:
                self.assertLessEqual(maze.edge_count(), maze.visited_count)

        status = runner.join(timeout=30)
        self.assertFalse(runner.is_running)
        self.assertTrue(status.is_done)
        self.assertEqual(len(executor), 0)
        self.assertTrue(maze.is_visitation_complete())
        self.assertEqual(maze.edge_count(), 12 * 10 - 1)
        self.assertEqual(args.distance_map.reached_count(), 120)

    def test_stops_on_abort(self):
        from mazing.algo.worker import BackgroundRunner

        maze = Maze(3, 3)
        executor = Executor()
        executor.stack(DistanceScan(maze))  # no map to fill

        runner = BackgroundRunner(executor, Args(maze))
        with self.assertLogs("mazing.algo", level="ERROR"):
            runner.start()
            status = runner.join(timeout=10)
        self.assertTrue(status.is_aborted)

    def test_cannot_start_twice(self):
        from mazing.algo.worker import BackgroundRunner

        maze = Maze(40, 40)
        executor = Executor()
        executor.stack(Wilson(maze, seed=1))
        runner = BackgroundRunner(executor, Args(maze), batch=1)
        with maze.lock:
            runner.start()
            with self.assertRaises(RuntimeError):
                runner.start()
        runner.stop()
        runner.join(timeout=10)
        self.assertFalse(runner.is_running)


if __name__ == '__main__':
    unittest.main()
