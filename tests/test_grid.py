import unittest
import random
import sys
import os

# Add project root to path so we can import mazing
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazing.core.grid import Address, Grid


class TestGrid(unittest.TestCase):
    def test_initialization(self):
        grid = Grid(4, 5, 0, typecode='B')
        self.assertEqual(len(grid.cells), 20)
        self.assertEqual(grid.cell_count, 20)
        self.assertTrue(all(val == 0 for val in grid.cells))

        overlay = Grid(3, 2)
        self.assertEqual(overlay.cells, [None] * 6)

        with self.assertRaises(ValueError):
            Grid(-1, 3)

    def test_coordinates(self):
        grid = Grid(5, 5, 0)
        self.assertEqual(grid.get_index(2, 2), 12)  # 2 * 5 + 2

        with self.assertRaises(IndexError):
            grid.get_index(-1, 0)
        with self.assertRaises(IndexError):
            grid.get_index(0, 5)

    def test_out_of_range_access_never_wraps(self):
        grid = Grid(3, 2, 0)
        grid.put(0, 1, 7)
        self.assertIsNone(grid.at(3, 0))
        self.assertIsNone(grid.at(-1, 1))
        self.assertIsNone(grid.at(0, 2))
        self.assertEqual(grid.at(0, 1), 7)

        self.assertFalse(grid.put(3, 0, 9))
        self.assertFalse(grid.put(-1, 0, 9))
        self.assertEqual(sum(grid.cells), 7)

    def test_crumbs_are_row_major_and_restartable(self):
        grid = Grid(4, 5)
        expected = [Address(x, y) for y in range(5) for x in range(4)]
        self.assertEqual(list(grid.crumbs()), expected)
        self.assertEqual(list(grid.crumbs()), expected)
        self.assertEqual(list(Grid(0, 0).crumbs()), [])

    def test_neighbours(self):
        grid = Grid(3, 3)
        self.assertEqual(grid.neighbours(Address(1, 1)),
                         [Address(1, 0), Address(1, 2), Address(2, 1), Address(0, 1)])

        corner = grid.neighbours(Address(0, 0))
        self.assertEqual(len(corner), 2)
        self.assertIn(Address(1, 0), corner)
        self.assertIn(Address(0, 1), corner)

        self.assertEqual(Grid(1, 1).neighbours(Address(0, 0)), [])

    def test_random_cell_stays_in_bounds(self):
        grid = Grid(3, 4)
        rng = random.Random(7)
        for _ in range(100):
            addr = grid.random_cell(rng)
            self.assertTrue(grid.contains(*addr))
        self.assertIsNone(Grid(0, 0).random_cell(rng))

    def test_random_matching_finds_the_only_match(self):
        grid = Grid(10, 10)
        target = Address(7, 3)
        rng = random.Random(1)
        for _ in range(20):
            self.assertEqual(grid.random_matching(rng, lambda addr: addr == target), target)

    def test_random_matching_reports_exhaustion(self):
        grid = Grid(6, 6)
        tried = []

        def never(addr):
            tried.append(addr)
            return False

        self.assertIsNone(grid.random_matching(random.Random(3), never))
        # Bounded by the cell count, every cell tried once
        self.assertEqual(len(tried), grid.cell_count)
        self.assertEqual(set(tried), set(grid.crumbs()))

    def test_center(self):
        self.assertEqual(Grid(4, 5).center(), Address(2, 2))
        self.assertIsNone(Grid(0, 3).center())


class TestAddress(unittest.TestCase):
    def test_str(self):
        self.assertEqual(str(Address(3, 4)), "3:4")

    def test_borders(self):
        grid = Grid(4, 5)
        self.assertTrue(Address(3, 0).is_on_right_border(grid))
        self.assertFalse(Address(0, 0).is_on_right_border(grid))
        self.assertTrue(Address(0, 4).is_on_down_border(grid))
        self.assertFalse(Address(0, 3).is_on_down_border(grid))

    def test_next_crumb_wraps_lines(self):
        grid = Grid(4, 5)
        self.assertEqual(Address(1, 0).next_crumb(grid), Address(2, 0))
        self.assertEqual(Address(3, 0).next_crumb(grid), Address(0, 1))
        last = Address(3, 4).next_crumb(grid)
        self.assertTrue(last.is_past_end(grid))
        self.assertFalse(Address(3, 4).is_past_end(grid))

    def test_resolve_against_owner(self):
        class Holder:
            def __init__(self):
                self.grid = Grid(2, 2, 0)

        holder = Holder()
        holder.grid.put(1, 1, 5)
        self.assertEqual(Address(1, 1).resolve(holder), 5)
        self.assertIsNone(Address(2, 1).resolve(holder))
        self.assertEqual(Address(1, 0).move_column(0), Address(0, 0))


if __name__ == '__main__':
    unittest.main()
