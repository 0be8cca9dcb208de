import unittest

import numpy as np

from bracetopia.model.cell import CellValue
from bracetopia.model.grid import NeighborhoodGrid
from bracetopia.model.happiness import (
    evaluate, is_contented, happiness_map, contentment_map
)
from bracetopia.model.population import generate_population, shuffle_population

SYMBOL_VALUES = {'.': CellValue.VACANT, 'n': CellValue.NEWLINE, 'e': CellValue.ENDLINE}


def grid_from_rows(*rows):
    pool = [SYMBOL_VALUES[ch] for row in rows for ch in row]
    return NeighborhoodGrid.from_pool(np.array(pool), len(rows))


def random_grid(dimension, vacancy, endline, seed):
    pool = generate_population(dimension * dimension, vacancy, endline)
    shuffle_population(pool, np.random.default_rng(seed))
    return NeighborhoodGrid.from_pool(pool, dimension)


class TestEvaluate(unittest.TestCase):

    def test_isolated_center_occupant_is_happy(self):
        grid = grid_from_rows(
            "eeeee",
            "e...e",
            "e.n.e",
            "e...e",
            "eeeee",
        )
        happiness = evaluate(grid, 2, 2)
        self.assertEqual(happiness, 1.0)
        for strength in (1, 50, 99):
            self.assertTrue(is_contented(happiness, strength))

    def test_isolated_corner_occupant_is_happy(self):
        grid = grid_from_rows(
            "n.eee",
            "..eee",
            "eeeee",
            "eeeee",
            "eeeee",
        )
        self.assertEqual(evaluate(grid, 0, 0), 1.0)

    def test_vacant_cell_has_zero_happiness(self):
        grid = grid_from_rows(
            "n.eee",
            "..eee",
            "eeeee",
            "eeeee",
            "eeeee",
        )
        self.assertEqual(evaluate(grid, 0, 1), 0.0)

    def test_fraction_ignores_vacant_neighbors(self):
        # center n: 2 n, 2 e, 4 vacant neighbors
        grid = grid_from_rows(
            ".....",
            ".nn..",
            ".en..",
            ".e...",
            ".....",
        )
        self.assertEqual(evaluate(grid, 2, 2), 0.5)

    def test_edge_cell_fraction(self):
        # (0, 2) has 5 valid neighbors: 1 e, 4 n
        grid = grid_from_rows(
            "nneen",
            "nnnnn",
            "nnnnn",
            "nnnnn",
            "nnnnn",
        )
        self.assertEqual(evaluate(grid, 0, 2), 0.2)
        self.assertEqual(evaluate(grid, 0, 1), 4 / 5)

    def test_surrounded_by_other_style(self):
        grid = grid_from_rows(
            "nnnnn",
            "nnnnn",
            "nnenn",
            "nnnnn",
            "nnnnn",
        )
        self.assertEqual(evaluate(grid, 2, 2), 0.0)
        self.assertFalse(is_contented(0.0, 1))


class TestContentment(unittest.TestCase):

    def test_threshold_is_inclusive(self):
        self.assertTrue(is_contented(0.5, 50))
        self.assertFalse(is_contented(0.49, 50))
        self.assertTrue(is_contented(1.0, 99))

    def test_thirds(self):
        self.assertTrue(is_contented(1 / 3, 33))
        self.assertFalse(is_contented(1 / 3, 34))

    def test_map_matches_scalar(self):
        values = np.array([[0.0, 0.25, 0.5], [0.75, 1.0, 1 / 3]])
        expected = [[is_contented(v, 40) for v in row] for row in values]
        np.testing.assert_array_equal(contentment_map(values, 40), expected)


class TestHappinessMap(unittest.TestCase):

    def test_matches_evaluate_on_random_grids(self):
        for dimension, vacancy, endline, seed in [
            (5, 20, 60, 0), (7, 50, 50, 1), (15, 10, 30, 2),
            (12, 90, 75, 3), (39, 1, 99, 4),
        ]:
            grid = random_grid(dimension, vacancy, endline, seed)
            result = happiness_map(grid.cells)
            for row in range(dimension):
                for col in range(dimension):
                    self.assertEqual(result[row, col], evaluate(grid, row, col),
                                     f"cell ({row}, {col}) seed {seed}")

    def test_values_in_unit_interval(self):
        grid = random_grid(20, 35, 45, 11)
        result = happiness_map(grid.cells)
        self.assertTrue(np.all(result >= 0.0))
        self.assertTrue(np.all(result <= 1.0))
        self.assertTrue(np.all(result[grid.cells == CellValue.VACANT] == 0.0))

    def test_isolated_occupants(self):
        grid = grid_from_rows(
            "n....",
            ".....",
            "..e..",
            ".....",
            ".....",
        )
        result = happiness_map(grid.cells)
        self.assertEqual(result[0, 0], 1.0)
        self.assertEqual(result[2, 2], 1.0)
        self.assertEqual(result.sum(), 2.0)


if __name__ == '__main__':
    unittest.main()
