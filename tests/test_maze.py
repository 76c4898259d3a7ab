"""
Tests for the Maze aggregate and create_maze.
"""

import itertools

import pytest

from maze_gen import CellKind, InvalidDimensionsError, Maze, create_maze, find_path, to_text


SIZES = [(1, 1), (1, 6), (6, 1), (2, 2), (5, 5), (8, 13), (20, 3)]


@pytest.mark.parametrize("rows, cols", SIZES)
def test_is_a_spanning_tree(rows, cols, reach):
    maze = create_maze(rows, cols, rng_seed=rows * cols)
    assert len(maze.corridor_edges()) == rows * cols - 1
    assert maze.forest.set_count == 1
    cells = set(itertools.product(range(rows), range(cols)))
    assert reach(lambda cell: maze.cell_neighbors(*cell), (0, 0)) == cells


@pytest.mark.parametrize("rows, cols", SIZES)
def test_solution_path(rows, cols):
    maze = create_maze(rows, cols, rng_seed=7)
    path = maze.solution_keys()
    assert path[0] == (0, 0)
    assert path[-1] == (rows - 1, cols - 1)
    assert len(set(path)) == len(path)
    corridors = set(maze.corridor_edges())
    for a, b in zip(path, path[1:]):
        assert tuple(sorted((a, b))) in corridors


def test_no_alternate_route(reach):
    maze = create_maze(9, 11, rng_seed=123)
    path = maze.solution_keys()
    for a, b in zip(path, path[1:]):
        seen = reach(lambda cell: maze.cell_neighbors(*cell), (0, 0), forbidden_edge=(a, b))
        assert (8, 10) not in seen


def test_determinism():
    first = create_maze(15, 15, rng_seed=2024)
    second = create_maze(15, 15, rng_seed=2024)
    assert first.corridor_edges() == second.corridor_edges()
    assert first.solution_keys() == second.solution_keys()
    assert first.render() == second.render()


def test_single_cell():
    maze = create_maze(1, 1, rng_seed=0)
    assert maze.solution_keys() == [(0, 0)]
    assert maze.render() == [
        [CellKind.WALL, CellKind.ENTRANCE, CellKind.WALL],
        [CellKind.WALL, CellKind.PATH, CellKind.WALL],
        [CellKind.WALL, CellKind.EXIT, CellKind.WALL],
    ]


def test_single_row_is_one_corridor():
    maze = create_maze(1, 8, rng_seed=3)
    assert set(maze.corridor_edges()) == {((0, c), (0, c + 1)) for c in range(7)}
    assert maze.solution_keys() == [(0, c) for c in range(8)]
    assert maze.render()[1] == [CellKind.WALL] + [CellKind.PATH] * 15 + [CellKind.WALL]


def test_single_column_is_one_corridor():
    maze = create_maze(6, 1, rng_seed=3)
    assert set(maze.corridor_edges()) == {((r, 0), (r + 1, 0)) for r in range(5)}
    assert maze.solution_keys() == [(r, 0) for r in range(6)]


@pytest.mark.parametrize("rows, cols", [(0, 1), (1, 0), (-2, 4)])
def test_invalid_dimensions(rows, cols):
    with pytest.raises(InvalidDimensionsError):
        create_maze(rows, cols)


def test_entrance_and_exit():
    maze = create_maze(4, 7, rng_seed=1)
    assert maze.entrance.key == (0, 0)
    assert maze.exit.key == (3, 6)
    assert isinstance(maze, Maze)


def test_solution_path_returns_copies():
    maze = create_maze(3, 3, rng_seed=1)
    path = maze.solution_path()
    path.clear()
    assert len(maze.solution_path()) >= 5


def test_debug_snapshots():
    maze = create_maze(4, 5, rng_seed=8, debug=True)
    assert len(maze.snapshots) == 20
    first, last = maze.snapshots[0], maze.snapshots[-1]
    assert CellKind.JOINED not in itertools.chain.from_iterable(first)
    centers = [last[i][j] for i in range(1, 9, 2) for j in range(1, 11, 2)]
    assert centers == [CellKind.JOINED] * 20
    assert all(len(s) == 9 and len(s[0]) == 11 for s in maze.snapshots)


def test_no_snapshots_without_debug():
    maze = create_maze(4, 5, rng_seed=8)
    assert maze.snapshots == []


def test_snapshot_callback():
    received = []
    maze = create_maze(3, 3, rng_seed=4, on_snapshot=received.append)
    assert len(received) == 9
    assert maze.snapshots == []
    opened = [
        sum(kind != CellKind.WALL for i, line in enumerate(s) for j, kind in enumerate(line)
            if 0 < i < 6 and 0 < j < 6 and (i + j) % 2 == 1)
        for s in received
    ]
    assert opened == list(range(9))


def test_render_marks_solution_in_text():
    maze = create_maze(5, 5, rng_seed=99)
    text = maze.to_text()
    assert text == to_text(maze.render())
    assert text.count("@") == 2 * len(maze.solution_path()) - 1


def test_render_ignores_outside_searches():
    maze = create_maze(5, 5, rng_seed=31)
    before = maze.render()
    path = maze.solution_keys()
    find_path(maze.grid, maze.grid.cell(0, 4), maze.grid.cell(4, 0))
    assert maze.render() == before
    assert maze.solution_keys() == path
    assert {cell.key for cell in maze.grid if cell.on_path} == set(path)


def test_tree_bookkeeping_is_not_duplicated_on_the_maze():
    maze = create_maze(2, 2, rng_seed=0)
    assert not hasattr(maze, "accepted")
    assert not hasattr(maze.forest, "__len__")
