#Perfect maze generation with a randomized Kruskal's algorithm
#The grid starts fully connected, every adjacent pair of cells gets a random priority,
#and edges are accepted in priority order unless they would close a loop
#Then a depth first walk finds the one path from the entrance to the exit
#and the result is encoded as a (2*rows+1) x (2*cols+1) grid of symbols for renderers

#To run this code, open terminal, follow directories to where the files are then run "python3 maze_gen.py"
#To print a small maze with every generation step, run "python3 maze_gen.py --mode text --rows 5 --cols 5 --debug"

from __future__ import annotations

import argparse
import heapq
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple


#Neighbor slots, in the order the path search tries them
DIRS = {
    "W": (0, -1),
    "N": (-1, 0),
    "E": (0, 1),
    "S": (1, 0),
}

OPPOSITE = {"N": "S", "S": "N", "E": "W", "W": "E"}

DIRECTION_ORDER = tuple(DIRS)

DEFAULT_MAX_PRIORITY = 1000

CellKey = Tuple[int, int]
EdgeKey = Tuple[CellKey, CellKey]


class MazeError(Exception):
    pass


class InvalidDimensionsError(MazeError, ValueError):
    #Raised before any work is done when rows or cols is not a positive integer
    pass


class InternalConsistencyError(MazeError, RuntimeError):
    #The open edges and the neighbor links disagree, the maze is not a spanning tree
    pass


def within_bounds(rows: int, cols: int, row: int, col: int) -> bool:
    return 0 <= row < rows and 0 <= col < cols


def edge_key(a: CellKey, b: CellKey) -> EdgeKey:
    return tuple(sorted((a, b)))


def check_dimensions(rows, cols) -> None:
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidDimensionsError(f"{name} must be a positive integer, got {value!r}")


# Grid graph


@dataclass(eq=False)
class Cell:
    row: int
    col: int
    index: int
    neighbors: Dict[str, Optional["Cell"]] = field(
        default_factory=lambda: {direction: None for direction in DIRS},
        repr=False,
    )
    visited: bool = False
    on_path: bool = False
    joined: bool = False

    @property
    def key(self) -> CellKey:
        return (self.row, self.col)

    def linked_to(self, other: "Cell") -> bool:
        return any(neighbor is other for neighbor in self.neighbors.values())


class GridGraph:
    #Owns every cell of a rows x cols grid
    #Links are created once here and are only ever severed afterwards

    def __init__(self, rows: int, cols: int):
        check_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Cell]] = [
            [Cell(row, col, row * cols + col) for col in range(cols)] for row in range(rows)
        ]
        for cell in self:
            for direction, (dr, dc) in DIRS.items():
                if within_bounds(rows, cols, nr := cell.row + dr, nc := cell.col + dc):
                    cell.neighbors[direction] = self.cells[nr][nc]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __len__(self) -> int:
        return self.rows * self.cols

    def __contains__(self, cell) -> bool:
        return (
            isinstance(cell, Cell)
            and within_bounds(self.rows, self.cols, cell.row, cell.col)
            and self.cells[cell.row][cell.col] is cell
        )

    def cell(self, row: int, col: int) -> Cell:
        if not within_bounds(self.rows, self.cols, row, col):
            raise IndexError(f"cell ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return self.cells[row][col]

    def neighbors(self, cell: Cell) -> List[Cell]:
        return [
            neighbor
            for direction in DIRECTION_ORDER
            if (neighbor := cell.neighbors[direction]) is not None
        ]

    def sever(self, a: Cell, b: Cell) -> None:
        for direction, neighbor in a.neighbors.items():
            if neighbor is b:
                a.neighbors[direction] = None
                b.neighbors[OPPOSITE[direction]] = None

    def link_count(self) -> int:
        return sum(len(self.neighbors(cell)) for cell in self) // 2

    def links(self) -> Iterator[EdgeKey]:
        #Each surviving link once, as a canonical key
        for cell in self:
            for direction in ("E", "S"):
                neighbor = cell.neighbors[direction]
                if neighbor is not None:
                    yield edge_key(cell.key, neighbor.key)


def build_grid(rows: int, cols: int) -> GridGraph:
    return GridGraph(rows, cols)


# Union find


class DisjointSetForest:
    #Union find over the dense cell indices 0 .. size-1
    #Union by rank and path halving only make find faster, the sets come out the same

    def __init__(self, size: int):
        self.parent: List[int] = list(range(size))
        self.rank: List[int] = [0] * size
        self.set_count = size

    def find(self, node: int) -> int:
        parent = self.parent
        while parent[node] != node:
            parent[node] = parent[parent[node]]
            node = parent[node]
        return node

    def union(self, a: int, b: int) -> bool:
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1
        self.set_count -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def roots(self) -> List[int]:
        return [node for node, parent in enumerate(self.parent) if node == parent]


# Spanning tree


@dataclass
class Edge:
    a: CellKey
    b: CellKey
    priority: int
    order: int
    is_open: bool = False

    def key(self) -> EdgeKey:
        return edge_key(self.a, self.b)


@dataclass
class SpanningTree:
    open_edges: Dict[EdgeKey, Edge]
    accepted: List[EdgeKey]
    rejected: int
    forest: DisjointSetForest


StepHook = Callable[[GridGraph, Dict[EdgeKey, Edge]], None]


def candidate_edges(grid: GridGraph, rng, max_priority: int = DEFAULT_MAX_PRIORITY) -> List[Edge]:
    #East and south links only, so every adjacent pair shows up once
    edges = []
    for cell in grid:
        for direction in ("E", "S"):
            neighbor = cell.neighbors[direction]
            if neighbor is None:
                continue
            edges.append(Edge(cell.key, neighbor.key, rng.randrange(max_priority), len(edges)))
    return edges


def build_spanning_tree(
    grid: GridGraph,
    rng,
    max_priority: int = DEFAULT_MAX_PRIORITY,
    on_step: Optional[StepHook] = None,
) -> SpanningTree:
    #Turns a fully linked grid into a random spanning tree, in place
    #Edges are popped lowest priority first, ties go to the edge enumerated first
    #An edge joining two groups becomes a corridor, an edge inside one group becomes a wall
    #and its link is severed on both cells so the path search cannot walk through it
    if not isinstance(grid, GridGraph):
        raise TypeError(f"expected a GridGraph, got {type(grid).__name__}")
    if max_priority < 1:
        raise ValueError("max_priority must be at least 1")

    forest = DisjointSetForest(len(grid))
    heap: List[Tuple[int, int, Edge]] = [
        (edge.priority, edge.order, edge) for edge in candidate_edges(grid, rng, max_priority)
    ]
    heapq.heapify(heap)

    open_edges: Dict[EdgeKey, Edge] = {}
    accepted: List[EdgeKey] = []
    rejected = 0

    if on_step is not None:
        on_step(grid, open_edges)

    while heap:
        _, _, edge = heapq.heappop(heap)
        a = grid.cell(*edge.a)
        b = grid.cell(*edge.b)
        if forest.union(a.index, b.index):
            edge.is_open = True
            key = edge.key()
            open_edges[key] = edge
            accepted.append(key)
            a.joined = True
            b.joined = True
            if on_step is not None:
                on_step(grid, open_edges)
        else:
            grid.sever(a, b)
            rejected += 1

    for cell in grid:
        cell.joined = False

    return SpanningTree(open_edges, accepted, rejected, forest)


# Path search


def find_path(grid: GridGraph, entrance: Cell, exit: Cell) -> List[Cell]:
    #Depth first walk from the entrance over surviving links
    #Frames hold (cell, index of the next direction to try) instead of recursing,
    #so a long corridor on a big grid cannot run out of stack
    if entrance not in grid or exit not in grid:
        raise ValueError("entrance and exit must be cells of this grid")

    for cell in grid:
        cell.visited = False
        cell.on_path = False

    entrance.visited = True
    stack: List[List] = [[entrance, 0]]
    while stack:
        frame = stack[-1]
        cell, next_dir = frame
        if cell is exit:
            path = [path_cell for path_cell, _ in stack]
            for path_cell in path:
                path_cell.on_path = True
            return path
        if next_dir == len(DIRECTION_ORDER):
            stack.pop()
            continue
        frame[1] = next_dir + 1
        neighbor = cell.neighbors[DIRECTION_ORDER[next_dir]]
        if neighbor is not None and not neighbor.visited:
            neighbor.visited = True
            stack.append([neighbor, 0])

    raise InternalConsistencyError(
        f"no path from {entrance.key} to {exit.key}, the maze is not connected"
    )


# Symbol grid


class CellKind(Enum):
    WALL = "wall"
    OPEN = "open"
    PATH = "path"
    ENTRANCE = "entrance"
    EXIT = "exit"
    JOINED = "joined"


SymbolGrid = List[List[CellKind]]

TEXT_SYMBOLS = {
    CellKind.WALL: "X ",
    CellKind.OPEN: "  ",
    CellKind.PATH: "@ ",
    CellKind.ENTRANCE: "  ",
    CellKind.EXIT: "  ",
    CellKind.JOINED: "V ",
}


def _gap_cells(grid: GridGraph, i: int, j: int) -> Tuple[Cell, Cell]:
    if i % 2 == 1:
        row = (i - 1) // 2
        return grid.cells[row][(j - 1) // 2], grid.cells[row][(j + 1) // 2]
    col = (j - 1) // 2
    return grid.cells[(i - 1) // 2][col], grid.cells[(i + 1) // 2][col]


def _encode(
    grid: GridGraph,
    open_edges: Dict[EdgeKey, Edge],
    entrance: Cell,
    exit: Cell,
    strict: bool,
) -> SymbolGrid:
    height = 2 * grid.rows + 1
    width = 2 * grid.cols + 1
    entrance_col = 2 * entrance.col + 1
    exit_col = 2 * exit.col + 1
    symbols: SymbolGrid = []
    for i in range(height):
        line = []
        for j in range(width):
            if i == 0:
                kind = CellKind.ENTRANCE if j == entrance_col else CellKind.WALL
            elif i == height - 1:
                kind = CellKind.EXIT if j == exit_col else CellKind.WALL
            elif (i % 2 == 0 and j % 2 == 0) or j == 0 or j == width - 1:
                kind = CellKind.WALL
            elif i % 2 == 1 and j % 2 == 1:
                cell = grid.cells[(i - 1) // 2][(j - 1) // 2]
                if cell.on_path:
                    kind = CellKind.PATH
                elif cell.joined and not strict:
                    kind = CellKind.JOINED
                else:
                    kind = CellKind.OPEN
            else:
                a, b = _gap_cells(grid, i, j)
                is_open = edge_key(a.key, b.key) in open_edges
                if strict and is_open != a.linked_to(b):
                    raise InternalConsistencyError(
                        f"open edges and neighbor links disagree between {a.key} and {b.key}"
                    )
                if not is_open:
                    kind = CellKind.WALL
                elif a.on_path and b.on_path:
                    kind = CellKind.PATH
                else:
                    kind = CellKind.OPEN
            line.append(kind)
        symbols.append(line)
    return symbols


def encode_grid(
    grid: GridGraph,
    open_edges: Dict[EdgeKey, Edge],
    entrance: Cell,
    exit: Cell,
) -> SymbolGrid:
    #Cell centers sit at odd (i, j), the gaps between two cells are walls unless an open edge joins them
    #Raises InternalConsistencyError when a gap's open edge and the link between its cells disagree
    return _encode(grid, open_edges, entrance, exit, strict=True)


def snapshot_grid(
    grid: GridGraph,
    open_edges: Dict[EdgeKey, Edge],
    entrance: Cell,
    exit: Cell,
) -> SymbolGrid:
    #Mid-construction view, links for unprocessed edges are still present so nothing is checked
    return _encode(grid, open_edges, entrance, exit, strict=False)


def to_text(symbols: SymbolGrid) -> str:
    return "\n".join("".join(TEXT_SYMBOLS[kind] for kind in line) for line in symbols) + "\n"


# Maze aggregate


class Maze:
    #A generated and solved maze
    #Generation runs entirely in the constructor; the path is found on first request

    def __init__(
        self,
        rows: int,
        cols: int,
        rng_seed: Optional[int] = None,
        debug: bool = False,
        on_snapshot: Optional[Callable[[SymbolGrid], None]] = None,
        max_priority: int = DEFAULT_MAX_PRIORITY,
    ):
        check_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self.seed = rng_seed
        self.debug = debug
        self.snapshots: List[SymbolGrid] = []
        self._on_snapshot = on_snapshot

        self.grid = build_grid(rows, cols)
        self.entrance = self.grid.cell(0, 0)
        self.exit = self.grid.cell(rows - 1, cols - 1)

        on_step = self._record_step if (debug or on_snapshot is not None) else None
        tree = build_spanning_tree(self.grid, random.Random(rng_seed), max_priority, on_step)
        self.open_edges = tree.open_edges
        self.forest = tree.forest
        self._path: Optional[List[Cell]] = None

    def _record_step(self, grid: GridGraph, open_edges: Dict[EdgeKey, Edge]) -> None:
        snapshot = snapshot_grid(grid, open_edges, self.entrance, self.exit)
        if self.debug:
            self.snapshots.append(snapshot)
        if self._on_snapshot is not None:
            self._on_snapshot(snapshot)

    def solution_path(self) -> List[Cell]:
        if self._path is None:
            self._path = find_path(self.grid, self.entrance, self.exit)
        return list(self._path)

    def solution_keys(self) -> List[CellKey]:
        return [cell.key for cell in self.solution_path()]

    def render(self) -> SymbolGrid:
        #Marks come from the cached path, a find_path run elsewhere on the grid may have moved them
        on_path = {cell.index for cell in self.solution_path()}
        for cell in self.grid:
            cell.on_path = cell.index in on_path
        return encode_grid(self.grid, self.open_edges, self.entrance, self.exit)

    def to_text(self) -> str:
        return to_text(self.render())

    def corridor_edges(self) -> List[EdgeKey]:
        return list(self.open_edges)

    def cell_neighbors(self, row: int, col: int) -> List[CellKey]:
        return [neighbor.key for neighbor in self.grid.neighbors(self.grid.cell(row, col))]


def create_maze(
    rows: int,
    cols: int,
    rng_seed: Optional[int] = None,
    debug: bool = False,
    on_snapshot: Optional[Callable[[SymbolGrid], None]] = None,
    max_priority: int = DEFAULT_MAX_PRIORITY,
) -> Maze:
    return Maze(rows, cols, rng_seed, debug, on_snapshot, max_priority)


#CLI + visualization

@dataclass
class MazeConfig:
    rows: int = 10
    cols: int = 14
    seed: Optional[int] = None
    debug: bool = False
    max_priority: int = DEFAULT_MAX_PRIORITY


def build_maze_config(args) -> MazeConfig:
    seed = args.seed if args.seed is not None else random.randint(0, 1_000_000_000)
    return MazeConfig(
        rows=args.rows,
        cols=args.cols,
        seed=seed,
        debug=args.debug,
        max_priority=args.max_priority,
    )


def make_maze(config: MazeConfig) -> Maze:
    return create_maze(
        config.rows,
        config.cols,
        rng_seed=config.seed,
        debug=config.debug,
        max_priority=config.max_priority,
    )


def describe(maze: Maze) -> str:
    return (
        f"maze {maze.rows}x{maze.cols} | seed: {maze.seed} | "
        f"open edges: {len(maze.open_edges)} | path length: {len(maze.solution_path())}"
    )


def run_text_mode(maze: Maze) -> None:
    for step, snapshot in enumerate(maze.snapshots):
        print(f"Step {step}/{len(maze.snapshots) - 1}")
        print(to_text(snapshot))
    print(maze.to_text())
    print(describe(maze))


def run_visual_mode(maze: Maze, tile_size: int) -> None:
    from visualizer import MazeVisualizer

    viewer = MazeVisualizer(
        symbols=maze.render(),
        snapshots=maze.snapshots,
        tile_size=tile_size,
        title_suffix=f" - {maze.rows}x{maze.cols} seed {maze.seed}",
        stats=[
            f"size: {maze.rows}x{maze.cols}",
            f"seed: {maze.seed}",
            f"path length: {len(maze.solution_path())}",
        ],
    )
    viewer.run()


def prompt_for_mode():
    response = input("Run visualizer? (y/n): ").strip().lower()
    return "visual" if response.startswith("y") else "text"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Perfect maze generator (randomized Kruskal) with path finding.")
    parser.add_argument("--mode", choices=["visual", "text"], help="Choose 'visual' for the pygame viewer or 'text' for console output.")
    parser.add_argument("--rows", type=int, default=10, help="Maze height in cells.")
    parser.add_argument("--cols", type=int, default=14, help="Maze width in cells.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for edge priorities (default: random).")
    parser.add_argument("--debug", action="store_true", help="Show the maze after every accepted edge.")
    parser.add_argument("--max-priority", type=int, default=DEFAULT_MAX_PRIORITY, help="Edge priorities are drawn from [0, max-priority).")
    parser.add_argument("--tile-size", type=int, default=24, help="Base tile size for visual mode; auto-scales to fit the screen.")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = build_maze_config(args)
    try:
        maze = make_maze(config)
    except ValueError as exc:
        parser.error(str(exc))
    mode = args.mode or prompt_for_mode()
    if mode == "visual":
        run_visual_mode(maze, args.tile_size)
    else:
        run_text_mode(maze)


if __name__ == "__main__":
    main()
