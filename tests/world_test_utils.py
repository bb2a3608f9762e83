from collections import deque

from island.worldgen.tiles import BACKGROUND, UNUSED, WALKABLE

VOID = {UNUSED, BACKGROUND}


def kinds(world):
    """Column-major grid of kind strings, handy for plain comparisons."""
    return [[t.kind for t in column] for column in world.tiles]


def first_room_floor(world):
    """Return an interior floor cell of the first room, or None when no room survived."""
    if not world.rooms:
        return None
    r0 = world.rooms[0]
    return (r0.left + 1, r0.bottom + 1)


def bfs_reachable(grid, start):
    """Return set of (x,y) walkable reachable tiles from start, 4-way."""
    if start is None:
        return set()
    w = len(grid)
    h = len(grid[0])
    sx, sy = start
    if not (0 <= sx < w and 0 <= sy < h):
        return set()
    if grid[sx][sy] not in WALKABLE:
        return set()
    q = deque([start])
    vis = {start}
    while q:
        x, y = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and (nx, ny) not in vis:
                if grid[nx][ny] in WALKABLE:
                    vis.add((nx, ny))
                    q.append((nx, ny))
    return vis


def iter_walkable(grid):
    w = len(grid)
    h = len(grid[0])
    for x in range(w):
        for y in range(h):
            if grid[x][y] in WALKABLE:
                yield x, y


def walkable_neighbors(grid, x, y):
    w = len(grid)
    h = len(grid[0])
    count = 0
    for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        nx, ny = x + dx, y + dy
        if 0 <= nx < w and 0 <= ny < h and grid[nx][ny] in WALKABLE:
            count += 1
    return count


def exposed_cells(grid):
    """Walkable cells sharing an edge with water or the off-island void."""
    w = len(grid)
    h = len(grid[0])
    out = []
    for x, y in iter_walkable(grid):
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if not (0 <= nx < w and 0 <= ny < h) or grid[nx][ny] in VOID:
                out.append((x, y))
                break
    return out
