"""Path geometry: cell coordinates, mask overlap and segment crossing tests."""

from collections.abc import Iterable, Iterator, Sequence
from typing import TypeAlias

Point: TypeAlias = tuple[int, int]
Segment: TypeAlias = tuple[Point, Point]


def overlaps(mask_a: int, mask_b: int) -> bool:
    """Return whether two cell masks share at least one cell."""
    return mask_a & mask_b != 0


def mask_to_indices(mask: int) -> list[int]:
    """Return the indices of the set bits of `mask`, in ascending order."""
    indices: list[int] = []
    idx = 0
    while mask:
        if mask & 1:
            indices.append(idx)
        mask >>= 1
        idx += 1
    return indices


def to_coords(path: Iterable[int], width: int) -> list[Point]:
    """Convert 1D cell indices to (row, col) coordinates."""
    return [divmod(idx, width) for idx in path]


def segments(path: Sequence[int], width: int) -> Iterator[Segment]:
    """Yield the line segments joining consecutive cells of `path`."""
    coords = to_coords(path, width)
    yield from zip(coords, coords[1:])


def direction(p_i: Point, p_j: Point, p_k: Point) -> int:
    """Cross product of (p_k - p_i) and (p_j - p_i).

    The sign tells which side of the line through `p_i` and `p_j` the point `p_k` lies on;
    zero means the three points are collinear.
    """
    return (p_k[0] - p_i[0]) * (p_j[1] - p_i[1]) - (p_j[0] - p_i[0]) * (p_k[1] - p_i[1])


def segments_cross(seg_a: Segment, seg_b: Segment) -> bool:
    """Return whether two segments properly intersect.

    Both endpoints of each segment must lie strictly on opposite sides of the other segment.
    Touching or collinear configurations do not count as crossing.
    """
    p1, p2 = seg_a
    p3, p4 = seg_b
    d1 = direction(p3, p4, p1)
    d2 = direction(p3, p4, p2)
    d3 = direction(p1, p2, p3)
    d4 = direction(p1, p2, p4)
    return ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4))


def crosses(existing_path: Sequence[int], new_path: Sequence[int], width: int) -> bool:
    """Return whether any segment of `new_path` crosses any segment of `existing_path`.

    Args:
        existing_path: Cell indices of a path already on the board.
        new_path: Cell indices of the path being placed.
        width: Board width, used to convert indices to coordinates.
    """
    existing_segments = list(segments(existing_path, width))
    if not existing_segments:
        return False
    for new_seg in segments(new_path, width):
        for old_seg in existing_segments:
            if segments_cross(old_seg, new_seg):
                return True
    return False


def crosses_any(placed_paths: Iterable[Sequence[int]], new_path: Sequence[int], width: int) -> bool:
    """Return whether `new_path` crosses any of the already placed paths."""
    return any(crosses(path, new_path, width) for path in placed_paths)
