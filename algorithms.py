from config import MIN_SEGMENT_SIZE

import math

def count_segments(path_length: int, max_segment_size: int) -> float:
    # One point is shared with the neighbouring segment, so every segment
    # only adds max_segment_size - 1 new points
    return path_length / (max_segment_size - 1)

def plan_lengths(path_length: int, max_segment_size: int) -> list[int]:
    """Compute the length of every edit segment of a path.

    Segments are as close to max_segment_size as possible. The shortfall of
    the last segment is spread backwards over the other segments so that no
    segment ends up disproportionately short.

    For a plan of n > 1 segments, sum(lengths) - n == path_length: each
    segment's last point is the next segment's first point, and the last
    segment is closed with the first point of the path.
    """
    if path_length < 0:
        raise ValueError(f"path_length must be >= 0, got {path_length}")
    if max_segment_size < MIN_SEGMENT_SIZE:
        raise ValueError(f"max_segment_size must be >= {MIN_SEGMENT_SIZE}, got {max_segment_size}")

    # Whole path fits into a single segment
    if max_segment_size >= path_length:
        return [path_length]

    # divmod gives floor(raw count) and the fractional part scaled by
    # (max_segment_size - 1) without floating point drift
    whole, leftover = divmod(path_length, max_segment_size - 1)
    lengths = [max_segment_size] * whole

    if leftover:
        # ceil(max_segment_size * remainder), a segment can't have 1 point
        last_length = max(2, -(-max_segment_size * leftover // (max_segment_size - 1)))
        lengths.append(last_length)

        difference = max_segment_size - last_length - 1
        i = len(lengths) - 2
        last = len(lengths) - 1
        while difference > 0:
            # Wrap back to the end of the list
            if i < 0:
                i = len(lengths) - 1
            lengths[i] -= 1
            lengths[last] += 1
            difference -= 1
            i -= 1

    return lengths

def distance(p0, p1) -> float:
    return math.hypot(p1.x() - p0.x(), p1.y() - p0.y())

def nearest_edge(points, p) -> int:
    """Index i of the edge (points[i], points[i + 1]) closest to p.

    Returns -1 when there are fewer than two points.
    """
    best_index = -1
    best_distance = math.inf
    for i in range(len(points) - 1):
        a, b = points[i], points[i + 1]
        abx, aby = b.x() - a.x(), b.y() - a.y()
        length_sq = abx * abx + aby * aby
        if length_sq < 1e-12:
            d = distance(a, p)
        else:
            # Project p onto the edge and clamp to its end points
            t = ((p.x() - a.x()) * abx + (p.y() - a.y()) * aby) / length_sq
            t = max(0.0, min(1.0, t))
            d = math.hypot(a.x() + t * abx - p.x(), a.y() + t * aby - p.y())
        if d < best_distance:
            best_distance = d
            best_index = i
    return best_index
