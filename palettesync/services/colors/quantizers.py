"""
Color quantizers.

Three interchangeable clustering algorithms mapping a set of RGB color points
and a target count k to a list of weighted colors:

- kmeans: k-means++ style distance-weighted seeding followed by a fixed
  number of Lloyd iterations
- kmeansplus: same algorithm, kept as a separate selectable name
- median: recursive median-cut partitioning, fully deterministic

Randomness only comes from the numpy Generator passed in, so a fixed seed
gives a reproducible palette.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import numpy as np
from loguru import logger

from ...errors import ConfigurationError, EmptySampleError, InvalidInputError
from .colorspace import ColorRGB

KMEANS_ITERATIONS = 15


@dataclass(frozen=True)
class WeightedColor:
    """A cluster's representative color and the number of points it summarizes."""
    rgb: ColorRGB
    count: int


Quantizer = Callable[..., List[WeightedColor]]


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source used for centroid seeding."""
    return np.random.default_rng(seed)


def _as_points(points) -> np.ndarray:
    arr = np.asarray(points)
    if arr.size == 0:
        raise EmptySampleError()
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidInputError(f"Color points must have shape (N, 3), got {arr.shape}")
    if arr.dtype.kind not in "iu":
        if arr.dtype.kind != "f" or not np.array_equal(arr, np.floor(arr)):
            raise InvalidInputError(f"Color points must hold whole channel values, got dtype {arr.dtype}")
    if arr.min() < 0 or arr.max() > 255:
        raise InvalidInputError("Color point channels must be within 0..255")
    return arr.astype(np.int64)


def _check_k(k: int) -> None:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
        raise InvalidInputError(f"Palette size k must be an integer >= 1, got {k!r}")


def _rounded_mean(points: np.ndarray) -> ColorRGB:
    mean = np.floor(points.sum(axis=0) / len(points) + 0.5).astype(np.int64)
    return (int(mean[0]), int(mean[1]), int(mean[2]))


def _squared_distances(points: np.ndarray, centroid: np.ndarray) -> np.ndarray:
    diff = points - centroid
    return (diff * diff).sum(axis=1)


def seed_centroids(points: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """
    Pick k initial centroids from the points.

    The first is uniform at random; each following one is drawn with
    probability proportional to the squared distance from a point to its
    nearest already-chosen centroid.

    Returns:
        (k, 3) int64 array; duplicates are possible when points are few
    """
    n = len(points)
    centroids = [points[int(rng.integers(n))]]
    nearest = _squared_distances(points, centroids[0])

    while len(centroids) < k:
        cumulative = np.cumsum(nearest)
        target = rng.random() * float(cumulative[-1])
        # first index whose running sum reaches the target; 0 when all distances are 0
        index = min(int(np.searchsorted(cumulative, target, side="left")), n - 1)
        centroid = points[index]
        centroids.append(centroid)
        nearest = np.minimum(nearest, _squared_distances(points, centroid))

    return np.array(centroids, dtype=np.int64)


def assign_labels(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Index of the nearest centroid per point; ties go to the lowest index.

    Walks the centroids one at a time with a running minimum, so memory
    stays proportional to the number of points rather than points * k.
    """
    labels = np.zeros(len(points), dtype=np.int64)
    best = _squared_distances(points, centroids[0])
    for index in range(1, len(centroids)):
        distances = _squared_distances(points, centroids[index])
        closer = distances < best
        labels[closer] = index
        best = np.where(closer, distances, best)
    return labels


def kmeans(points, k: int, rng: Optional[np.random.Generator] = None,
           iterations: int = KMEANS_ITERATIONS) -> List[WeightedColor]:
    """
    Cluster color points with k-means.

    Args:
        points: (N, 3) RGB points
        k: Number of clusters, >= 1
        rng: Random source for seeding (fresh unseeded generator if None)
        iterations: Number of Lloyd iterations

    Returns:
        One WeightedColor per centroid in centroid order. Clusters that end
        up empty keep their last centroid and report a count of 0.

    Raises:
        InvalidInputError: k < 1 or malformed points
        EmptySampleError: No points
    """
    pts = _as_points(points)
    _check_k(k)
    rng = rng if rng is not None else make_rng()

    start_time = time.time()
    centroids = seed_centroids(pts, k, rng)
    labels = np.zeros(len(pts), dtype=np.int64)

    for iteration in range(iterations):
        new_labels = assign_labels(pts, centroids)
        moved = int(np.count_nonzero(new_labels != labels))
        labels = new_labels

        counts = np.bincount(labels, minlength=k)
        sums = np.stack(
            [np.bincount(labels, weights=pts[:, c], minlength=k) for c in range(3)],
            axis=1,
        )
        filled = counts > 0
        centroids[filled] = np.floor(sums[filled] / counts[filled, None] + 0.5).astype(np.int64)

        logger.debug(f"k-means iteration {iteration + 1}/{iterations}: {moved} points reassigned")

    counts = np.bincount(labels, minlength=k)
    result = [
        WeightedColor((int(c[0]), int(c[1]), int(c[2])), int(n))
        for c, n in zip(centroids, counts)
    ]

    logger.info(f"k-means finished: k={k}, {len(pts)} points, "
                f"{int(np.count_nonzero(counts == 0))} empty clusters, "
                f"{(time.time() - start_time) * 1000:.1f}ms")
    return result


def kmeans_plus(points, k: int, rng: Optional[np.random.Generator] = None) -> List[WeightedColor]:
    """
    The 'kmeansplus' algorithm option.

    kmeans already seeds with distance-weighted sampling, so this option
    runs the same routine.
    """
    return kmeans(points, k, rng=rng)


def median_cut(points, k: int, rng: Optional[np.random.Generator] = None) -> List[WeightedColor]:
    """
    Quantize by recursive median cut.

    While there are fewer than k boxes, the first box holding more than one
    point is split along its widest channel (ties go to R, then G, then B):
    its points are stably sorted on that channel and cut at floor(n/2).

    Args:
        points: (N, 3) RGB points
        k: Maximum number of boxes, >= 1
        rng: Unused; accepted so all quantizers share one signature

    Returns:
        One WeightedColor per box: rounded mean color and box size
    """
    pts = _as_points(points)
    _check_k(k)

    boxes = [pts]
    while len(boxes) < k:
        index = next((i for i, box in enumerate(boxes) if len(box) > 1), None)
        if index is None:
            logger.debug(f"median cut stopped early at {len(boxes)} boxes: nothing left to split")
            break

        box = boxes[index]
        ranges = box.max(axis=0) - box.min(axis=0)
        channel = int(np.argmax(ranges))
        ordered = box[np.argsort(box[:, channel], kind="stable")]
        median = len(ordered) // 2
        boxes[index:index + 1] = [ordered[:median], ordered[median:]]

    assert all(len(box) > 0 for box in boxes)
    logger.info(f"median cut finished: k={k}, {len(pts)} points, {len(boxes)} boxes")
    return [WeightedColor(_rounded_mean(box), len(box)) for box in boxes]


QUANTIZERS: Dict[str, Quantizer] = {
    "kmeans": kmeans,
    "kmeansplus": kmeans_plus,
    "median": median_cut,
}

ALGORITHMS = tuple(QUANTIZERS)


def get_quantizer(name: str) -> Quantizer:
    """
    Look up a quantizer by algorithm name.

    Raises:
        ConfigurationError: Unknown algorithm name
    """
    try:
        return QUANTIZERS[name]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"Unknown quantization algorithm: {name!r}",
            f"Choose one of: {', '.join(ALGORITHMS)}"
        )


def quantize(points, k: int, algorithm: str = "kmeans",
             rng: Optional[np.random.Generator] = None) -> List[WeightedColor]:
    """Run the named quantizer over the points."""
    return get_quantizer(algorithm)(points, k, rng=rng)
