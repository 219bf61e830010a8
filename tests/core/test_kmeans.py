"""
Tests for kmeans module.
"""
import numpy as np
import pytest

from unit_histogram.config import KMEANS_MAX_ITERATIONS
from unit_histogram.core.exceptions import (
    ArithmeticDegenerateError,
    DegenerateInputError,
    InsufficientDataError,
    InvalidClusterCountError,
    InvalidConfigurationError,
)
from unit_histogram.core.histogram import Histogram
from unit_histogram.core.kmeans import (
    SMALLEST_DOUBLE,
    KMeansConfig,
    KMeansResult,
    approximately,
    break_tie,
    compute_kmeans,
    index_of_nearest_non_empty,
    initial_group_means,
    mean_for_group,
    nearest_group_index,
    update_groups,
)


def _three_peak_histogram():
    """Ten bins with data at 1, 5 and 8."""
    counts = [0] * 10
    counts[1] = 4
    counts[5] = 2
    counts[8] = 6
    return Histogram(counts)


def test_kmeans_config_defaults():
    """Test KMeansConfig default values."""
    config = KMeansConfig()

    assert config.k == 2
    assert config.max_iterations == KMEANS_MAX_ITERATIONS == 20
    assert config.enable_debug is False


@pytest.mark.parametrize("k", [0, -1, 1.5, True])
def test_kmeans_config_invalid_k(k):
    """Test KMeansConfig with invalid k."""
    with pytest.raises(InvalidClusterCountError):
        KMeansConfig(k=k)


@pytest.mark.parametrize("max_iterations", [0, 21])
def test_kmeans_config_invalid_max_iterations(max_iterations):
    """Test KMeansConfig with an iteration cap outside [1, 20]."""
    with pytest.raises(InvalidConfigurationError, match="max_iterations"):
        KMeansConfig(k=2, max_iterations=max_iterations)


def test_smallest_double():
    """Test SMALLEST_DOUBLE is the smallest positive subnormal."""
    assert SMALLEST_DOUBLE > 0
    assert SMALLEST_DOUBLE / 2 == 0
    assert SMALLEST_DOUBLE == np.nextafter(0.0, 1.0)


def test_approximately():
    """Test approximately only absorbs floating-point noise."""
    assert approximately(0.5, 0.5)
    assert approximately(0.0, 0.0)
    assert approximately(0.0, SMALLEST_DOUBLE * 4)
    assert not approximately(0.0, SMALLEST_DOUBLE * 8)
    assert not approximately(0.5, np.nextafter(0.5, 1.0))
    assert not approximately(0.25, 0.26)


def test_index_of_nearest_non_empty_at_start():
    """Test the start bin itself is returned when non-empty."""
    counts = np.array([0, 0, 3, 0, 0])

    assert index_of_nearest_non_empty(counts, 2) == 2


def test_index_of_nearest_non_empty_prefers_lower():
    """Test the lower bin wins at equal distance."""
    counts = np.array([0, 1, 0, 1, 0])

    assert index_of_nearest_non_empty(counts, 2) == 1


def test_index_of_nearest_non_empty_searches_both_ways():
    """Test the search reaches either end of the bins."""
    assert index_of_nearest_non_empty(np.array([0, 0, 0, 1]), 0) == 3
    assert index_of_nearest_non_empty(np.array([1, 0, 0, 0]), 3) == 0
    assert index_of_nearest_non_empty(np.array([0, 0, 0, 0, 0, 2, 0]), 1) == 5


def test_index_of_nearest_non_empty_all_empty():
    """Test None is returned when no bin holds data."""
    assert index_of_nearest_non_empty(np.zeros(6, dtype=np.int64), 3) is None


def test_initial_group_means():
    """Test seeds come from the middle of each slice of the bins."""
    histogram = _three_peak_histogram()
    counts = np.array(histogram.data)
    values = histogram.bin_values()

    means = initial_group_means(counts, values, 3)

    # interval = 3, starts at 1, 4 and 7
    assert means.tolist() == [values[1], values[5], values[8]]


def test_initial_group_means_no_data():
    """Test seeding fails loudly on an empty histogram."""
    counts = np.zeros(5, dtype=np.int64)
    values = np.linspace(0.0, 1.0, 5)

    with pytest.raises(DegenerateInputError, match="no data"):
        initial_group_means(counts, values, 2)


@pytest.mark.parametrize(
    "tied, expected",
    [
        ([3], 3),
        ([0, 1], 0),
        ([0, 2], 2),
        ([1, 2, 3], 2),
        ([1, 3], 1),
        ([0, 1, 2, 3, 4], 4),
    ],
)
def test_break_tie(tied, expected):
    """Test the tie policy: highest even index, else lowest index."""
    assert break_tie(tied) == expected


def test_nearest_group_index():
    """Test the closest mean wins."""
    means = np.array([0.0, 0.5, 1.0])

    assert nearest_group_index(0.1, means) == 0
    assert nearest_group_index(0.4, means) == 1
    assert nearest_group_index(0.9, means) == 2


def test_nearest_group_index_ties():
    """Test exact ties follow the even-index policy."""
    assert nearest_group_index(0.5, np.array([0.25, 0.75])) == 0
    assert nearest_group_index(0.5, np.array([0.75, 0.25])) == 0
    assert nearest_group_index(0.5, np.array([0.0, 0.25, 0.75, 1.0])) == 2
    assert nearest_group_index(0.5, np.array([0.25, 0.75, 0.25])) == 2


def test_update_groups():
    """Test every bin gets the index of its nearest mean."""
    values = np.linspace(0.0, 1.0, 5)
    means = np.array([0.25, 1.0])

    assignments = update_groups(values, means)

    assert assignments.tolist() == [0, 0, 0, 1, 1]


def test_mean_for_group_weighted():
    """Test the group mean is weighted by counts."""
    counts = np.array([0, 3, 0, 1, 5])
    values = np.linspace(0.0, 1.0, 5)
    assignments = np.array([0, 0, 0, 1, 1])

    assert mean_for_group(counts, values, assignments, 0, 0.9) == pytest.approx(0.25)
    assert mean_for_group(counts, values, assignments, 1, 0.9) == pytest.approx((0.75 + 5.0) / 6)


def test_mean_for_group_empty_keeps_default():
    """Test a group with no weight keeps its previous mean."""
    counts = np.array([0, 3, 0, 0, 5])
    values = np.linspace(0.0, 1.0, 5)
    assignments = np.array([1, 0, 1, 1, 0])

    assert mean_for_group(counts, values, assignments, 1, 0.42) == 0.42
    assert mean_for_group(counts, values, assignments, 2, 0.7) == 0.7


def test_compute_kmeans_two_groups():
    """Test the two-group scenario converges near 0.25 and 1.0."""
    result = compute_kmeans(Histogram([0, 3, 0, 0, 5]), KMeansConfig(k=2))

    assert isinstance(result, KMeansResult)
    assert result.means == pytest.approx([0.25, 1.0])
    assert result.assignments.tolist() == [0, 0, 0, 1, 1]
    assert result.converged is True
    assert result.iterations <= KMEANS_MAX_ITERATIONS


def test_compute_kmeans_three_groups():
    """Test three separated peaks give one group each."""
    result = compute_kmeans(_three_peak_histogram(), KMeansConfig(k=3))

    assert result.means == pytest.approx([1 / 9, 5 / 9, 8 / 9])
    assert result.converged


def test_compute_kmeans_default_config():
    """Test compute_kmeans without a config uses k=2."""
    result = compute_kmeans(Histogram([0, 3, 0, 0, 5]))

    assert len(result.means) == 2


def test_compute_kmeans_single_cluster():
    """Test k=1 gives the weighted mean of all bins."""
    result = compute_kmeans(Histogram([0, 2, 0, 2, 0]), KMeansConfig(k=1))

    assert result.means == pytest.approx([0.5])


def test_compute_kmeans_iteration_cap():
    """Test the loop stops at max_iterations."""
    counts = [5, 0, 0, 0, 0, 0, 0, 0, 1, 1]

    capped = compute_kmeans(Histogram(counts), KMeansConfig(k=2, max_iterations=1))
    assert capped.iterations == 1
    assert capped.converged is False
    assert capped.means == pytest.approx([0.0, 17 / 18])

    full = compute_kmeans(Histogram(counts), KMeansConfig(k=2))
    assert full.iterations == 2
    assert full.converged is True
    assert full.means == pytest.approx([0.0, 17 / 18])


def _squeezed_middle_histogram():
    """22 bins where the middle group loses both of its bins in round two."""
    counts = [0] * 22
    counts[7] = 1
    counts[8] = 1
    counts[12] = 1
    counts[13] = 5
    counts[17] = 1
    return Histogram(counts)


def test_compute_kmeans_empty_group_is_frozen():
    """Test a group that attracts no weight keeps its mean."""
    histogram = _squeezed_middle_histogram()
    counts = np.array(histogram.data)

    # interval = 7, starts at 3, 10 and 17 reach bins 7, 8 and 17
    seeds = initial_group_means(counts, histogram.bin_values(), 3)
    assert seeds.tolist() == [histogram.get_value(7), histogram.get_value(8), histogram.get_value(17)]

    first_round = compute_kmeans(histogram, KMeansConfig(k=3, max_iterations=1))
    assert first_round.means[1] == pytest.approx(10 / 21)

    # Bin 8 moves to group 0 and bin 12 to group 2
    final = compute_kmeans(histogram, KMeansConfig(k=3))
    member_weights = counts[final.assignments == 1]
    assert member_weights.sum() == 0
    assert final.means[1] == first_round.means[1]
    assert final.means == pytest.approx([7.5 / 21, 10 / 21, 94 / 7 / 21])
    assert final.converged


def test_initial_group_means_rejects_shared_seed_bin():
    """Test two slices reaching the same bin is reported as too little data."""
    counts = np.zeros(30, dtype=np.int64)
    counts[27:30] = 1
    values = np.linspace(0.0, 1.0, 30)

    # starts 5, 15 and 25 all reach bin 27
    with pytest.raises(InsufficientDataError, match="distinct"):
        initial_group_means(counts, values, 3)


def test_compute_kmeans_rejects_shared_seed_bin():
    """Test enough non-empty bins but colliding seeds still fails."""
    counts = [0] * 27 + [1, 1, 1]

    with pytest.raises(InsufficientDataError, match="distinct"):
        compute_kmeans(Histogram(counts), KMeansConfig(k=3))
    with pytest.raises(InsufficientDataError):
        Histogram(counts).kmeans(3)


def test_compute_kmeans_is_deterministic():
    """Test repeated runs give identical results."""
    np.random.seed(42)
    histogram = Histogram.from_samples(np.random.beta(2.0, 2.0, size=2000), 101)

    first = compute_kmeans(histogram, KMeansConfig(k=5))
    second = compute_kmeans(histogram, KMeansConfig(k=5))

    assert first.means == second.means
    assert first.assignments.tolist() == second.assignments.tolist()
    assert first.iterations == second.iterations
    assert first.iterations <= KMEANS_MAX_ITERATIONS


def test_compute_kmeans_k_larger_than_bins():
    """Test k above the bin count."""
    with pytest.raises(InvalidClusterCountError, match="bin count"):
        compute_kmeans(Histogram([1, 1, 1]), KMeansConfig(k=4))


def test_compute_kmeans_no_data():
    """Test clustering an empty histogram."""
    with pytest.raises(DegenerateInputError, match="no data"):
        compute_kmeans(Histogram(5), KMeansConfig(k=2))


def test_compute_kmeans_insufficient_data():
    """Test more clusters than non-empty bins."""
    with pytest.raises(InsufficientDataError):
        compute_kmeans(Histogram([0, 0, 7, 0, 0]), KMeansConfig(k=2))
    with pytest.raises(DegenerateInputError):
        compute_kmeans(Histogram([0, 0, 7, 0, 0]), KMeansConfig(k=2))


def test_compute_kmeans_single_bin():
    """Test clustering a single-bin histogram."""
    with pytest.raises(ArithmeticDegenerateError):
        compute_kmeans(Histogram([3]), KMeansConfig(k=1))


def test_compute_kmeans_debug_output(capsys):
    """Test iterations are logged when debug is enabled."""
    compute_kmeans(Histogram([0, 3, 0, 0, 5]), KMeansConfig(k=2, enable_debug=True))

    out = capsys.readouterr().out
    assert "[KMeans] k=2" in out
    assert "[KMeans] Iteration 1" in out


def test_compute_kmeans_silent_by_default(capsys):
    """Test nothing is printed without debug."""
    compute_kmeans(Histogram([0, 3, 0, 0, 5]), KMeansConfig(k=2))

    assert capsys.readouterr().out == ""
