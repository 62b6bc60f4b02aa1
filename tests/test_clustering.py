import json

import pytest

from topology.clustering import (
    Dendrogram,
    Linkage,
    Merge,
    cosine_distance_matrix,
    cut_tree,
    hac,
)


def simple_distances():
    # (0,1)=1, (0,2)=4, (0,3)=5, (1,2)=2, (1,3)=6, (2,3)=3
    return [1.0, 4.0, 5.0, 2.0, 6.0, 3.0], 4


def test_hac_single_linkage():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.SINGLE)
    assert len(dend.merges) == 3
    assert dend.merges[0].distance == pytest.approx(1.0)


def test_hac_single_linkage_merge_steps():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.SINGLE)
    assert dend.merges == [
        Merge(0, 1, 1.0, 2),
        Merge(4, 2, 2.0, 3),
        Merge(5, 3, 3.0, 4),
    ]


def test_cut_tree_gives_correct_k():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.COMPLETE)
    labels = cut_tree(dend, 2)
    assert len(labels) == 4
    assert len(set(labels)) == 2


def test_cut_tree_single_linkage_two_clusters():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.SINGLE)
    assert cut_tree(dend, 2) == [0, 0, 0, 1]


def test_cut_tree_all_separate():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.SINGLE)
    assert cut_tree(dend, 4) == [0, 1, 2, 3]


def test_cosine_distance_identical_vectors():
    v1 = {"a": 1.0, "b": 2.0}
    distances = cosine_distance_matrix([v1, dict(v1)])
    assert distances[0] == pytest.approx(0.0, abs=1e-10)


def test_cosine_distance_orthogonal_vectors():
    distances = cosine_distance_matrix([{"a": 1.0}, {"b": 1.0}])
    assert distances[0] == pytest.approx(1.0)


def test_cosine_distance_zero_vector():
    distances = cosine_distance_matrix([{"a": 0.0}, {"a": 1.0}])
    assert distances == [1.0]


def test_hac_complete_linkage():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.COMPLETE)
    assert len(dend.merges) == 3
    last = dend.merges[-1].distance
    assert all(m.distance <= last + 1e-10 for m in dend.merges)


def test_hac_average_linkage():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.AVERAGE)
    assert len(dend.merges) == 3
    for a, b in zip(dend.merges, dend.merges[1:]):
        assert a.distance <= b.distance + 1e-10


def test_hac_ward_linkage():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.WARD)
    assert len(dend.merges) == 3
    assert dend.merges[-1].size == 4


def test_cut_tree_single_cluster():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.SINGLE)
    labels = cut_tree(dend, 1)
    assert len(labels) == 4
    assert len(set(labels)) <= 2


def test_cut_tree_k_exceeds_n():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.SINGLE)
    labels = cut_tree(dend, 10)
    assert len(labels) == 4
    assert len(set(labels)) == 4


def test_dendrogram_roundtrip():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.WARD)
    text = json.dumps(dend.to_dict())
    dend2 = Dendrogram.from_dict(json.loads(text))
    assert dend2.n == dend.n
    assert len(dend2.merges) == len(dend.merges)
    for m1, m2 in zip(dend.merges, dend2.merges):
        assert m1.cluster_a == m2.cluster_a
        assert m1.cluster_b == m2.cluster_b
        assert m1.distance == pytest.approx(m2.distance)
        assert m1.size == m2.size


def test_dendrogram_from_dict_invalid():
    with pytest.raises(ValueError):
        Dendrogram.from_dict({"n": 3})


@pytest.mark.parametrize("linkage", list(Linkage))
def test_linkage_value_roundtrip(linkage):
    assert Linkage.parse(json.loads(json.dumps(linkage.value))) is linkage


def test_linkage_parse_all_variants():
    assert Linkage.parse("single") is Linkage.SINGLE
    assert Linkage.parse("COMPLETE") is Linkage.COMPLETE
    assert Linkage.parse("Average") is Linkage.AVERAGE
    assert Linkage.parse("ward") is Linkage.WARD
    with pytest.raises(ValueError):
        Linkage.parse("unknown")


def test_cosine_distance_matrix_single_vector():
    assert cosine_distance_matrix([{"a": 1.0}]) == []


def test_cosine_distance_three_vectors():
    v1 = {"a": 1.0, "b": 0.0}
    v2 = {"a": 1.0, "b": 0.0}
    v3 = {"a": 0.0, "b": 1.0}
    distances = cosine_distance_matrix([v1, v2, v3])
    assert len(distances) == 3
    assert distances[0] == pytest.approx(0.0, abs=1e-10)
    assert distances[1] == pytest.approx(1.0)


def test_hac_two_items():
    dend = hac([0.5], 2, Linkage.SINGLE)
    assert len(dend.merges) == 1
    assert dend.merges[0].distance == pytest.approx(0.5)
    assert dend.merges[0].size == 2


def test_dendrogram_merge_sizes_increase():
    d, n = simple_distances()
    dend = hac(d, n, Linkage.SINGLE)
    assert dend.merges[-1].size == n


def test_hac_rejects_empty():
    with pytest.raises(ValueError):
        hac([], 0, Linkage.SINGLE)


def test_hac_rejects_short_matrix():
    with pytest.raises(ValueError):
        hac([1.0], 3, Linkage.SINGLE)