import numpy as np
import pytest

from densenn.loss.targets import (
    OneHotTargets,
    SparseTargets,
    TargetEncoding,
    new_onehot,
    new_sparse,
    one_hot,
    to_onehot,
    to_sparse,
)


def test_variants_report_their_encoding():
    dense = new_onehot([[1.0, 0.0], [0.0, 1.0]])
    sparse = new_sparse([0, 1, 1])
    assert isinstance(dense, OneHotTargets)
    assert isinstance(sparse, SparseTargets)
    assert dense.encoding is TargetEncoding.ONE_HOT
    assert sparse.encoding is TargetEncoding.SPARSE
    assert len(dense) == 2 and len(sparse) == 3
    assert dense.num_classes == 2


def test_variants_carry_only_their_payload():
    assert not hasattr(new_onehot([[1.0]]), "indices")
    assert not hasattr(new_sparse([0]), "data")


def test_wrong_shape_for_constructor_is_rejected():
    with pytest.raises(ValueError, match="2-D"):
        new_onehot([0, 1, 1])
    with pytest.raises(ValueError, match="1-D"):
        new_sparse([[1.0, 0.0], [0.0, 1.0]])


def test_sparse_validation():
    with pytest.raises(ValueError, match="non-negative"):
        new_sparse([0, -1])
    with pytest.raises(ValueError, match="integers"):
        new_sparse([0.5, 1.0])
    assert new_sparse([0.0, 2.0]).indices.dtype == np.int64
    assert len(new_sparse([])) == 0


def test_payload_is_read_only():
    targets = new_sparse(np.array([0, 1]))
    with pytest.raises(ValueError):
        targets.indices[0] = 5


def test_one_hot_helpers():
    matrix = one_hot([2, 0], num_classes=3)
    np.testing.assert_array_equal(matrix, [[0.0, 0.0, 1.0], [1.0, 0.0, 0.0]])
    np.testing.assert_array_equal(to_sparse(new_onehot(matrix)).indices, [2, 0])


def test_to_onehot_expands_sparse_targets():
    dense = to_onehot(new_sparse([1, 0]), num_classes=2)
    assert dense.encoding is TargetEncoding.ONE_HOT
    np.testing.assert_array_equal(dense.data, [[0.0, 1.0], [1.0, 0.0]])
