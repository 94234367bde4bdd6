"""
Tests for compressed-column export (ir, jc, pr, pi) and conversions.
"""

import pytest
import numpy as np

from matsparse import (
    SparseMatrix, ArrayFlags, IndexKey, config,
    DimensionMismatchError, IndexOutOfBoundsError, InvalidArgumentError,
)


def naive_jc(mat):
    """Column pointers by direct counting over every later column."""
    jc = [0] * (mat.cols + 1)
    for key in mat.keys():
        for column in range(key.column + 1, mat.cols + 1):
            jc[column] += 1
    return jc


class TestExportScenario:
    """Two-entry 3x3 matrix."""

    def test_row_indices(self, real_3x3):
        assert real_3x3.export_row_indices().tolist() == [2, 0]

    def test_column_pointers(self, real_3x3):
        # column 0 holds one entry, column 1 none, column 2 one
        assert real_3x3.export_column_pointers().tolist() == [0, 1, 1, 2]

    def test_real_values(self, real_3x3):
        assert real_3x3.export_real().tolist() == [5.0, 7.0]

    def test_imaginary_values_real_matrix(self, real_3x3):
        assert real_3x3.export_imaginary().tolist() == [0.0, 0.0]


class TestExportInvariants:
    """Alignment and ordering of exported arrays."""

    def test_complex_alignment(self, complex_3x4):
        ir = complex_3x4.export_row_indices().tolist()
        pr = complex_3x4.export_real().tolist()
        pi = complex_3x4.export_imaginary().tolist()
        assert ir == [0, 2, 1, 1]
        assert pr == [1.0, 3.0, 0.0, 4.0]
        assert pi == [1.0, 0.0, 2.0, 0.0]
        assert complex_3x4.export_column_pointers().tolist() == [0, 2, 3, 3, 4]

    def test_last_pointer_is_nnz(self):
        rng = np.random.default_rng(7)
        mat = SparseMatrix("r", (30, 12))
        for _ in range(80):
            mat.set_real(1.0, int(rng.integers(30)), int(rng.integers(12)))
        jc = mat.export_column_pointers()
        assert len(jc) == mat.cols + 1
        assert jc[-1] == mat.nnz
        assert jc.tolist() == naive_jc(mat)

    def test_pointers_locate_rows(self):
        rng = np.random.default_rng(3)
        mat = SparseMatrix("r", (10, 6))
        for _ in range(25):
            mat.set_real(float(rng.normal()), int(rng.integers(10)), int(rng.integers(6)))
        ir = mat.export_row_indices()
        pr = mat.export_real()
        jc = mat.export_column_pointers()
        for column in range(mat.cols):
            for k in range(jc[column], jc[column + 1]):
                assert mat.get_real(int(ir[k]), column) == pr[k]
            rows = ir[jc[column]:jc[column + 1]]
            assert np.all(np.diff(rows) > 0)

    def test_empty_export(self):
        mat = SparseMatrix("e", (4, 3))
        assert mat.export_row_indices().tolist() == []
        assert mat.export_real().tolist() == []
        assert mat.export_column_pointers().tolist() == [0, 0, 0, 0]

    def test_zero_columns(self):
        mat = SparseMatrix("e", (4, 0))
        assert mat.export_column_pointers().tolist() == [0]

    def test_index_dtype_follows_config(self, real_3x3):
        assert real_3x3.export_row_indices().dtype == np.int32
        with config.local(index_type='int64'):
            assert real_3x3.export_row_indices().dtype == np.int64
            assert real_3x3.export_column_pointers().dtype == np.int64
        assert real_3x3.export_real().dtype == np.float64


class TestFromCSC:
    """Test rebuilding from decoded arrays."""

    def test_round_trip_arrays(self, complex_3x4):
        rebuilt = SparseMatrix.from_csc(
            "z", complex_3x4.shape,
            complex_3x4.export_row_indices(),
            complex_3x4.export_column_pointers(),
            complex_3x4.export_real(),
            complex_3x4.export_imaginary(),
            nzmax=8,
        )
        assert rebuilt.is_complex
        assert rebuilt.max_nonzero == 8
        assert list(rebuilt.items()) == list(complex_3x4.items())

    def test_default_nzmax(self):
        mat = SparseMatrix.from_csc("a", (3, 3), [2, 0], [0, 1, 1, 2], [5.0, 7.0])
        assert mat.max_nonzero == 2
        assert mat.get_real(0, 2) == 7.0
        assert not mat.is_complex

    def test_bad_jc_length(self):
        with pytest.raises(DimensionMismatchError):
            SparseMatrix.from_csc("a", (3, 3), [0], [0, 1], [1.0])

    def test_bad_jc_start(self):
        with pytest.raises(DimensionMismatchError):
            SparseMatrix.from_csc("a", (3, 2), [0], [1, 1, 1], [1.0])

    def test_decreasing_jc(self):
        with pytest.raises(DimensionMismatchError):
            SparseMatrix.from_csc("a", (3, 2), [0, 1], [0, 2, 1], [1.0, 2.0])

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgumentError):
            SparseMatrix.from_csc("a", (3, 1), [0, 1], [0, 2], [1.0])

    def test_pi_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            SparseMatrix.from_csc("a", (3, 1), [0], [0, 1], [1.0], [1.0, 2.0])

    def test_row_out_of_range(self):
        with pytest.raises(IndexOutOfBoundsError):
            SparseMatrix.from_csc("a", (3, 1), [3], [0, 1], [1.0])


class TestDenseConversion:
    """Test from_dense/to_dense."""

    def test_from_dense(self, dense_3x4):
        mat = SparseMatrix.from_dense("d", dense_3x4)
        assert mat.nnz == 6
        assert mat.export_row_indices().tolist() == [0, 2, 1, 0, 1, 2]
        assert mat.export_column_pointers().tolist() == [0, 2, 3, 4, 6]
        np.testing.assert_array_equal(mat.to_dense(), dense_3x4)

    def test_from_dense_complex(self):
        dense = np.array([[0, 1j], [2, 0]])
        mat = SparseMatrix.from_dense("c", dense)
        assert mat.is_complex
        assert mat[0, 1] == 1j
        assert mat[1, 0] == 2
        np.testing.assert_array_equal(mat.to_dense(), dense)

    def test_from_dense_rejects_1d(self):
        with pytest.raises(InvalidArgumentError):
            SparseMatrix.from_dense("v", [1.0, 2.0])


class TestScipyInterop:
    """Test scipy conversion."""

    def test_to_scipy(self, real_3x3, requires_scipy):
        sp_mat = real_3x3.to_scipy()
        assert sp_mat.format == 'csc'
        assert sp_mat.shape == (3, 3)
        np.testing.assert_array_equal(sp_mat.toarray(), real_3x3.to_dense())

    def test_to_scipy_complex(self, complex_3x4, requires_scipy):
        np.testing.assert_array_equal(complex_3x4.to_scipy().toarray(), complex_3x4.to_dense())

    def test_from_scipy(self, dense_3x4, requires_scipy):
        import scipy.sparse as sp
        mat = SparseMatrix.from_scipy("s", sp.csr_matrix(dense_3x4))
        assert mat.nnz == 6
        assert mat.keys().__next__() == IndexKey(0, 0)
        np.testing.assert_array_equal(mat.to_dense(), dense_3x4)

    def test_from_scipy_sums_duplicates(self, requires_scipy):
        import scipy.sparse as sp
        coo = sp.coo_matrix(([1.0, 2.0], ([0, 0], [1, 1])), shape=(2, 2))
        mat = SparseMatrix.from_scipy("s", coo)
        assert mat.nnz == 1
        assert mat.get_real(0, 1) == 3.0
