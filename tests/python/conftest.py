"""
Pytest configuration and shared fixtures for matsparse tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from matsparse import SparseMatrix, ArrayFlags, config


# Try to import scipy
try:
    import scipy.sparse as sp
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Give every test default settings and no environment overrides."""
    for var in ('MATSPARSE_BYTE_ORDER', 'MATSPARSE_INDEX_TYPE', 'MATSPARSE_CHECK_BOUNDS'):
        monkeypatch.delenv(var, raising=False)
    config.reset()
    yield
    config.reset()


@pytest.fixture(scope="session")
def requires_scipy():
    """Skip test if scipy is not available."""
    if not HAS_SCIPY:
        pytest.skip("scipy not available")


@pytest.fixture
def real_3x3():
    """3x3 real matrix with two entries.

    Matrix:
    [[0, 0, 7],
     [0, 0, 0],
     [5, 0, 0]]
    """
    mat = SparseMatrix("a", (3, 3))
    mat.set_real(5.0, 2, 0)
    mat.set_real(7.0, 0, 2)
    return mat


@pytest.fixture
def complex_3x4():
    """3x4 complex matrix mixing real-only, imaginary-only and full entries.

    Matrix:
    [[1+1j, 0,  0, 0 ],
     [0,    2j, 0, 4 ],
     [3,    0,  0, 0 ]]
    """
    mat = SparseMatrix("z", (3, 4), ArrayFlags.COMPLEX, nzmax=8)
    mat.set_real(1.0, 0, 0)
    mat.set_imaginary(1.0, 0, 0)
    mat.set_imaginary(2.0, 1, 1)
    mat.set_real(3.0, 2, 0)
    mat.set_real(4.0, 1, 3)
    return mat


@pytest.fixture
def dense_3x4():
    return np.array([
        [1, 0, 2, 0],
        [0, 3, 0, 4],
        [5, 0, 0, 6]
    ], dtype=np.float64)


# =============================================================================
# Helper Functions
# =============================================================================

def assert_column_major(keys):
    """Assert keys are strictly increasing in column-major order."""
    pairs = [(k.column, k.row) for k in keys]
    assert pairs == sorted(pairs)
    assert len(set(pairs)) == len(pairs)
