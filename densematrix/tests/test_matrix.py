import numpy as np
import pytest

from densematrix import DimensionError, Matrix, MatrixError, NullOperandError, SingularMatrixError


def build_square(n: int, seed: int = 0) -> Matrix:
    rng = np.random.default_rng(seed)
    return Matrix.from_numpy(rng.uniform(-5.0, 5.0, size=(n, n)) + n * np.eye(n))


def build_pair(rows: int, cols: int, seed: int = 0):
    rng = np.random.default_rng(seed)
    a = Matrix.from_numpy(rng.normal(size=(rows, cols)))
    b = Matrix.from_numpy(rng.normal(size=(rows, cols)))
    return a, b


# ----------------------------------------------------------------------
# Construction
# ----------------------------------------------------------------------
def test_construct_from_flat_values():
    m = Matrix(2, 3, [1.5, 2, 3, 4, 5, 6])
    assert m.rows == 2
    assert m.cols == 3
    assert m.shape == (2, 3)
    assert m.grid == ((1.5, 2.0, 3.0), (4.0, 5.0, 6.0))


def test_construct_from_ints_converts_to_float():
    m = Matrix.from_ints(2, 2, [1, 2, 3, 4])
    assert all(isinstance(v, float) for row in m.grid for v in row)
    assert m[1, 0] == 3.0


def test_construct_from_ints_rejects_floats():
    with pytest.raises(TypeError):
        Matrix.from_ints(1, 2, [1, 2.5])


def test_construct_zero_filled():
    m = Matrix(3, 2)
    assert m.grid == ((0.0, 0.0), (0.0, 0.0), (0.0, 0.0))


@pytest.mark.parametrize("rows, cols", [(0, 2), (2, 0), (-1, 3)])
def test_construct_invalid_dimensions(rows, cols):
    with pytest.raises(DimensionError, match="invalid dimensions"):
        Matrix(rows, cols)
    with pytest.raises(DimensionError, match="invalid dimensions"):
        Matrix(rows, cols, [])


def test_construct_size_mismatch():
    with pytest.raises(DimensionError, match="size mismatch"):
        Matrix(2, 2, [1, 2, 3])
    with pytest.raises(DimensionError, match="size mismatch"):
        Matrix.from_ints(2, 2, [1, 2, 3, 4, 5])


def test_construct_from_grid():
    m = Matrix.from_grid([[1, 2], [3, 4], [5, 6]])
    assert m.shape == (3, 2)
    assert m[2, 1] == 6.0


@pytest.mark.parametrize("grid", [None, [], [[]], [[1.0, 2.0], [3.0]]])
def test_construct_from_invalid_grid(grid):
    with pytest.raises(DimensionError):
        Matrix.from_grid(grid)


def test_grid_is_a_snapshot():
    source = [[0.5, 1.0], [2.0, 3.0]]
    m = Matrix.from_grid(source)
    source[0][0] = 0.123
    assert m[0, 0] == 0.5
    assert m.precision_digits == 1
    with pytest.raises(TypeError):
        m.grid[0][0] = 9.0  # type: ignore[index]


def test_numpy_roundtrip():
    arr = np.arange(6, dtype=float).reshape(2, 3)
    m = Matrix.from_numpy(arr)
    assert np.array_equal(m.to_numpy(), arr)
    with pytest.raises(DimensionError):
        Matrix.from_numpy(np.arange(3.0))


def test_errors_share_a_base():
    assert issubclass(NullOperandError, DimensionError)
    assert issubclass(SingularMatrixError, MatrixError)
    assert issubclass(MatrixError, ValueError)


# ----------------------------------------------------------------------
# Arithmetic
# ----------------------------------------------------------------------
def test_add_then_subtract_restores_operand():
    a, b = build_pair(3, 4)
    assert a.add(b).subtract(b).equals(a)
    zero = Matrix(3, 4)
    assert a.add(b).equals(a.add(b).subtract(zero))


def test_add_subtract_elementwise():
    a = Matrix(2, 2, [1, 2, 3, 4])
    b = Matrix(2, 2, [10, 20, 30, 40])
    assert a.add(b).grid == ((11.0, 22.0), (33.0, 44.0))
    assert b.subtract(a).grid == ((9.0, 18.0), (27.0, 36.0))


def test_add_shape_mismatch():
    with pytest.raises(DimensionError):
        Matrix(2, 2).add(Matrix(2, 3))
    with pytest.raises(DimensionError):
        Matrix(2, 2).subtract(Matrix(3, 2))


def test_operations_reject_missing_operand():
    m = Matrix.identity(2)
    for method in (m.add, m.subtract, m.left_multiply, m.right_multiply):
        with pytest.raises(NullOperandError):
            method(None)


def test_operations_reject_non_matrix():
    with pytest.raises(TypeError):
        Matrix.identity(2).add([[1, 0], [0, 1]])


def test_scalar_multiply():
    m = Matrix(1, 3, [1, -2, 0.5])
    assert m.scalar_multiply(3).grid == ((3.0, -6.0, 1.5),)
    assert m.scalar_multiply(0).grid == ((0.0, -0.0, 0.0),)


def test_left_and_right_multiplication():
    a = Matrix(2, 3, [1, 2, 3, 4, 5, 6])
    b = Matrix(3, 2, [7, 8, 9, 10, 11, 12])
    expected = Matrix(2, 2, [58, 64, 139, 154])
    assert a.left_multiply(b).equals(expected)
    assert b.right_multiply(a).equals(expected)
    assert b.left_multiply(a).shape == (3, 3)


def test_left_multiply_incompatible_shape():
    with pytest.raises(DimensionError):
        Matrix(1, 2, [5, 6]).left_multiply(Matrix(1, 2, [1, 2]))


def test_right_multiply_incompatible_shape():
    with pytest.raises(DimensionError):
        Matrix(2, 1, [5, 6]).right_multiply(Matrix(2, 1, [1, 2]))


def test_transpose():
    m = Matrix(2, 3, [1, 2, 3, 4, 5, 6])
    t = m.transpose()
    assert t.shape == (3, 2)
    assert t.grid == ((1.0, 4.0), (2.0, 5.0), (3.0, 6.0))
    assert t.transpose().equals(m)


def test_operations_do_not_mutate_receiver():
    a = Matrix(2, 2, [1, 2, 3, 4])
    before = a.grid
    a.add(a)
    a.scalar_multiply(5)
    a.transpose()
    a.inverse()
    a.rank()
    assert a.grid == before


def test_operator_protocol():
    a = Matrix(2, 2, [1, 2, 3, 4])
    b = Matrix(2, 2, [4, 3, 2, 1])
    assert (a + b).equals(a.add(b))
    assert (a - b).equals(a.subtract(b))
    assert (a @ b).equals(a.left_multiply(b))
    assert (2 * a).equals(a.scalar_multiply(2))
    assert (a * 2).equals(a.scalar_multiply(2))
    assert (-a).equals(a.scalar_multiply(-1))
    with pytest.raises(TypeError):
        a + 1


# ----------------------------------------------------------------------
# Elimination
# ----------------------------------------------------------------------
def test_determinant_2x2():
    assert Matrix(2, 2, [1, 2, 3, 4]).determinant() == -2.0


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
def test_determinant_of_identity(n):
    assert Matrix.identity(n).determinant() == 1.0


def test_determinant_1x1():
    assert Matrix(1, 1, [-7.5]).determinant() == -7.5


def test_determinant_matches_numpy():
    m = build_square(5, seed=3)
    assert np.isclose(m.determinant(), np.linalg.det(m.to_numpy()))


def test_determinant_requires_square():
    with pytest.raises(DimensionError):
        Matrix(2, 3).determinant()


def test_minor():
    m = Matrix(3, 3, [1, 2, 3, 4, 5, 6, 7, 8, 9])
    assert m.minor(0, 0).grid == ((5.0, 6.0), (8.0, 9.0))
    assert m.minor(2, 1).grid == ((1.0, 3.0), (4.0, 6.0))


def test_minor_of_1x1_is_rejected():
    with pytest.raises(DimensionError):
        Matrix(1, 1, [3]).minor(0, 0)


def test_inverse_2x2():
    inv = Matrix(2, 2, [4, 7, 2, 6]).inverse()
    assert inv.equals(Matrix(2, 2, [0.6, -0.7, -0.2, 0.4]))


@pytest.mark.parametrize("n", [1, 2, 3, 4, 6])
def test_inverse_times_matrix_is_identity(n):
    m = build_square(n, seed=n)
    assert m.left_multiply(m.inverse()).equals(Matrix.identity(n))
    assert m.right_multiply(m.inverse()).equals(Matrix.identity(n))


def test_inverse_singular():
    with pytest.raises(SingularMatrixError):
        Matrix(3, 3, [1, 2, 3, 2, 4, 6, 3, 6, 9]).inverse()


def test_inverse_requires_square():
    with pytest.raises(DimensionError):
        Matrix(2, 3).inverse()


def test_trace():
    assert Matrix(3, 3, [1, 2, 3, 4, 5, 6, 7, 8, 9]).trace() == 15.0
    with pytest.raises(DimensionError):
        Matrix(1, 2).trace()


def test_rank_of_dependent_rows():
    assert Matrix(3, 3, [1, 2, 3, 2, 4, 6, 3, 6, 9]).rank() == 1


@pytest.mark.parametrize("n", [1, 3, 5])
def test_rank_identity_and_zero(n):
    assert Matrix.identity(n).rank() == n
    assert Matrix(n, n).rank() == 0


def test_rank_rectangular():
    assert Matrix(2, 4, [1, 0, 2, 0, 0, 0, 0, 1]).rank() == 2
    assert Matrix(4, 1, [0, 0, 3, 0]).rank() == 1


# ----------------------------------------------------------------------
# Equality
# ----------------------------------------------------------------------
def test_equals_within_tolerance():
    a = Matrix(2, 2, [1, 0, 0, 1])
    assert a.equals(Matrix(2, 2, [1, 0, 0, 1]))
    assert a.equals(Matrix(2, 2, [1 + 1e-11, 0, 0, 1]))
    assert not a.equals(Matrix(2, 2, [1 + 1e-9, 0, 0, 1]))


def test_equals_none_and_shape_mismatch():
    a = Matrix(2, 2, [1, 0, 0, 1])
    assert not a.equals(None)
    assert not a.equals(Matrix(1, 4, [1, 0, 0, 1]))


def test_eq_operator_and_hash():
    a = Matrix(1, 2, [1, 2])
    assert a == Matrix.from_grid([[1.0, 2.0]])
    assert a != Matrix(1, 2, [1, 3])
    assert a != "not a matrix"
    with pytest.raises(TypeError):
        hash(a)


def test_repr_roundtrip():
    a = Matrix(2, 2, [1, 2.5, -3, 4])
    assert eval(repr(a), {"Matrix": Matrix}) == a
