import numpy as np
import pandas as pd
from tqdm import tqdm

from densematrix import Matrix, SingularMatrixError
from densematrix.config import SEED

# =============================================================================
# --- Cross-validation against numpy ---
# =============================================================================

NUM_SAMPLES = 200
MAX_SIZE = 6


def random_matrix(rng: np.random.Generator, rows: int, cols: int) -> Matrix:
    return Matrix.from_numpy(rng.uniform(-10.0, 10.0, size=(rows, cols)))


def low_rank_matrix(rng: np.random.Generator, size: int, rank: int) -> Matrix:
    left = rng.integers(-5, 6, size=(size, rank)).astype(float)
    right = rng.integers(-5, 6, size=(rank, size)).astype(float)
    return Matrix.from_numpy(left @ right)


def max_abs_error(ours: Matrix, reference: np.ndarray) -> float:
    return float(np.max(np.abs(ours.to_numpy() - reference)))


def run():
    print("\n--- Experiment 1: Cross-validation against numpy ---")
    rng = np.random.default_rng(SEED)
    errors = {"determinant": [], "inverse": [], "product": [], "trace": []}
    rank_mismatches = 0
    singular = 0

    for _ in tqdm(range(NUM_SAMPLES), desc="Checking random matrices"):
        n = int(rng.integers(1, MAX_SIZE + 1))
        a = random_matrix(rng, n, n)
        b = random_matrix(rng, n, int(rng.integers(1, MAX_SIZE + 1)))
        a_np = a.to_numpy()

        det_ref = float(np.linalg.det(a_np))
        errors["determinant"].append(abs(a.determinant() - det_ref) / max(1.0, abs(det_ref)))
        errors["trace"].append(abs(a.trace() - float(np.trace(a_np))))
        errors["product"].append(max_abs_error(a @ b, a_np @ b.to_numpy()))
        try:
            errors["inverse"].append(max_abs_error(a.inverse(), np.linalg.inv(a_np)))
        except SingularMatrixError:
            singular += 1

        target_rank = int(rng.integers(1, n + 1))
        c = low_rank_matrix(rng, n, target_rank)
        if c.rank() != int(np.linalg.matrix_rank(c.to_numpy())):
            rank_mismatches += 1

    report_data = {
        "Samples": str(NUM_SAMPLES),
        "Max Determinant Error (relative)": f"{np.max(errors['determinant']):.2e}",
        "Max Inverse Error": f"{np.max(errors['inverse']):.2e}" if errors["inverse"] else "n/a",
        "Max Product Error": f"{np.max(errors['product']):.2e}",
        "Max Trace Error": f"{np.max(errors['trace']):.2e}",
        "Singular Samples Skipped": str(singular),
        "Rank Mismatches": str(rank_mismatches),
    }
    report_df = pd.DataFrame(list(report_data.items()), columns=["Metric", "Value"])

    print("\n--- Experiment 1 Results ---")
    print(report_df.to_string(index=False))
    return report_df


if __name__ == "__main__":
    run()
