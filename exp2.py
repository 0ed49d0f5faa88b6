import time
from typing import List

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from tqdm import tqdm

from densematrix import Matrix
from densematrix.config import SEED

# =============================================================================
# --- Scaling of the elimination engine ---
# =============================================================================

SIZES = list(range(1, 9))
REPEATS = 3


def time_call(fn, repeats: int = REPEATS) -> float:
    best = float("inf")
    for _ in range(repeats):
        start = time.perf_counter()
        fn()
        best = min(best, time.perf_counter() - start)
    return best


def plot_timings(df: pd.DataFrame, filename: str):
    plt.figure(figsize=(10, 6))
    for column, color in [("determinant_s", "r"), ("inverse_s", "b"), ("rank_s", "g")]:
        plt.plot(df["n"], df[column], marker="o", linestyle="-", color=color, label=column)
    plt.yscale("log")
    plt.title("Fig 1: Elimination Engine Runtime vs Matrix Size")
    plt.xlabel("n (matrix is n x n)")
    plt.ylabel("Best of %d runs in seconds (Log Scale)" % REPEATS)
    plt.legend()
    plt.grid(True, which="both", ls="--")
    plt.tight_layout()
    plt.savefig(filename)
    print(f"Saved {filename}: Elimination runtime plot.")


def run():
    print("\n--- Experiment 2: Elimination Engine Scaling ---")
    rng = np.random.default_rng(SEED)
    rows: List[dict] = []
    for n in tqdm(SIZES, desc="Timing sizes"):
        # Diagonal boost keeps the samples well conditioned
        m = Matrix.from_numpy(rng.uniform(-1.0, 1.0, size=(n, n)) + n * np.eye(n))
        rows.append(
            {
                "n": n,
                "determinant_s": time_call(m.determinant),
                "inverse_s": time_call(m.inverse),
                "rank_s": time_call(m.rank),
            }
        )
    df = pd.DataFrame(rows)

    print("\n--- Experiment 2 Results ---")
    print(df.to_string(index=False))
    plot_timings(df, "fig2_elimination_scaling.png")
    return df


if __name__ == "__main__":
    run()
