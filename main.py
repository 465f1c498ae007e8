"""
Entry point for the omega -> 3 pi triangle scan.
Run from project root: python main.py

Evaluates the rho-exchange triangle in the Feynman and the dispersive
representation on the same grid of s, normalises each to its value at the
lower end of the scan and writes both to `omega_feyn.dat` / `omega_disp.dat`.
"""
import sys
from pathlib import Path

# Add src to path so imports work when run from project root (must be before imports from src)
sys.path.insert(0, str(Path(__file__).parent / "src"))


import time

import numpy as np
from joblib import Parallel, delayed
import matplotlib.pyplot as plt

from model import M_PI
from triangle import omega_triangle, scan_points


def scan(method, s_values):
    # one evaluator per worker, the quadrature table is not shared
    tri = omega_triangle()
    evaluate = getattr(tri, method)
    return np.array([evaluate(s) for s in s_values], dtype=np.complex128)


if __name__ == "__main__":

    s_values = scan_points()
    x_axis = np.sqrt(s_values) / M_PI

    start_time = time.time()
    feyn, disp = Parallel(n_jobs=2)(
        delayed(scan)(method, s_values) for method in ("eval_feynman", "eval_dispersive")
    )
    end_time = time.time()
    print(f"Time taken: {end_time - start_time} seconds")

    # normalise to the value at the lower end of the scan
    feyn = feyn / feyn[0]
    disp = disp / disp[0]

    for name, values in (("omega_feyn", feyn), ("omega_disp", disp)):
        np.savetxt(
            f"{name}.dat",
            np.column_stack([x_axis, values.real, values.imag]),
            header="sqrt(s)/m_pi  Re  Im",
        )
        print(f"Wrote {name}.dat")

    fig, axes = plt.subplots(1, 2, figsize=(10, 4), constrained_layout=True)

    axes[0].plot(x_axis, feyn.real, label="Feynman")
    axes[0].plot(x_axis, disp.real, "--", label="dispersive")
    axes[0].set_xlabel(r"$\sqrt{s}/m_\pi$")
    axes[0].set_ylabel("Re")
    axes[0].legend()

    axes[1].plot(x_axis, feyn.imag, label="Feynman")
    axes[1].plot(x_axis, disp.imag, "--", label="dispersive")
    axes[1].set_xlabel(r"$\sqrt{s}/m_\pi$")
    axes[1].set_ylabel("Im")
    axes[1].legend()

    plt.show()
