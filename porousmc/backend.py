"""Detection of the numba JIT compiler.

Both energy kernels in energy_numba.py are compiled with numba, and
gcmc_simulation refuses to run without them. The NumPy energies in energy.py
are used for the end-of-run audit and in tests, never inside the Markov chain.
"""

try:
    from numba import njit
    NUMBA_AVAILABLE = True
except ImportError:
    NUMBA_AVAILABLE = False
    njit = None


def require_numba(feature: str):
    """Fail early when a compiled code path is requested without numba.

    Args:
        feature: What needs the compiler, used in the message (e.g. "GCMC simulation")

    Raises:
        ImportError: If numba could not be imported
    """
    if not NUMBA_AVAILABLE:
        raise ImportError(
            f"{feature} runs on numba-compiled energy kernels, but numba is not installed "
            f"(pip install numba)."
        )


__all__ = ["NUMBA_AVAILABLE", "require_numba", "njit"]
