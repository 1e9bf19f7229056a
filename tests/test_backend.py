"""Tests for numba detection."""

import pytest
from porousmc import backend


def test_require_numba_passes_when_available(monkeypatch):
    monkeypatch.setattr(backend, "NUMBA_AVAILABLE", True)
    backend.require_numba("GCMC simulation")


def test_require_numba_names_the_feature(monkeypatch):
    monkeypatch.setattr(backend, "NUMBA_AVAILABLE", False)
    with pytest.raises(ImportError, match="GCMC simulation runs on numba-compiled"):
        backend.require_numba("GCMC simulation")
