"""A/A validation of the stopping procedure."""

from hurdle_stopping.diagnostics import aa_tests

__all__ = ["aa_tests"]
