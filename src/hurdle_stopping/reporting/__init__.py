"""Figures for the early-stopping report."""

from hurdle_stopping.reporting import plots

__all__ = ["plots"]
