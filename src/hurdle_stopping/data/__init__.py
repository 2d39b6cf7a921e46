"""Experiment dataset loading and validation."""

from hurdle_stopping.data import loaders

__all__ = ["loaders"]
