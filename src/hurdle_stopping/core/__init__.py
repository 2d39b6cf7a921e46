"""Core simulation and inference for the hurdle log-normal model."""

from hurdle_stopping.core import hurdle, intervals, model, outcomes

__all__ = ["hurdle", "intervals", "model", "outcomes"]
