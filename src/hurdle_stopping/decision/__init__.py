"""Early-stopping decision rule."""

from hurdle_stopping.decision import stopping

__all__ = ["stopping"]
