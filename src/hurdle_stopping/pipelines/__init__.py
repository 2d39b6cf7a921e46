"""
End-to-end early-stopping analysis.

- early_stopping_pipeline: validate -> fit -> simulate -> decide -> figures
"""

# Lazy imports so `python -m` on the pipeline module does not import it twice

__all__ = [
    'run_early_stopping_analysis',
    'run_scenario',
]


def __getattr__(name: str):
    """Import pipeline functions on first access."""
    if name == 'run_early_stopping_analysis':
        from hurdle_stopping.pipelines.early_stopping_pipeline import run_early_stopping_analysis
        return run_early_stopping_analysis
    elif name == 'run_scenario':
        from hurdle_stopping.pipelines.early_stopping_pipeline import run_scenario
        return run_scenario
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
