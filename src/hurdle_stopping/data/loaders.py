"""
Experiment Data Loading and Validation
======================================

An experiment dataset is a table of (group, revenue) observations, one row
per customer. Revenue is zero for customers who did not purchase.

Expected columns:
-----------------
- group: 'control' or 'treatment'
- revenue: non-negative float

Example Usage:
--------------
>>> from hurdle_stopping.data import loaders
>>>
>>> df = loaders.load_observations('experiment.csv')
>>> print(loaders.summarize_observations(df))
"""

from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd


GROUPS = ('control', 'treatment')
REQUIRED_COLUMNS = ('group', 'revenue')

# Purchasers needed to fit the log-normal part (intercept + treatment + residual)
MIN_PURCHASERS = 3


def validate_observations(df: pd.DataFrame) -> pd.DataFrame:
    """
    Check that a dataset can support the hurdle model.

    Parameters
    ----------
    df : pd.DataFrame
        Observations with 'group' and 'revenue' columns

    Returns
    -------
    pd.DataFrame
        The same DataFrame, unchanged, if it is valid

    Raises
    ------
    ValueError
        If columns are missing, groups are not exactly control/treatment,
        a group has fewer than 2 rows, revenue is negative or non-finite,
        or there are too few purchasers to fit the amount model.
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    if len(df) == 0:
        raise ValueError("Dataset is empty")

    groups = set(df['group'].unique())
    if groups != set(GROUPS):
        raise ValueError(
            f"Groups must be exactly {list(GROUPS)}, got {sorted(map(str, groups))}"
        )

    counts = df['group'].value_counts()
    for group in GROUPS:
        if counts[group] < 2:
            raise ValueError(f"Need at least 2 observations in group '{group}'")

    revenue = pd.to_numeric(df['revenue'], errors='coerce').to_numpy(dtype=float)
    if not np.all(np.isfinite(revenue)):
        raise ValueError("Revenue must be finite and numeric")
    if np.any(revenue < 0):
        raise ValueError("Revenue must be non-negative")

    purchased = revenue > 0
    for group in GROUPS:
        if not purchased[(df['group'] == group).to_numpy()].any():
            raise ValueError(f"Group '{group}' has no purchasers")
    if purchased.sum() < MIN_PURCHASERS:
        raise ValueError(f"Need at least {MIN_PURCHASERS} purchasers in total")

    return df


def load_observations(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load an experiment dataset from CSV and validate it.

    Parameters
    ----------
    path : str or Path
        CSV file with 'group' and 'revenue' columns

    Returns
    -------
    pd.DataFrame
        Validated observations
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    df = pd.read_csv(path)
    df['group'] = df['group'].astype(str).str.strip().str.lower()
    return validate_observations(df)


def summarize_observations(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-group summary: size, purchase rate, mean and total revenue.

    Returns
    -------
    pd.DataFrame
        Indexed by group with columns n, purchase_rate, mean_revenue,
        total_revenue, mean_log_revenue (purchasers only).
    """
    rows = {}
    for group in GROUPS:
        revenue = df.loc[df['group'] == group, 'revenue'].to_numpy(dtype=float)
        positive = revenue[revenue > 0]
        rows[group] = {
            'n': len(revenue),
            'purchase_rate': (revenue > 0).mean() if len(revenue) else np.nan,
            'mean_revenue': revenue.mean() if len(revenue) else np.nan,
            'total_revenue': revenue.sum(),
            'mean_log_revenue': np.log(positive).mean() if len(positive) else np.nan,
        }
    return pd.DataFrame.from_dict(rows, orient='index')
