"""Shared roster fixtures for the undid test suite."""

from typing import Dict, Optional

import pandas as pd
import pytest


def make_roster(
    treatments: Dict[str, str],
    start: str = "1989",
    end: str = "2000",
    covariates: Optional[str] = None,
) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "silo_name": list(treatments),
            "start_time": [start] * len(treatments),
            "end_time": [end] * len(treatments),
            "treatment_time": list(treatments.values()),
        }
    )
    if covariates is not None:
        df["covariates"] = covariates
    return df


@pytest.fixture
def common_roster():
    return make_roster({"A": "control", "B": "1991"})


@pytest.fixture
def staggered_roster():
    return make_roster({"B": "1991", "C": "control", "D": "1993"})
