from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np
import pytest
from hypothesis import HealthCheck, Verbosity, settings

from ndview.core.config import config as ndview_config

if TYPE_CHECKING:
    from collections.abc import Generator

    import numpy.typing as npt


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    ndview_config.reset()
    yield
    ndview_config.reset()


@pytest.fixture
def matrix() -> npt.NDArray[np.int64]:
    """A 3x4 array holding 0..11 in row-major order."""
    return np.arange(12, dtype=np.int64).reshape(3, 4)


@pytest.fixture
def cube() -> npt.NDArray[np.int64]:
    return np.arange(2 * 3 * 4, dtype=np.int64).reshape(2, 3, 4)


settings.register_profile(
    "default",
    parent=settings.get_profile("default"),
    max_examples=300,
    suppress_health_check=[HealthCheck.filter_too_much, HealthCheck.too_slow],
    deadline=None,
    verbosity=Verbosity.normal,
)
settings.register_profile(
    "ci",
    parent=settings.get_profile("ci"),
    max_examples=300,
    derandomize=True,  # more like regression testing
    deadline=None,
    suppress_health_check=[HealthCheck.filter_too_much, HealthCheck.too_slow],
)
settings.register_profile(
    "nightly",
    max_examples=1000,
    parent=settings.get_profile("ci"),
    derandomize=False,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))
