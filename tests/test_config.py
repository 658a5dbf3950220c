from __future__ import annotations

import os
from unittest import mock

import numpy as np
import pytest

from ndview import ALL, config, sub
from ndview.core.common import resolve_order
from ndview.core.config import BadConfigError, parse_indexing_order


def test_config_defaults_set() -> None:
    # regression test for available defaults
    assert config.defaults == [{"array": {"order": "C", "dtype": "float64"}}]
    assert config.get("array.order") == "C"
    assert config.get("array.dtype") == "float64"


def test_config_defaults_can_be_overridden() -> None:
    assert config.get("array.order") == "C"
    with config.set({"array.order": "F"}):
        assert config.get("array.order") == "F"
    assert config.get("array.order") == "C"


@mock.patch.dict(os.environ, {"NDVIEW_ARRAY__ORDER": "F"})
def test_config_from_environment() -> None:
    config.refresh()
    assert config.get("array.order") == "F"
    assert resolve_order(None) == "F"


def test_parse_indexing_order() -> None:
    assert parse_indexing_order("C") == "C"
    assert parse_indexing_order("F") == "F"
    with pytest.raises(ValueError):
        parse_indexing_order("K")


def test_resolve_order() -> None:
    assert resolve_order(None) == "C"
    assert resolve_order("F") == "F"
    assert resolve_order((1, 0)) == (1, 0)


def test_bad_order_in_config() -> None:
    with config.set({"array.order": "K"}):
        with pytest.raises(BadConfigError):
            resolve_order(None)
        with pytest.raises(BadConfigError):
            sub(np.arange(3), ALL)
        # an explicit order does not consult the configuration
        assert sub(np.arange(3), 1, order="C") == 1
