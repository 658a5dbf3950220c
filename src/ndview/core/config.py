"""
The config module is responsible for managing the configuration of ndview and is based on the
Donfig python library.

Example:
    The default traversal order used to lay out flat storage offsets is read from ``array.order``.
    It can be changed programmatically, temporarily with a context manager, or through an
    environment variable.

    ```python
    from ndview.core.config import config

    with config.set({"array.order": "F"}):
        ...
    ```

    ```bash
    export NDVIEW_ARRAY__ORDER="F"
    ```

    The double underscore ``__`` is used to indicate nested access.

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Any, Literal, cast

from donfig import Config as DConfig


class BadConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "NDVIEW_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for ndview
config = Config(
    "ndview",
    defaults=[
        {
            "array": {
                "order": "C",
                "dtype": "float64",
            },
        }
    ],
)


def parse_indexing_order(data: Any) -> Literal["C", "F"]:
    if data in ("C", "F"):
        return cast("Literal['C', 'F']", data)
    msg = f"Expected one of ('C', 'F'), got {data} instead."
    raise ValueError(msg)
