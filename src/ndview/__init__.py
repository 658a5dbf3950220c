from ndview._version import version as __version__
from ndview.core.config import config
from ndview.core.creation import collect_rows, collect_vector, create
from ndview.core.indexing import ViewIterator
from ndview.core.operations import (
    SIndex,
    map_columns,
    map_rows,
    set_sub,
    sindex,
    sub,
    transpose,
)
from ndview.core.selection import ALL, All, Dropped, IndexList, SingleIndex, Span


def print_debug_info() -> None:
    """
    Print version info for use in bug reports.
    """
    import platform
    from importlib.metadata import PackageNotFoundError, version

    def print_packages(packages: list[str]) -> None:
        not_installed = []
        for package in packages:
            try:
                print(f"{package}: {version(package)}")
            except PackageNotFoundError:
                not_installed.append(package)
        if not_installed:
            print("\n**Not Installed:**")
            for package in not_installed:
                print(package)

    required = [
        "numpy",
        "donfig",
    ]
    optional = [
        "hypothesis",
        "pytest",
    ]

    print(f"platform: {platform.platform()}")
    print(f"python: {platform.python_version()}")
    print(f"ndview: {__version__}\n")
    print("**Required dependencies:**")
    print_packages(required)
    print("\n**Optional dependencies:**")
    print_packages(optional)


__all__ = [
    "ALL",
    "All",
    "Dropped",
    "IndexList",
    "SIndex",
    "SingleIndex",
    "Span",
    "ViewIterator",
    "__version__",
    "collect_rows",
    "collect_vector",
    "config",
    "create",
    "map_columns",
    "map_rows",
    "print_debug_info",
    "set_sub",
    "sindex",
    "sub",
    "transpose",
]
