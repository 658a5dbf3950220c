import importlib.util
import warnings

if importlib.util.find_spec("hypothesis") is None:
    warnings.warn("hypothesis not installed, ndview.testing.strategies is unavailable", stacklevel=2)
