"""rtl433-parse command line.

``cli`` and ``main`` are resolved on first access so that
``python -m rtl433_parse.cli.main`` does not find its own module already
imported by this package.
"""

__all__ = ["cli", "main"]


def __getattr__(name):  # pragma: no cover - trivial lazy import
    if name not in __all__:
        raise AttributeError(name)
    import importlib

    _main_module = importlib.import_module(".main", __name__)

    return _main_module.cli if name == "cli" else _main_module.main
