__version__ = "0.4.0"


def get() -> str:
    return __version__
