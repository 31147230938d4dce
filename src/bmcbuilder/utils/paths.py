import os
from pathlib import PurePosixPath


def is_within(path, base) -> bool:
    """True if `path` is `base` or lies somewhere below it."""
    path = PurePosixPath(os.path.normpath(str(path)))
    base = PurePosixPath(os.path.normpath(str(base)))
    return path == base or base in path.parents
