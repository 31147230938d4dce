from abc import ABC, abstractmethod
from pathlib import Path
import functools
import logging
import os

import fsspec

from ..exceptions import (
    BMCBPathExistsError,
    BMCBPathNotFoundError,
    BMCBNotADirectoryError,
)

logger = logging.getLogger(__name__)


def wrap_io_error(func):
    """Decorator to wrap IO errors into BMC-Builder exceptions."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FileExistsError as e:
            raise BMCBPathExistsError(e) from e
        except FileNotFoundError as e:
            raise BMCBPathNotFoundError(e) from e
        except NotADirectoryError as e:
            raise BMCBNotADirectoryError(e) from e

    return wrapper

# --------------------
#
# Abstract FileSystem
#
# --------------------

class FileSystem(ABC):
    """BMCB File System Abstract Base Class"""

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Read text from a file"""
        pass

    @abstractmethod
    def write_text(self, path: Path, content: str):
        """Write text to a file, creating parent directories"""
        pass

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if a path exists"""
        pass

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory"""
        pass

    @abstractmethod
    def mkdir(self, path: Path, exist_ok: bool = True):
        """Create a directory and its parents"""
        pass

    @abstractmethod
    def chmod(self, path: Path, mode: int):
        """Change the permission bits of a path"""
        pass

    @abstractmethod
    def chown(self, path: Path, uid: int, gid: int):
        """Change the owner of a path"""
        pass

    @abstractmethod
    def symlink(self, target: Path, link: Path):
        """Create or replace a symbolic link at `link` pointing to `target`"""
        pass

# --------------------
#
# Local disk
#
# --------------------

class DiskFileSystem(FileSystem):
    """Local disk file system using fsspec"""

    def __init__(self):
        self.fs = fsspec.filesystem("file")
        self.name = "fileFS"

    @wrap_io_error
    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        logger.debug(f"[{self.name}] Reading from: {path}")
        with self.fs.open(str(path), "r", encoding=encoding) as f:
            return f.read()

    @wrap_io_error
    def write_text(self, path: Path, content: str, encoding: str = "utf-8"):
        logger.debug(f"[{self.name}] Writing to: {path}")
        self.fs.mkdirs(str(Path(path).parent), exist_ok=True)
        with self.fs.open(str(path), "w", encoding=encoding) as f:
            f.write(content)

    def exists(self, path: Path) -> bool:
        return self.fs.exists(str(path))

    def is_dir(self, path: Path) -> bool:
        return self.fs.isdir(str(path))

    @wrap_io_error
    def mkdir(self, path: Path, exist_ok: bool = True):
        logger.debug(f"[{self.name}] Creating directory: {path}")
        self.fs.mkdirs(str(path), exist_ok=exist_ok)

    @wrap_io_error
    def chmod(self, path: Path, mode: int):
        logger.debug(f"[{self.name}] chmod {oct(mode)} {path}")
        os.chmod(path, mode)

    @wrap_io_error
    def chown(self, path: Path, uid: int, gid: int):
        logger.debug(f"[{self.name}] chown {uid}:{gid} {path}")
        os.chown(path, uid, gid)

    @wrap_io_error
    def symlink(self, target: Path, link: Path):
        link = Path(link)
        if link.is_symlink() or link.is_file():
            link.unlink()
        logger.debug(f"[{self.name}] Linking '{link}' -> '{target}'")
        os.symlink(target, link)
