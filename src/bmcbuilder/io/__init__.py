"""
BMC Builder IO Module

- FileSystem: Abstract file system interface
- DiskFileSystem: Local disk file system backed by fsspec

Usage:
    from bmcbuilder.io import DiskFileSystem

    fs = DiskFileSystem()
    fs.write_text(Path("/workspace/build.sh"), content)
"""

from .fs import FileSystem, DiskFileSystem, wrap_io_error

__all__ = [
    'FileSystem',
    'DiskFileSystem',
    'wrap_io_error',
]
