"""
Build launchers

- DockerLauncher: run the build container locally
- ClusterLauncher: hand the build to the Kubernetes launch script
- LauncherFactory: dispatch mode -> launcher
"""

from .base import Launcher
from .docker import DockerLauncher
from .cluster import ClusterLauncher
from .factory import LauncherFactory

__all__ = [
    'Launcher',
    'DockerLauncher',
    'ClusterLauncher',
    'LauncherFactory',
]
