"""
BMC Builder Protocol Definitions

Protocols are the foundation layer; they let the builder accept test doubles
for the collaborators that touch Docker, Kubernetes or git.
"""

from pathlib import Path
from typing import Protocol, Optional, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import BuildParameters, HostInfo
    from .images import Image


@runtime_checkable
class LauncherProtocol(Protocol):
    """
    Runs the launch script of a build somewhere: a local container or a
    cluster job/pod.
    """

    mode: str

    def launch(self, params: "BuildParameters", host: "HostInfo", script: Path) -> None:
        """
        Launch the build and block until it completes.

        Args:
            params: Resolved build parameters
            host: Invoking host identity
            script: Path of the launch script inside the workspace
        """
        ...


@runtime_checkable
class LauncherFactoryProtocol(Protocol):
    """Protocol for choosing a launcher from a dispatch mode."""

    def create(self, mode: str) -> Optional[LauncherProtocol]:
        """Return the launcher for `mode`, or None if the mode is unknown."""
        ...


@runtime_checkable
class ImageEngineProtocol(Protocol):
    """Protocol for building a container image from an Image definition."""

    def build(self, image: "Image") -> None:
        ...


@runtime_checkable
class SourceFetcherProtocol(Protocol):
    """Protocol for retrieving the firmware source tree."""

    def fetch(self, url: str, destination: Path) -> None:
        ...
