from abc import ABC, abstractmethod
from pathlib import Path

from ..config import BuildParameters, HostInfo


class Launcher(ABC):
    """
    Abstract launcher: runs `build.sh` for one dispatch mode.
    """
    mode: str = ""

    @abstractmethod
    def launch(self, params: BuildParameters, host: HostInfo, script: Path) -> None:
        """Launch the build and block until it completes."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mode={self.mode!r})"
