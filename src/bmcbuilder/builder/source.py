import logging
from pathlib import Path

import git

from ..exceptions import SourceCheckoutError

logger = logging.getLogger(__name__)


class GitSourceFetcher:
    """Clones the firmware source tree with GitPython."""

    def fetch(self, url: str, destination: Path) -> None:
        logger.info(f"Clone in openbmc master to {destination}")
        try:
            git.Repo.clone_from(url, str(destination))
        except git.GitCommandError as e:
            raise SourceCheckoutError(f"Failed to clone '{url}' into '{destination}': {e}") from e
