import logging
import subprocess
from typing import Optional

from python_on_whales import DockerClient

from .base import Launcher
from .docker import DockerLauncher
from .cluster import ClusterLauncher
from .. import constants

logger = logging.getLogger(__name__)


class LauncherFactory:
    """
    Maps a dispatch mode to its launcher: "" -> Docker, "job"/"pod" -> cluster.
    Unknown modes map to None.
    """
    def __init__(self, docker_client: DockerClient = None, runner=subprocess.run):
        self.docker_client = docker_client
        self.runner = runner

    def create(self, mode: str) -> Optional[Launcher]:
        if mode == constants.LAUNCH_DOCKER:
            return DockerLauncher(self.docker_client)
        if mode in constants.CLUSTER_MODES:
            return ClusterLauncher(mode, runner=self.runner)
        logger.debug(f"No launcher for mode '{mode}'.")
        return None
