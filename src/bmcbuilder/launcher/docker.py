import logging
from pathlib import Path
from typing import List, Tuple

from python_on_whales import DockerClient, docker
from python_on_whales.exceptions import DockerException

from .base import Launcher
from .. import constants
from ..config import BuildParameters, HostInfo
from ..exceptions import LaunchError
from ..utils import is_within

logger = logging.getLogger(__name__)


class DockerLauncher(Launcher):
    """
    Runs the build container directly with Docker.

    The home directory is always mounted at the same path; obmc_dir and
    ssc_dir are mounted only when they live outside of it.
    """
    mode = constants.LAUNCH_DOCKER

    def __init__(self, client: DockerClient = None):
        self.client = client or docker

    def volumes(self, params: BuildParameters, host: HostInfo) -> List[Tuple[str, str]]:
        home = str(host.home)
        volumes = [(home, home)]
        for name, path in (("obmc_dir", params.obmc_dir), ("ssc_dir", params.ssc_dir)):
            if is_within(path, host.home):
                logger.debug(f"[DockerLauncher] {name} '{path}' is covered by the home mount, skipping.")
                continue
            volume = (str(path), str(path))
            if volume not in volumes:
                volumes.append(volume)
        return volumes

    def launch(self, params: BuildParameters, host: HostInfo, script: Path) -> None:
        volumes = self.volumes(params, host)
        logger.info(f"[DockerLauncher] Running '{script}' in '{params.img_name}'...")
        logger.debug(f"[DockerLauncher] Volumes: {volumes}")
        try:
            output = self.client.run(
                params.img_name,
                [str(script)],
                cap_add=constants.DOCKER_CAP_ADD,
                networks=[constants.DOCKER_NETWORK],
                remove=True,
                envs={"WORKSPACE": str(params.workspace)},
                workdir=str(host.home),
                volumes=volumes,
                cpus=float(params.num_cpu),
                tty=True,
                stream=True,
            )
            for _source, line in output:
                logger.info(line.decode("utf-8", errors="replace").rstrip())
        except DockerException as e:
            raise LaunchError(f"Build container '{params.img_name}' failed: {e}") from e
        logger.info("[DockerLauncher] Build container finished.")
