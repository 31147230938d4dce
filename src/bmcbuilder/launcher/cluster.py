import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, List

from .base import Launcher
from .. import constants
from ..config import BuildParameters, HostInfo
from ..exceptions import LaunchError

logger = logging.getLogger(__name__)


class ClusterLauncher(Launcher):
    """
    Hands the build to the Kubernetes launch script as a job or a pod.

    The launch script reads the build parameters from its environment, the
    same variables the parameters are resolved from.
    """
    def __init__(
        self,
        mode: str,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        job_name: str = constants.CLUSTER_JOB_NAME,
        log: bool = True,
        purge: bool = True,
    ):
        if mode not in constants.CLUSTER_MODES:
            raise LaunchError(f"'{mode}' is not a cluster launch mode")
        self.mode = mode
        self.runner = runner
        self.job_name = job_name
        self.log = log
        self.purge = purge

    def command(self, params: BuildParameters) -> List[str]:
        launch_script = params.build_scripts_dir / constants.CLUSTER_LAUNCH_SCRIPT
        return [
            "bash",
            str(launch_script),
            self.job_name,
            str(self.log).lower(),
            str(self.purge).lower(),
        ]

    def launch(self, params: BuildParameters, host: HostInfo, script: Path) -> None:
        argv = self.command(params)
        if not Path(argv[1]).is_file():
            raise LaunchError(f"Cluster launch script not found at: {argv[1]}")
        env = {**os.environ, **params.to_env(), "launch": self.mode}
        logger.info(f"[ClusterLauncher] Launching {self.mode} '{self.job_name}'...")
        try:
            self.runner(argv, env=env, check=True)
        except subprocess.CalledProcessError as e:
            raise LaunchError(f"Cluster {self.mode} launch exited with status {e.returncode}") from e
        logger.info(f"[ClusterLauncher] {self.mode.capitalize()} '{self.job_name}' completed.")
