import logging
import shlex
from dataclasses import dataclass, field
from importlib import resources
from pathlib import PurePosixPath
from typing import List, Type, TypeVar

from .steps import (
    Step,
    Comment,
    SetShellOptions,
    ChangeDir,
    ExportVar,
    PrependPath,
    MakeDirs,
    MakeExecutable,
    WriteFile,
    RunCommand,
    SourceEnv,
    CopyArtifacts,
)
from .. import constants
from ..config import BuildParameters, HostInfo, ProxySettings
from ..targets import TargetConfig

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Step)

PROXY_VARS = ("ftp_proxy", "http_proxy", "https_proxy")


def _read_template(name: str) -> str:
    return resources.files('bmcbuilder.resources.scripts').joinpath(name).read_text(encoding='utf-8')


@dataclass
class LaunchScript:
    """Ordered launch steps, rendered to bash at the container boundary."""
    steps: List[Step] = field(default_factory=list)
    shebang: str = "#!/bin/bash"

    def add(self, *steps: Step) -> "LaunchScript":
        self.steps.extend(steps)
        return self

    def find(self, step_type: Type[S]) -> List[S]:
        return [step for step in self.steps if isinstance(step, step_type)]

    def render(self) -> str:
        lines = [self.shebang, ""]
        for step in self.steps:
            lines.extend(step.render())
        return "\n".join(lines) + "\n"


class LaunchScriptFactory:
    """
    Decides what the build container runs: proxy plumbing, BitBake
    environment and configuration, the build itself and the artifact copy.
    """
    def __init__(self, params: BuildParameters, host: HostInfo, target: TargetConfig):
        self.params = params
        self.host = host
        self.target = target

    def create(self) -> LaunchScript:
        params = self.params
        script = LaunchScript()
        script.add(SetShellOptions())
        script.add(
            Comment("Go into the OpenBMC directory, the build will handle changing directories"),
            ChangeDir(params.obmc_dir),
        )

        proxy = params.proxy
        if proxy:
            script.add(Comment("Set up proxies"))
            script.add(*[ExportVar(name, proxy.url) for name in PROXY_VARS])
        script.add(MakeDirs(params.workspace / constants.BIN_SUBDIR))
        if proxy:
            script.add(*self._proxy_steps(proxy))

        script.add(Comment("Source our build env"), SourceEnv(constants.BITBAKE_INIT_SCRIPT, self.target.init_env))
        script.add(Comment("Custom BitBake config settings"), self._local_conf_step())
        script.add(
            Comment("Kick off a build"),
            RunCommand(("bitbake", *shlex.split(params.bitbake_opts), constants.BITBAKE_IMAGE)),
        )
        script.add(Comment("Copy internal build directory into xtrct_path directory"), *self._copy_steps())

        logger.debug(f"Launch script assembled with {len(script.steps)} steps.")
        return script

    def _proxy_steps(self, proxy: ProxySettings) -> List[Step]:
        """git and svn proxy configuration for BitBake fetchers."""
        bin_dir = self.params.workspace / constants.BIN_SUBDIR
        git_proxy = bin_dir / constants.GIT_PROXY_NAME
        svn_servers = self.host.home / constants.SVN_SERVERS_PATH
        values = {"proxy_host": proxy.host, "proxy_port": proxy.port}
        return [
            Comment("Configure proxies for BitBake"),
            WriteFile(git_proxy, _read_template("git-proxy").format(**values), delimiter="EOF_GIT"),
            MakeExecutable(git_proxy),
            PrependPath(bin_dir),
            RunCommand(("git", "config", "core.gitProxy", constants.GIT_PROXY_NAME)),
            MakeDirs(svn_servers.parent),
            WriteFile(svn_servers, _read_template("servers").format(**values), delimiter="EOF_SVN"),
        ]

    def _local_conf_step(self) -> Step:
        content = _read_template("local.conf").format(
            threads=self.host.cpus,
            ssc_dir=self.params.ssc_dir,
            build_dir=self.params.build_dir,
        )
        return WriteFile(constants.LOCAL_CONF, content, delimiter="EOF_CONF", append=True)

    def _copy_steps(self) -> List[Step]:
        params = self.params
        build_dir = PurePosixPath(params.build_dir)
        timeout = params.xtrct_copy_timeout
        if params.xtrct_small_copy_dir:
            destination = params.xtrct_path / params.xtrct_small_copy_dir
            return [
                MakeDirs(destination),
                CopyArtifacts(build_dir / params.xtrct_small_copy_dir, destination, timeout),
            ]
        return [CopyArtifacts(build_dir, params.xtrct_path, timeout)]
