import logging
from pathlib import Path

from .. import constants
from ..config import BuildParameters, HostInfo
from ..exceptions import BMCBIOError, WorkspaceError
from ..io import FileSystem
from ..protocols import SourceFetcherProtocol
from ..script import LaunchScript

logger = logging.getLogger(__name__)


class Workspace:
    """
    Host-side files of one build: the firmware checkout, the extraction
    path, the launch script and the legacy deploy link.
    Nothing here is ever cleaned up.
    """
    def __init__(self, params: BuildParameters, host: HostInfo, fs: FileSystem, fetcher: SourceFetcherProtocol):
        self.params = params
        self.host = host
        self.fs = fs
        self.fetcher = fetcher
        self.root: Path = params.workspace

    @property
    def script_path(self) -> Path:
        return self.root / constants.BUILD_SCRIPT_NAME

    @property
    def deploy_link(self) -> Path:
        return self.root / constants.DEPLOY_LINK_NAME

    def checkout_source(self) -> None:
        """Clone the firmware tree unless obmc_dir already exists."""
        if self.fs.is_dir(self.params.obmc_dir):
            logger.debug(f"Using existing source tree at '{self.params.obmc_dir}'.")
            return
        self.fetcher.fetch(constants.OPENBMC_REPO_URL, self.params.obmc_dir)

    def prepare_extraction(self) -> None:
        """Create xtrct_path and hand it to the invoking user."""
        path = self.params.xtrct_path
        try:
            if not self.fs.is_dir(path):
                self.fs.mkdir(path)
            self.fs.chown(path, self.host.uid, self.host.gid)
        except (BMCBIOError, PermissionError) as e:
            raise WorkspaceError(f"Cannot prepare extraction path '{path}': {e}") from e

    def write_script(self, script: LaunchScript) -> Path:
        try:
            self.fs.mkdir(self.root)
            self.fs.write_text(self.script_path, script.render())
            self.fs.chmod(self.script_path, 0o755)
        except (BMCBIOError, PermissionError) as e:
            raise WorkspaceError(f"Cannot write launch script to '{self.script_path}': {e}") from e
        logger.info(f"Launch script written to '{self.script_path}'.")
        return self.script_path

    def link_deploy(self) -> Path:
        """Point <workspace>/deploy at <xtrct_path>/deploy for consumers of the old layout."""
        target = self.params.xtrct_path / constants.DEPLOY_LINK_NAME
        self.fs.mkdir(self.root)
        self.fs.symlink(target, self.deploy_link)
        logger.debug(f"Linked '{self.deploy_link}' -> '{target}'.")
        return self.deploy_link
