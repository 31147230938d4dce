import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .source import GitSourceFetcher
from .workspace import Workspace
from ..config import Config
from ..images import Image, ImageFactory, ImageEngine
from ..io import FileSystem
from ..launcher import LauncherFactory
from ..protocols import ImageEngineProtocol, LauncherFactoryProtocol, SourceFetcherProtocol
from ..script import LaunchScript, LaunchScriptFactory
from ..targets import TargetConfig, resolve_target

logger = logging.getLogger(__name__)


class Builder:
    """
    Drives one containerized firmware build from resolved parameters to
    the deploy link. Collaborators that reach Docker, Kubernetes or git are
    injectable.
    """
    def __init__(
        self,
        config: Config,
        fs: Optional[FileSystem] = None,
        engine: Optional[ImageEngineProtocol] = None,
        launchers: Optional[LauncherFactoryProtocol] = None,
        fetcher: Optional[SourceFetcherProtocol] = None,
    ):
        self.config = config
        self.params = config.params
        self.host = config.host
        self.fs = fs or config.fs
        self.engine = engine or ImageEngine()
        self.launchers = launchers or LauncherFactory()
        self.workspace = Workspace(self.params, self.host, self.fs, fetcher or GitSourceFetcher())
        logger.debug(f"Builder initialized for target '{self.params.target}'. Workspace: '{self.params.workspace}'")

    def run(self) -> Path:
        """Orchestrates the entire build process step by step; returns the deploy link."""
        logger.info(f"Build started, {datetime.now():%c}")

        # Unknown targets and distros fail before anything is touched
        target = self.resolve_target()
        image = self.create_image()

        logger.debug("[Builder] Preparing workspace...")
        self.workspace.checkout_source()
        self.workspace.prepare_extraction()

        script = self.create_script(target)
        script_path = self.workspace.write_script(script)

        logger.debug("[Builder] Invoking ImageEngine...")
        self.engine.build(image)

        self._dispatch(script_path)

        link = self.workspace.link_deploy()
        logger.info(f"Build completed, {datetime.now():%c}")
        return link

    def resolve_target(self) -> TargetConfig:
        return resolve_target(self.params.target)

    def create_image(self) -> Image:
        return ImageFactory().create(self.params, self.host)

    def create_script(self, target: Optional[TargetConfig] = None) -> LaunchScript:
        target = target or self.resolve_target()
        return LaunchScriptFactory(self.params, self.host, target).create()

    def _dispatch(self, script_path: Path) -> None:
        launcher = self.launchers.create(self.params.launch)
        if launcher is None:
            logger.warning(f"Launch Parameter is invalid: '{self.params.launch}', nothing was launched.")
            return
        logger.debug(f"[Builder] Dispatching with {launcher!r}...")
        launcher.launch(self.params, self.host, script_path)
