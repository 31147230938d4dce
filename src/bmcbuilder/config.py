import getpass
import logging
import os
import platform
import random
import shlex
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError, field_validator

from . import constants
from .io import FileSystem, DiskFileSystem
from .exceptions import (
    BMCBPathNotFoundError,
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigValidationError,
    UnsupportedArchitectureError,
)

logger = logging.getLogger(__name__)


def usable_cpus() -> int:
    """CPUs this process may run on, like `nproc`; honours affinity where the OS exposes it."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


class HostInfo(BaseModel):
    """
    Identity and machine facts of the invoking host.

    The build image mirrors `uid`, `gid`, `user` and `home` so that files
    written to mounted volumes keep the host owner.
    """
    model_config = ConfigDict(frozen=True)

    arch: str
    uid: int
    gid: int
    user: str
    home: Path
    cpus: PositiveInt

    @property
    def image_prefix(self) -> str:
        return constants.ARCH_IMAGE_PREFIX[self.arch]

    @classmethod
    def detect(cls) -> "HostInfo":
        """Inspect the running host, failing fast on an unsupported architecture."""
        arch = platform.machine()
        if arch not in constants.ARCH_IMAGE_PREFIX:
            raise UnsupportedArchitectureError(
                f"Unsupported system architecture({arch}) found for docker image"
            )
        host = cls(
            arch=arch,
            uid=os.getuid(),
            gid=os.getgid(),
            user=getpass.getuser(),
            home=Path.home(),
            cpus=usable_cpus(),
        )
        logger.debug(f"Detected host: {host}")
        return host


class ProxySettings(BaseModel):
    """An HTTP proxy split into the pieces the generated files need."""
    model_config = ConfigDict(frozen=True)

    url: str
    host: str
    port: int

    @classmethod
    def from_url(cls, url: str) -> "ProxySettings":
        parts = urlsplit(url if "://" in url else f"http://{url}")
        if not parts.hostname:
            raise ConfigValidationError(f"Cannot find a host in proxy URL '{url}'")
        try:
            port = parts.port
        except ValueError as e:
            raise ConfigValidationError(f"Invalid port in proxy URL '{url}': {e}")
        if port is None:
            port = 443 if parts.scheme == "https" else 80
        return cls(url=url, host=parts.hostname, port=port)


class BuildParameters(BaseModel):
    """
    The resolved, immutable parameters of one build invocation.

    Field names follow the environment variables they are read from, see
    `constants.PARAM_ENV_VARS`.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    build_scripts_dir: Path
    http_proxy: str = ""
    workspace: Path
    num_cpu: PositiveInt
    build_dir: str = constants.DEFAULT_BUILD_DIR
    distro: Literal["ubuntu", "fedora"] = constants.DEFAULT_DISTRO
    img_tag: str = constants.DEFAULT_IMG_TAG
    target: str = constants.DEFAULT_TARGET
    launch: str = constants.LAUNCH_DOCKER
    obmc_dir: Path
    ssc_dir: Path
    xtrct_small_copy_dir: str = constants.DEFAULT_SMALL_COPY_DIR
    xtrct_path: Path
    xtrct_copy_timeout: PositiveInt = constants.DEFAULT_COPY_TIMEOUT
    bitbake_opts: str = ""
    img_name: str

    @field_validator("bitbake_opts")
    @classmethod
    def _check_bitbake_opts(cls, value: str) -> str:
        try:
            shlex.split(value)
        except ValueError as e:
            raise ValueError(f"cannot split bitbake options {value!r}: {e}")
        return value

    @field_validator("xtrct_small_copy_dir")
    @classmethod
    def _relative_copy_dir(cls, value: str) -> str:
        # joined below both build_dir and xtrct_path
        return value.lstrip("/")

    @property
    def proxy(self) -> Optional[ProxySettings]:
        if not self.http_proxy:
            return None
        return ProxySettings.from_url(self.http_proxy)

    def to_env(self) -> Dict[str, str]:
        """Parameters keyed by their environment variable names."""
        return {
            env_name: str(getattr(self, field))
            for field, env_name in constants.PARAM_ENV_VARS.items()
        }


class Config:
    """
    Resolves BuildParameters from every source once, at startup.

    Sources, lowest precedence first: built-in defaults, an optional YAML
    parameters file, the process environment, explicit overrides (CLI).
    Empty values count as absent, except for keys in
    `constants.EXPLICIT_EMPTY_KEYS` set by the file or the overrides.
    """
    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None,
        host: Optional[HostInfo] = None,
        fs: FileSystem = None,
    ):
        self.fs = fs or DiskFileSystem()
        self.host = host or HostInfo.detect()
        self.path = config_file
        environ = os.environ if environ is None else environ

        sources = []
        if config_file:
            sources.append(("file", self._load_file(config_file), True))
        sources.append(("environment", self._read_environ(environ), False))
        sources.append(("overrides", dict(overrides or {}), True))

        raw = self._merge(sources)
        self._apply_defaults(raw)

        logger.debug("Validating build parameters with Pydantic...")
        try:
            self.params = BuildParameters.model_validate(raw)
        except ValidationError as e:
            raise ConfigValidationError(f"Build parameters validation failed:\n{e}")
        # Parse the proxy once so a malformed URL fails here, not mid-build
        self.params.proxy
        logger.debug(f"Resolved parameters: \n{self.params.model_dump_json(indent=2)}")

    def _load_file(self, config_file: str) -> Dict[str, Any]:
        logger.info(f"Loading parameters from '{config_file}'...")
        try:
            content = self.fs.read_text(Path(config_file))
        except BMCBPathNotFoundError:
            raise ConfigFileMissingError(f"Parameters file not found at: {config_file}")
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigParsingError(f"Error parsing YAML file: {e}")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigParsingError("Parameters file must be a YAML document containing a dictionary.")

        # Accept both field names and their environment variable spelling
        by_env_name = {env: field for field, env in constants.PARAM_ENV_VARS.items()}
        return {by_env_name.get(key, key): value for key, value in data.items()}

    @staticmethod
    def _read_environ(environ: Mapping[str, str]) -> Dict[str, Any]:
        return {
            field: environ[env_name]
            for field, env_name in constants.PARAM_ENV_VARS.items()
            if env_name in environ
        }

    @staticmethod
    def _merge(sources) -> Dict[str, Any]:
        raw: Dict[str, Any] = {}
        for name, values, explicit in sources:
            for key, value in values.items():
                if value is None:
                    continue
                if value == "" and not (explicit and key in constants.EXPLICIT_EMPTY_KEYS):
                    continue
                logger.debug(f"[{name}] {key} = {value!r}")
                raw[key] = value
        return raw

    def _apply_defaults(self, raw: Dict[str, Any]):
        """Fill computed defaults; later ones depend on earlier ones."""
        home = self.host.home
        raw.setdefault("build_scripts_dir", Path.cwd())
        raw.setdefault(
            "workspace",
            home / f"{random.randint(0, constants.RANDOM_MAX)}{random.randint(0, constants.RANDOM_MAX)}",
        )
        raw.setdefault("num_cpu", self.host.cpus)
        raw.setdefault("obmc_dir", Path(raw["workspace"]) / constants.OBMC_SUBDIR)
        raw.setdefault("ssc_dir", home)
        raw.setdefault("xtrct_path", Path(raw["obmc_dir"]) / constants.XTRCT_SUBPATH)
        distro = raw.get("distro", constants.DEFAULT_DISTRO)
        img_tag = raw.get("img_tag", constants.DEFAULT_IMG_TAG)
        target = raw.get("target", constants.DEFAULT_TARGET)
        raw.setdefault("img_name", f"openbmc/{distro}:{img_tag}-{target}-{self.host.arch}")
