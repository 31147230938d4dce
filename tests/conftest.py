import os
import subprocess
from pathlib import Path

import pytest

from bmcbuilder import constants
from bmcbuilder.config import Config, HostInfo


@pytest.fixture
def host(tmp_path: Path) -> HostInfo:
    """A host whose home directory lives inside the test's tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    return HostInfo(arch="x86_64", uid=os.getuid(), gid=os.getgid(), user="builder", home=home, cpus=8)


@pytest.fixture
def make_config(host):
    """Build a Config from an explicit environment and overrides, never the real one."""
    def _make(environ=None, config_file=None, **overrides) -> Config:
        return Config(environ=environ or {}, overrides=overrides, config_file=config_file, host=host)
    return _make


@pytest.fixture
def clean_environ(monkeypatch):
    """Remove every build parameter variable from the process environment."""
    for env_name in constants.PARAM_ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)


class FakeDockerClient:
    """Records docker build/run calls instead of talking to a daemon."""

    def __init__(self, output=(("stdout", b"building...\n"),)):
        self.builds = []
        self.runs = []
        self.output = list(output)

    def build(self, context_path, file=None, tags=None):
        self.builds.append({
            "context_path": context_path,
            "dockerfile": Path(file).read_text(),
            "tags": tags,
        })

    def run(self, image, command, **kwargs):
        self.runs.append({"image": image, "command": command, **kwargs})
        return iter(self.output)


class FakeRunner:
    """Stands in for subprocess.run when launching cluster jobs."""

    def __init__(self, returncode: int = 0):
        self.calls = []
        self.returncode = returncode

    def __call__(self, argv, env=None, check=False):
        self.calls.append({"argv": argv, "env": env})
        if check and self.returncode:
            raise subprocess.CalledProcessError(self.returncode, argv)
        return subprocess.CompletedProcess(argv, self.returncode)


class FakeFetcher:
    """Creates an empty source tree instead of cloning."""

    def __init__(self):
        self.calls = []

    def fetch(self, url, destination):
        self.calls.append((url, destination))
        Path(destination).mkdir(parents=True)


class FakeEngine:
    def __init__(self):
        self.images = []

    def build(self, image):
        self.images.append(image)


@pytest.fixture
def docker_client():
    return FakeDockerClient()


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def engine():
    return FakeEngine()
