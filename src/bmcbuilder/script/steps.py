"""
Typed steps of the in-container launch script.

Each step renders itself to bash only when the script is serialized;
values are quoted at that point and baked in as literals.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, List, Tuple, Union
import shlex

from .. import constants

PathLike = Union[str, PurePath]


def _q(value) -> str:
    return shlex.quote(str(value))


class Step(ABC):
    """One command (or small command group) of the launch script."""

    @abstractmethod
    def render(self) -> List[str]:
        """Bash lines for this step."""
        pass


@dataclass(frozen=True)
class Comment(Step):
    text: str

    def render(self) -> List[str]:
        return ["", f"# {self.text}"]


@dataclass(frozen=True)
class SetShellOptions(Step):
    options: str = "-xeo pipefail"

    def render(self) -> List[str]:
        return [f"set {self.options}"]


@dataclass(frozen=True)
class ChangeDir(Step):
    path: PathLike

    def render(self) -> List[str]:
        return [f"cd {_q(self.path)}"]


@dataclass(frozen=True)
class ExportVar(Step):
    name: str
    value: str

    def render(self) -> List[str]:
        return [f"export {self.name}={_q(self.value)}"]


@dataclass(frozen=True)
class PrependPath(Step):
    directory: PathLike

    def render(self) -> List[str]:
        return [f"export PATH={_q(self.directory)}:{constants.SYSTEM_PATH}:${{PATH}}"]


@dataclass(frozen=True)
class MakeDirs(Step):
    path: PathLike

    def render(self) -> List[str]:
        return [f"mkdir -p {_q(self.path)}"]


@dataclass(frozen=True)
class MakeExecutable(Step):
    path: PathLike

    def render(self) -> List[str]:
        return [f"chmod a+x {_q(self.path)}"]


@dataclass(frozen=True)
class WriteFile(Step):
    """Write (or append) literal content through a quoted heredoc."""
    path: PathLike
    content: str
    delimiter: str = "EOF"
    append: bool = False

    def render(self) -> List[str]:
        body = self.content.rstrip("\n").split("\n")
        if self.delimiter in body:
            raise ValueError(f"Heredoc delimiter '{self.delimiter}' appears in the content for {self.path}")
        redirect = ">>" if self.append else ">"
        return [f"cat {redirect} {_q(self.path)} << '{self.delimiter}'", *body, self.delimiter]


@dataclass(frozen=True)
class RunCommand(Step):
    argv: Tuple[str, ...]

    def render(self) -> List[str]:
        return [shlex.join(self.argv)]


@dataclass(frozen=True)
class SourceEnv(Step):
    """Source an environment script with some variables set for it."""
    script: str
    env: Dict[str, str] = field(default_factory=dict)

    def render(self) -> List[str]:
        assignments = [f"{key}={_q(value)}" for key, value in self.env.items()]
        return [" ".join([*assignments, "source", _q(self.script)])]


@dataclass(frozen=True)
class CopyArtifacts(Step):
    """
    Copy the contents of `source` into `destination` under a timeout.

    The exit status checked is the one of the timeout-wrapped copy itself.
    """
    source: PathLike
    destination: PathLike
    timeout: int

    def render(self) -> List[str]:
        return [
            f"if ! timeout {self.timeout} cp -r {_q(self.source)}/* {_q(self.destination)}; then",
            f"  echo {_q(constants.COPY_TIMEOUT_MESSAGE)}",
            "  exit 1",
            "fi",
        ]
