"""
Build target table.

Every target maps to the BitBake template configuration it is built from,
except the MACHINE targets, which are selected by machine name instead.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from . import constants
from .exceptions import UnknownTargetError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetConfig:
    name: str
    layer_dir: Optional[str] = None
    machine: Optional[str] = None

    @property
    def init_env(self) -> Dict[str, str]:
        """Variables to set while sourcing the build environment."""
        if self.machine:
            return {"MACHINE": self.machine}
        return {"TEMPLATECONF": f"{self.layer_dir}/conf"}

    @property
    def init_command(self) -> str:
        assignments = " ".join(f"{key}={value}" for key, value in self.init_env.items())
        return f"{assignments} source {constants.BITBAKE_INIT_SCRIPT}"


def _build_table() -> Dict[str, TargetConfig]:
    table = {name: TargetConfig(name, layer_dir=layer) for name, layer in constants.TARGET_LAYERS.items()}
    table.update({name: TargetConfig(name, machine=name) for name in constants.MACHINE_TARGETS})
    return table


TARGETS: Dict[str, TargetConfig] = _build_table()


def resolve_target(name: str) -> TargetConfig:
    try:
        target = TARGETS[name]
    except KeyError:
        raise UnknownTargetError(
            f"Unknown build target '{name}', expected one of: {', '.join(sorted(TARGETS))}"
        ) from None
    logger.debug(f"Target '{name}' resolved to: {target.init_command}")
    return target
