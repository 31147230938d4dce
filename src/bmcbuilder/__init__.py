"""
BMCB (BMC Builder)

Builds OpenBMC firmware inside an ephemeral container and extracts the
artifacts to the host.

Main modules:
- config: Parameter resolution (defaults, YAML, environment, CLI)
- targets: Build target table
- images: Build image definitions and the Docker image engine
- script: Typed in-container launch script
- launcher: Docker and Kubernetes launchers
- builder: Workflow orchestration and workspace handling
- io: File system access
- utils: Utility functions

Quick start example:
```python
from bmcbuilder import Builder, Config

config = Config(overrides={"target": "romulus"})
Builder(config).run()
```
"""

__version__ = "0.3.0"

from .protocols import LauncherProtocol, LauncherFactoryProtocol, ImageEngineProtocol, SourceFetcherProtocol
from .config import Config, BuildParameters, HostInfo, ProxySettings
from .targets import TargetConfig, TARGETS, resolve_target
from .builder import Builder, Workspace
from .io import FileSystem, DiskFileSystem
from .exceptions import (
    BMCBuilderError,
    ConfigurationError,
    ConfigValidationError,
    DefinitionError,
    UnknownTargetError,
    HostError,
    UnsupportedArchitectureError,
    BuildError,
)

__all__ = [
    # Version
    '__version__',
    # Protocols
    'LauncherProtocol',
    'LauncherFactoryProtocol',
    'ImageEngineProtocol',
    'SourceFetcherProtocol',
    # Config
    'Config',
    'BuildParameters',
    'HostInfo',
    'ProxySettings',
    # Targets
    'TargetConfig',
    'TARGETS',
    'resolve_target',
    # Builder
    'Builder',
    'Workspace',
    # IO
    'FileSystem',
    'DiskFileSystem',
    # Exceptions
    'BMCBuilderError',
    'ConfigurationError',
    'ConfigValidationError',
    'DefinitionError',
    'UnknownTargetError',
    'HostError',
    'UnsupportedArchitectureError',
    'BuildError',
]
