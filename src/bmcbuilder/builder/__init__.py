"""
Build orchestration

- Builder: runs the workflow phases in order
- Workspace: host-side files of one build
- GitSourceFetcher: clones the firmware tree when it is missing
"""

from .build import Builder
from .workspace import Workspace
from .source import GitSourceFetcher

__all__ = [
    'Builder',
    'Workspace',
    'GitSourceFetcher',
]
