"""
In-container launch script

- steps: typed script steps and their bash rendering
- launch: LaunchScript and the factory deciding its steps
"""

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
from .launch import LaunchScript, LaunchScriptFactory

__all__ = [
    'Step',
    'Comment',
    'SetShellOptions',
    'ChangeDir',
    'ExportVar',
    'PrependPath',
    'MakeDirs',
    'MakeExecutable',
    'WriteFile',
    'RunCommand',
    'SourceEnv',
    'CopyArtifacts',
    'LaunchScript',
    'LaunchScriptFactory',
]
