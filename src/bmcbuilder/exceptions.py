class BMCBuilderError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to loading and validating parameters ---
class ConfigurationError(BMCBuilderError):
    """Base class for errors encountered while reading or validating build parameters."""

    pass


class ConfigFileMissingError(ConfigurationError):
    """Raised when a parameters file cannot be found."""

    pass


class ConfigParsingError(ConfigurationError):
    """Raised when a YAML parameters file is syntactically incorrect."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when the parameters fail structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors related to the logical definition of the build ---
class DefinitionError(BMCBuilderError):
    """Base class for errors in what the build is asked to produce."""

    pass


class UnknownTargetError(DefinitionError):
    """Raised when a build target has no entry in the target table."""

    pass


class ImageDefinitionError(DefinitionError):
    """Raised when no image recipe exists for the requested distro."""

    pass


# --- 3. Errors about the machine we run on ---
class HostError(BMCBuilderError):
    """Base class for errors about the invoking host."""

    pass


class UnsupportedArchitectureError(HostError):
    """Raised when the host architecture has no matching base image."""

    pass


# --- 4. Errors that occur while preparing or running the build ---
class BuildError(BMCBuilderError):
    """Base class for errors that occur while running the build workflow."""

    pass


class WorkspaceError(BuildError):
    """Raised when the workspace or extraction path cannot be prepared."""

    pass


class SourceCheckoutError(BuildError):
    """Raised when the firmware source tree cannot be cloned."""

    pass


class ImageBuildError(BuildError):
    """Raised when the container engine fails to build the image."""

    pass


class LaunchError(BuildError):
    """Raised when the build container or cluster launch fails."""

    pass


# --- 5. Errors related to IO operations ---
class BMCBIOError(BMCBuilderError):
    """Base class for IO-related errors."""

    pass


class BMCBPathExistsError(BMCBIOError):
    """Raised when a file or directory already exists."""

    pass


class BMCBPathNotFoundError(BMCBIOError):
    """Raised when a file or directory is not found."""

    pass


class BMCBNotADirectoryError(BMCBIOError):
    """Raised when a directory is expected, but a file is found."""

    pass
