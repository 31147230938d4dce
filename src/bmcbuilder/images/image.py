from abc import ABC, abstractmethod
import json
from importlib import resources
from typing import Any, Dict, List, Optional
import logging

from ..config import BuildParameters, HostInfo, ProxySettings
from ..exceptions import ImageDefinitionError

logger = logging.getLogger(__name__)

# Load all image defaults
IMAGE_DEFAULTS_TEXT = resources.files('bmcbuilder.resources.images').joinpath('defaults').read_text(encoding='utf-8')
IMAGE_DEFAULTS = json.loads(IMAGE_DEFAULTS_TEXT)

class Image(ABC):
    """
    Abstract class describing the build container image of one distro.

    The Dockerfile installs the BitBake host dependencies, sets a UTF-8
    locale and creates a user/group matching the invoking host identity.
    """
    distro: str = ""

    def __init__(self, params: BuildParameters, host: HostInfo):
        self.name: str = params.img_name
        self.base_image: str = f"{host.image_prefix}{self.distro}:{params.img_tag}"
        self.proxy: Optional[ProxySettings] = params.proxy
        self.host = host
        self.dependency: List[str] = []

        self._load_defaults()
        logger.debug(f"[{self.name}] Base image '{self.base_image}', packages: {self.dependency}")

    def _load_defaults(self):
        """Loads the default package list from the 'defaults' resource."""
        defaults = IMAGE_DEFAULTS.get(self.distro)
        if not defaults:
            raise ImageDefinitionError(f"No defaults found for distro '{self.distro}'")
        self.dependency = list(defaults.get('default_deps', []))

    def generate(self) -> str:
        """
        Loads the Dockerfile template of the distro and formats it with instance variables.
        """
        try:
            template = resources.files('bmcbuilder.resources.images.templates').joinpath(self.distro).read_text(encoding='utf-8')
        except FileNotFoundError:
            raise ImageDefinitionError(f"Dockerfile template for '{self.distro}' not found.")
        return template.format(**self._get_template_vars())

    def _get_template_vars(self) -> Dict[str, Any]:
        """Provides a dictionary of variables for formatting the Dockerfile template."""
        return {
            "base_image": self.base_image,
            "proxy": self._proxy_directive(self.proxy.url) if self.proxy else "",
            "dep_packages": " \\\n    ".join(self.dependency),
            "uid": self.host.uid,
            "gid": self.host.gid,
            "user": self.host.user,
            "home": self.host.home,
        }

    @abstractmethod
    def _proxy_directive(self, url: str) -> str:
        """A RUN instruction pointing the distro package manager at the proxy."""
        pass
