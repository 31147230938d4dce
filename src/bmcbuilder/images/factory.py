from typing import Dict, Type
from .image import Image
from .ubuntu import UbuntuImage
from .fedora import FedoraImage
from ..config import BuildParameters, HostInfo
from ..exceptions import ImageDefinitionError
import logging
logger = logging.getLogger(__name__)

class ImageFactory:
    """
    Factory selecting the image recipe that matches the requested distro.
    """
    def __init__(self):
        self.distro_map: Dict[str, Type[Image]] = {
            "ubuntu": UbuntuImage,
            "fedora": FedoraImage,
        }

    def create(self, params: BuildParameters, host: HostInfo) -> Image:
        image_class = self.distro_map.get(params.distro)
        if not image_class:
            raise ImageDefinitionError(
                f"No image recipe for distro '{params.distro}', expected one of: {', '.join(self.distro_map)}"
            )
        logger.debug(f"Instantiating '{params.img_name}' using class {image_class.__name__}.")
        return image_class(params, host)
