"""
Build container images

- Image: Dockerfile synthesis shared by all distros
- UbuntuImage / FedoraImage: the two provisioning recipes
- ImageFactory: distro -> recipe
- ImageEngine: builds an Image with Docker
"""

from .image import Image
from .ubuntu import UbuntuImage
from .fedora import FedoraImage
from .factory import ImageFactory
from .engine import ImageEngine

__all__ = [
    'Image',
    'UbuntuImage',
    'FedoraImage',
    'ImageFactory',
    'ImageEngine',
]
