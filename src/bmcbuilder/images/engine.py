import logging
import tempfile
from pathlib import Path

from python_on_whales import DockerClient, docker
from python_on_whales.exceptions import DockerException

from .image import Image
from .. import constants
from ..exceptions import ImageBuildError

logger = logging.getLogger(__name__)


class ImageEngine:
    """
    Builds an Image with the container engine.

    The Dockerfile only lives in a throwaway build context for the duration
    of the build.
    """
    def __init__(self, client: DockerClient = None):
        self.client = client or docker

    def build(self, image: Image) -> None:
        content = image.generate()
        logger.debug(f"[ImageEngine] Dockerfile for '{image.name}':\n{content}")
        with tempfile.TemporaryDirectory(prefix="bmcb-image-") as context_dir:
            dockerfile = Path(context_dir) / constants.DOCKERFILE_NAME
            dockerfile.write_text(content, encoding="utf-8")
            logger.info(f"[ImageEngine] Building image '{image.name}' from '{image.base_image}'...")
            try:
                self.client.build(context_dir, file=str(dockerfile), tags=[image.name])
            except DockerException as e:
                raise ImageBuildError(f"Failed to build image '{image.name}': {e}") from e
        logger.info(f"[ImageEngine] Image '{image.name}' built.")
