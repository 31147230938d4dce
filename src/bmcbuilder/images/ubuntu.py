from typing import override
from .image import Image


class UbuntuImage(Image):
    """
        Concrete Image class for Ubuntu, provisioned with apt-get
    """
    distro = "ubuntu"

    @override
    def _proxy_directive(self, url: str) -> str:
        return f"RUN echo 'Acquire::http::Proxy \"{url}/\";' > /etc/apt/apt.conf.d/000apt-cacher-ng-proxy"
