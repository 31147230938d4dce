from typing import override
from .image import Image


class FedoraImage(Image):
    """
        Concrete Image class for Fedora, provisioned with dnf
    """
    distro = "fedora"

    @override
    def _proxy_directive(self, url: str) -> str:
        return f"RUN echo \"proxy={url}\" >> /etc/dnf/dnf.conf"
