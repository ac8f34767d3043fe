from .content_api import ContentCatalogPort, MediaPort
from .link_unlocker import LinkUnlockerPort

__all__ = [
    "ContentCatalogPort",
    "LinkUnlockerPort",
    "MediaPort",
]
