from .link_unlocker import HttpxLinkUnlocker

__all__ = ["HttpxLinkUnlocker"]
