from .driver import CapnpDriver

__all__ = ["CapnpDriver"]
