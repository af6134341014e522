from .engine import Engine
from .provider import Provider, new_provider
from .version import __version__


__all__ = [
    "Engine",
    "Provider",
    "new_provider",
    "__version__",
]
