from .container import Container, Registration
from .lifetime import Lifetime
from .bootstrap import bootstrap, create_container

__all__ = [
    "Container",
    "Lifetime",
    "Registration",
    "bootstrap",
    "create_container",
]
