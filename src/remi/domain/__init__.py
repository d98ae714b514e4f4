from .models import Nook
from .repositories import INookRepository, IPreferenceSink

__all__ = ["INookRepository", "IPreferenceSink", "Nook"]
