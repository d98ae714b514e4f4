from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Optional

from ..config import NOOK_URL_SCHEME


@dataclass(frozen=True)
class Nook:
    id: str
    name: str
    url: str
    # Presentation hints; only ``update`` touches them.
    icon: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def create(cls, name: str) -> Nook:
        nook_id = str(uuid.uuid4())
        return cls(id=nook_id, name=name, url=url_for_id(nook_id))

    def renamed(self, new_name: str) -> Nook:
        return replace(self, name=new_name)


def url_for_id(nook_id: str) -> str:
    return f"{NOOK_URL_SCHEME}://nook/{nook_id}"
