from typing import Optional

from .adapter import Adapter
from .file import FileAdapter

adapters = [FileAdapter()]


def get_adapter(url: str) -> Optional[Adapter]:
    for adapter in adapters:
        if adapter.supports(url):
            return adapter
