"""
In-process display links for stored files.

A link stands in for a file wherever the presentation layer needs a URL
(previews, "copy link"). Links are minted lazily, live only as long as the
process, and are never written to the store; after a restart every file gets
a fresh one.
"""

import uuid
from typing import Dict, Optional

from ..config import settings


class ObjectUrlRegistry:
    """Process-local mapping between file names and their display links."""

    def __init__(self, scheme: Optional[str] = None, namespace: Optional[str] = None):
        self.scheme = scheme or settings.links.scheme
        self.namespace = namespace or settings.links.namespace
        self._by_name: Dict[str, str] = {}
        self._by_url: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._by_name)

    def url_for(self, name: str) -> str:
        """Return the link for ``name``, minting one on first use."""
        url = self._by_name.get(name)
        if url is None:
            url = f"{self.scheme}:{self.namespace}/{uuid.uuid4()}"
            self._by_name[name] = url
            self._by_url[url] = name
        return url

    def resolve(self, url: str) -> Optional[str]:
        """Map a link back to the file name it was minted for."""
        return self._by_url.get(url)

    def revoke(self, name: str) -> None:
        url = self._by_name.pop(name, None)
        if url is not None:
            del self._by_url[url]

    def rename(self, old_name: str, new_name: str) -> None:
        """Carry an existing link over to the file's new name."""
        url = self._by_name.pop(old_name, None)
        if url is None:
            return
        self.revoke(new_name)
        self._by_name[new_name] = url
        self._by_url[url] = new_name

    def retain(self, names) -> None:
        """Revoke every link whose file is not in ``names``."""
        keep = set(names)
        for name in [n for n in self._by_name if n not in keep]:
            self.revoke(name)
