"""
Session controller: the surface the presentation layer calls into.

Every mutating call goes through the repository, then the whole state is
re-read from the store and the displayed list is projected again. No list is
ever patched in place, so what is shown cannot drift from what is stored.
"""

import mimetypes
from typing import Iterable, Optional

from . import files as repo
from .db.gateway import StorageGateway
from .errors import NotFound
from .files import (
    DownloadHandle,
    FileBlob,
    FolderFilter,
    NoFilter,
    ObjectUrlRegistry,
    SearchFilter,
    SessionView,
    ViewFilter,
    project,
)
from .logger import logger

_DEFAULT_MEDIA_TYPE = "application/octet-stream"


class FileManagerSession:
    """Presentation-facing controller over the repository and projection."""

    def __init__(
        self, gateway: StorageGateway, links: Optional[ObjectUrlRegistry] = None
    ):
        self.gateway = gateway
        self.links = links if links is not None else ObjectUrlRegistry()
        self.active_filter: ViewFilter = NoFilter()

    async def load(self) -> SessionView:
        """Hydrate the view from the store, e.g. on startup."""
        return await self._view()

    async def _view(self) -> SessionView:
        stored = await repo.list_files(self.gateway)
        folders = await repo.list_folders(self.gateway)

        self.links.retain(file.name for file in stored)
        files = [
            file.model_copy(update={"display_url": self.links.url_for(file.name)})
            for file in stored
        ]

        if isinstance(self.active_filter, FolderFilter) and not any(
            folder.id == self.active_filter.id for folder in folders
        ):
            logger.debug(f"Folder {self.active_filter.id} is gone, clearing filter")
            self.active_filter = NoFilter()

        return SessionView(
            files=files,
            folders=folders,
            displayed_files=project(files, self.active_filter),
            active_filter=self.active_filter,
        )

    async def on_upload(
        self, blobs: Iterable[FileBlob], folder_id: Optional[int]
    ) -> SessionView:
        await repo.upload_files(self.gateway, blobs, folder_id)
        return await self._view()

    async def on_create_folder(self, name: str) -> SessionView:
        await repo.create_folder(self.gateway, name)
        return await self._view()

    async def on_rename_folder(self, folder_id: int, name: str) -> SessionView:
        await repo.rename_folder(self.gateway, folder_id, name)
        return await self._view()

    async def on_delete_folder(self, folder_id: int) -> SessionView:
        for name in await repo.delete_folder(self.gateway, folder_id):
            self.links.revoke(name)
        return await self._view()

    async def on_rename_file(self, old_name: str, new_name: str) -> SessionView:
        await repo.rename_file(self.gateway, old_name, new_name)
        self.links.rename(old_name, new_name)
        return await self._view()

    async def on_delete_file(self, name: str) -> SessionView:
        await repo.delete_file(self.gateway, name)
        self.links.revoke(name)
        return await self._view()

    async def on_select_folder(self, folder_id: Optional[int]) -> SessionView:
        """Show only the files of one folder; ``None`` shows everything.

        Selecting a folder clears any search.
        """
        if folder_id is None:
            self.active_filter = NoFilter()
        else:
            if await repo.get_folder(self.gateway, folder_id) is None:
                raise NotFound(f"Folder {folder_id} does not exist")
            self.active_filter = FolderFilter(id=folder_id)
        return await self._view()

    async def on_search(self, query: str) -> SessionView:
        """Filter files by name; replaces any folder selection."""
        self.active_filter = SearchFilter(query=query)
        return await self._view()

    async def on_download(self, name: str) -> DownloadHandle:
        file = await repo.get_file(self.gateway, name)
        if file is None:
            raise NotFound(f"File {name!r} does not exist")
        media_type, _ = mimetypes.guess_type(file.name)
        return DownloadHandle(
            filename=file.name,
            media_type=media_type or _DEFAULT_MEDIA_TYPE,
            content=file.content,
        )

    async def on_copy_link(self, name: str) -> str:
        if await repo.get_file(self.gateway, name) is None:
            raise NotFound(f"File {name!r} does not exist")
        return self.links.url_for(name)

    async def open_link(self, url: str) -> DownloadHandle:
        """Fetch the file behind a link handed out by ``on_copy_link``."""
        name = self.links.resolve(url)
        if name is None:
            raise NotFound(f"Unknown or revoked link {url!r}")
        return await self.on_download(name)
