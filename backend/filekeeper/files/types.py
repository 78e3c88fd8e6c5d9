"""
File manager type definitions and Pydantic models.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..db.records import FileRecord, FolderRecord


# Entities
class File(FileRecord):
    """A stored file plus its in-process display link (never persisted)."""

    display_url: Optional[str] = None


class Folder(FolderRecord):
    id: int


# Inputs and outputs of the presentation layer
class FileBlob(BaseModel):
    """Raw upload: a file name and its bytes"""

    name: str
    content: bytes


class DownloadHandle(BaseModel):
    filename: str
    media_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


# View filters, mutually exclusive
class NoFilter(BaseModel):
    kind: Literal["none"] = "none"


class FolderFilter(BaseModel):
    kind: Literal["folder"] = "folder"
    id: int


class SearchFilter(BaseModel):
    kind: Literal["search"] = "search"
    query: str = ""


ViewFilter = Annotated[
    Union[NoFilter, FolderFilter, SearchFilter], Field(discriminator="kind")
]


class SessionView(BaseModel):
    """Everything the presentation layer needs to render after an operation"""

    files: List[File]
    folders: List[Folder]
    displayed_files: List[File]
    active_filter: ViewFilter = Field(default_factory=NoFilter)
