"""
Derivation of the displayed file list from the full file set.

Nothing here touches the store or keeps state: the displayed list is always
recomputed from scratch from the canonical files and the active filter.
"""

from typing import Iterable, List, Sequence

from .types import File, Folder, FolderFilter, NoFilter, SearchFilter, ViewFilter

UNFILED_LABEL = "Unfiled"


def matches(file: File, view_filter: ViewFilter) -> bool:
    if isinstance(view_filter, FolderFilter):
        return file.folder_id == view_filter.id
    if isinstance(view_filter, SearchFilter):
        # Empty query matches everything
        return view_filter.query.casefold() in file.name.casefold()
    if isinstance(view_filter, NoFilter):
        return True
    raise TypeError(f"Unsupported view filter: {view_filter!r}")


def project(all_files: Iterable[File], view_filter: ViewFilter) -> List[File]:
    """Return the files visible under ``view_filter``, in input order."""
    return [file for file in all_files if matches(file, view_filter)]


def folder_label(file: File, folders: Sequence[Folder]) -> str:
    """Name of the folder containing ``file``, or a placeholder if unfiled."""
    for folder in folders:
        if folder.id == file.folder_id:
            return folder.name
    return UNFILED_LABEL
