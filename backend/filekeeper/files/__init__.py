"""
File manager module.

This module provides:
- CRUD operations for files and folders over the storage gateway
- The projection deriving the displayed files from the active filter
- In-process display links for stored files
- Type definitions for all operations
"""

from .crud import (
    create_folder,
    delete_file,
    delete_folder,
    get_file,
    get_folder,
    list_files,
    list_folders,
    rename_file,
    rename_folder,
    upload_files,
)
from .links import ObjectUrlRegistry
from .projection import UNFILED_LABEL, folder_label, project
from .types import (
    DownloadHandle,
    File,
    FileBlob,
    Folder,
    FolderFilter,
    NoFilter,
    SearchFilter,
    SessionView,
    ViewFilter,
)

__all__ = [
    # Types
    "DownloadHandle",
    "File",
    "FileBlob",
    "Folder",
    "FolderFilter",
    "NoFilter",
    "SearchFilter",
    "SessionView",
    "ViewFilter",
    # CRUD operations
    "create_folder",
    "delete_file",
    "delete_folder",
    "get_file",
    "get_folder",
    "list_files",
    "list_folders",
    "rename_file",
    "rename_folder",
    "upload_files",
    # Projection
    "UNFILED_LABEL",
    "folder_label",
    "project",
    # Links
    "ObjectUrlRegistry",
]
