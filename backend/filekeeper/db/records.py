"""
Record shapes exchanged with the storage gateway.

These mirror the persisted schema exactly; anything derived at runtime
(such as display links) lives on the domain types in ``files.types``.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FileRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    folder_id: Optional[int] = None
    content: bytes


class FolderRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None  # Assigned by the store on add
    name: str
    created_at: datetime
