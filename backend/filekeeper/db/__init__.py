from .gateway import Collection, StorageGateway
from .records import FileRecord, FolderRecord

__all__ = ["Collection", "FileRecord", "FolderRecord", "StorageGateway"]
