"""File and folder CRUD operations over the storage gateway."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ..db.records import FileRecord, FolderRecord
from ..errors import InvalidInput, NameCollision, NotFound
from ..logger import logger
from .types import File, FileBlob, Folder

if TYPE_CHECKING:
    from ..db.gateway import StorageGateway


def _require_name(name: str, what: str) -> str:
    stripped = name.strip() if name else ""
    if not stripped:
        logger.warning(f"Rejected blank {what} name: {name!r}")
        raise InvalidInput(f"{what.capitalize()} name cannot be empty")
    return stripped


def _file(record: FileRecord) -> File:
    return File(**record.model_dump())


def _folder(record: FolderRecord) -> Folder:
    return Folder(**record.model_dump())


async def list_files(gateway: "StorageGateway") -> List[File]:
    """Get every stored file.

    Args:
        gateway: Storage gateway

    Returns:
        List of all files, without display links
    """
    return [_file(record) for record in await gateway.get_all("files")]


async def list_folders(gateway: "StorageGateway") -> List[Folder]:
    """Get every folder ordered by id.

    Args:
        gateway: Storage gateway

    Returns:
        List of all folders
    """
    return [_folder(record) for record in await gateway.get_all("folders")]


async def get_file(gateway: "StorageGateway", name: str) -> Optional[File]:
    record = await gateway.get("files", name)
    return _file(record) if record is not None else None


async def get_folder(gateway: "StorageGateway", folder_id: int) -> Optional[Folder]:
    record = await gateway.get("folders", folder_id)
    return _folder(record) if record is not None else None


async def upload_files(
    gateway: "StorageGateway",
    blobs: Iterable[FileBlob],
    target_folder_id: Optional[int],
) -> List[File]:
    """Store uploaded blobs inside an existing folder.

    A blob whose name is already stored replaces the previous file
    (last write wins), including duplicates within the same batch.

    Args:
        gateway: Storage gateway
        blobs: Uploaded names and contents
        target_folder_id: Folder receiving the files

    Returns:
        The stored files, one per distinct name, in upload order

    Raises:
        InvalidInput: If no folder is selected, the folder does not exist,
            or a blob has a blank name. Nothing is written in that case.
    """
    blobs = list(blobs)
    if target_folder_id is None:
        logger.warning("Rejected upload without a target folder")
        raise InvalidInput("Select a folder before uploading")
    for blob in blobs:
        _require_name(blob.name, "file")

    if await gateway.get("folders", target_folder_id) is None:
        logger.warning(f"Rejected upload into missing folder {target_folder_id}")
        raise InvalidInput(f"Folder {target_folder_id} does not exist")

    stored: Dict[str, File] = {}
    for blob in blobs:
        record = FileRecord(
            name=blob.name, folder_id=target_folder_id, content=blob.content
        )
        await gateway.put("files", record)
        stored.pop(blob.name, None)
        stored[blob.name] = _file(record)

    logger.info(f"Uploaded {len(stored)} file(s) into folder {target_folder_id}")
    return list(stored.values())


async def create_folder(gateway: "StorageGateway", name: str) -> Folder:
    """Create a new folder.

    Args:
        gateway: Storage gateway
        name: Folder name; blank names are rejected and surrounding
            whitespace is dropped from the stored name

    Returns:
        Created folder with its store-assigned id
    """
    record = FolderRecord(
        name=_require_name(name, "folder"), created_at=datetime.now(timezone.utc)
    )
    folder_id = await gateway.add("folders", record)
    folder = _folder(record.model_copy(update={"id": folder_id}))
    logger.info(f"Created folder {folder.id} ({folder.name!r})")
    return folder


async def rename_folder(
    gateway: "StorageGateway", folder_id: int, new_name: str
) -> Folder:
    """Rename a folder; its id and creation time are kept.

    Like on creation, surrounding whitespace is dropped from the stored name.

    Raises:
        InvalidInput: If the new name is blank
        NotFound: If the folder does not exist
    """
    name = _require_name(new_name, "folder")
    record = await gateway.get("folders", folder_id)
    if record is None:
        raise NotFound(f"Folder {folder_id} does not exist")

    renamed = record.model_copy(update={"name": name})
    await gateway.put("folders", renamed)
    logger.info(f"Renamed folder {folder_id}: {record.name!r} -> {name!r}")
    return _folder(renamed)


async def delete_folder(gateway: "StorageGateway", folder_id: int) -> List[str]:
    """Delete a folder together with every file inside it.

    Files go first so that no stored file ever points at a missing folder.
    An interruption part way through leaves the folder with fewer files,
    never files without a folder.

    Args:
        gateway: Storage gateway
        folder_id: Folder to delete

    Returns:
        Names of the deleted files

    Raises:
        NotFound: If the folder does not exist
    """
    if await gateway.get("folders", folder_id) is None:
        raise NotFound(f"Folder {folder_id} does not exist")

    contained = [
        record.name
        for record in await gateway.get_all("files")
        if record.folder_id == folder_id
    ]
    for name in contained:
        await gateway.delete("files", name)
    await gateway.delete("folders", folder_id)

    logger.info(f"Deleted folder {folder_id} and {len(contained)} file(s)")
    return contained


async def delete_file(gateway: "StorageGateway", name: str) -> None:
    """Delete a file by name. Deleting a missing file is not an error."""
    await gateway.delete("files", name)
    logger.info(f"Deleted file {name!r}")


async def rename_file(gateway: "StorageGateway", old_name: str, new_name: str) -> File:
    """Rename a file.

    The file is keyed by its name, so the renamed record is written first
    and the old one deleted afterwards; an interruption in between leaves
    both names stored rather than neither.

    Raises:
        InvalidInput: If the new name is blank
        NotFound: If ``old_name`` is not stored
        NameCollision: If ``new_name`` belongs to another file
    """
    _require_name(new_name, "file")
    record = await gateway.get("files", old_name)
    if record is None:
        raise NotFound(f"File {old_name!r} does not exist")
    if old_name == new_name:
        return _file(record)
    if await gateway.get("files", new_name) is not None:
        logger.warning(f"Rejected rename of {old_name!r}: {new_name!r} is taken")
        raise NameCollision(new_name)

    renamed = record.model_copy(update={"name": new_name})
    await gateway.put("files", renamed)
    await gateway.delete("files", old_name)
    logger.info(f"Renamed file {old_name!r} -> {new_name!r}")
    return _file(renamed)
