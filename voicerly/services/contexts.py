"""Lightweight dataclasses shared across the upload and asset services."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional


@dataclass
class UploadRequest:
    client_address: Optional[str]
    payload: Optional[bytes]
    mime_type: Optional[str] = None
    file_name: Optional[str] = None
    # Size announced by the multipart part, checked before the body is read
    declared_size: Optional[int] = None
    loader: Optional[Callable[[], Awaitable[bytes]]] = None


@dataclass
class AssetMetadata:
    short_id: str
    file_name: str
    original_name: str
    file_size: int
    mime_type: str
    storage_path: str
    is_active: bool = True

    def to_record(self) -> Dict[str, Any]:
        """Columns written to the audio_files table."""
        return {
            "file_name": self.file_name,
            "original_name": self.original_name,
            "file_size": self.file_size,
            "mime_type": self.mime_type,
            "storage_path": self.storage_path,
            "is_active": self.is_active,
        }


@dataclass
class AdmissionResult:
    url: str
    short_id: str
    document_id: str
    storage_file_id: str
    metadata: AssetMetadata
    record: Dict[str, Any] = field(default_factory=dict)
