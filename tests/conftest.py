import os
import uuid
from datetime import datetime, timezone

import pytest

os.environ.setdefault("LOG_FILE", os.devnull)
os.environ["RATE_LIMIT_BACKEND"] = "memory"
os.environ["PUBLIC_BASE_URL"] = "https://voicerly.test"
os.environ["CLEANUP_TOKEN"] = "test-token"
os.environ.pop("STRICT_AUDIO_SIGNATURES", None)

from voicerly.core import database_ops, storage_ops  # noqa: E402

# "RIFF" + size + "WAVE" + one extra byte, just over the sniff threshold
WAV_BYTES = b"RIFF\x24\x00\x00\x00WAVEf"
WEBM_BYTES = b"\x1a\x45\xdf\xa3" + b"\x00" * 12
MP4_BYTES = b"\x00\x00\x00\x18ftypM4A " + b"\x00" * 8
MP3_BYTES = b"\xff\xfb\x90\x64" + b"\x00" * 12
OGG_BYTES = b"OggS\x00\x02" + b"\x00" * 10
UNKNOWN_BYTES = b"\x00\x01\x02\x03" * 8


class FakeAudioStore:
    """In-memory stand-in for the audio_files table."""

    def __init__(self):
        self.records = {}
        self.fail_create = False

    async def create_audio_record(self, record_data):
        if self.fail_create:
            raise Exception("insert failed")
        record = {
            **record_data,
            "id": str(uuid.uuid4()),
            "created_at": datetime.now(timezone.utc).isoformat(),
            "download_count": 0,
        }
        self.records[record["id"]] = record
        return record

    async def find_audio_record_by_short_id(self, short_id):
        for record in self.records.values():
            if record["file_name"].startswith(f"{short_id}.") and record["is_active"]:
                return record
        return None

    async def update_download_count(self, record_id):
        record = self.records[record_id]
        record["download_count"] += 1
        return record["download_count"]

    async def delete_audio_record(self, record_id):
        self.records.pop(record_id, None)
        return True

    async def get_file_stats(self):
        total_size = sum(r["file_size"] for r in self.records.values())
        return {
            "total_files": len(self.records),
            "total_size": total_size,
            "total_size_mb": f"{total_size / 1024 / 1024:.2f}",
            "old_files": 0,
            "old_files_size": 0,
            "old_files_size_mb": "0.00",
            "max_age_hours": 0,
        }

    async def delete_expired_files(self):
        stats = await self.get_file_stats()
        return {
            "deleted_count": 0,
            "total_size": stats["total_size"],
            "message": f"No files deleted - all files are permanent. Total files: {stats['total_files']}",
        }


class FakeStorage:
    """In-memory stand-in for the audio-storage bucket."""

    def __init__(self):
        self.objects = {}
        self.fail_upload = False
        self.fail_delete = False

    async def upload_audio_file(self, file_bytes, file_name, content_type="audio/webm"):
        if self.fail_upload:
            raise Exception("storage unavailable")
        self.objects[file_name] = (file_bytes, content_type)
        return file_name

    async def delete_file(self, path):
        if self.fail_delete:
            raise Exception("storage unavailable")
        self.objects.pop(path, None)
        return True

    def generate_public_url(self, path):
        return f"https://storage.test/audio-storage/{path}"


@pytest.fixture
def audio_store(monkeypatch):
    store = FakeAudioStore()
    for name in (
        "create_audio_record",
        "find_audio_record_by_short_id",
        "update_download_count",
        "delete_audio_record",
        "get_file_stats",
        "delete_expired_files",
    ):
        monkeypatch.setattr(database_ops, name, getattr(store, name))
    return store


@pytest.fixture
def storage(monkeypatch):
    fake = FakeStorage()
    for name in ("upload_audio_file", "delete_file", "generate_public_url"):
        monkeypatch.setattr(storage_ops, name, getattr(fake, name))
    return fake


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
