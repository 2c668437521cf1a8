# bazaars/images.py
"""Local-directory storage for ad pictures.

Each image is written as two files: ``<id>`` with the raw bytes and
``<id>.meta`` with a small JSON document holding the original file name and
mime type. Ids are UUID4 strings; the ``images`` column of an ad stores
them in upload order.
"""
import os
import json
import uuid
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv
from .utils import logger

load_dotenv()

DEFAULT_IMAGE_DIR = os.getenv("IMAGE_DIR", "images")


class ImageNotFound(LookupError):
    pass


@dataclass
class Image:
    id: str
    file_name: str
    mime_type: str
    data: bytes


class LocalImageStore:
    def __init__(self, image_dir=DEFAULT_IMAGE_DIR):
        self.image_dir = Path(image_dir)
        self.image_dir.mkdir(parents=True, exist_ok=True)

    def _paths(self, image_id: str):
        try:
            # only canonical uuids map to files, nothing else can escape the dir
            canonical = str(uuid.UUID(image_id))
        except (ValueError, TypeError, AttributeError):
            raise ImageNotFound(image_id)
        if canonical != image_id:
            raise ImageNotFound(image_id)
        return self.image_dir / image_id, self.image_dir / f"{image_id}.meta"

    def save(self, file_name: str, data: bytes, mime_type: str) -> str:
        image_id = str(uuid.uuid4())
        path, meta_path = self._paths(image_id)
        path.write_bytes(data)
        meta_path.write_text(json.dumps({"file_name": file_name, "mime_type": mime_type}), encoding="utf-8")
        logger.info("Stored image %s (%s, %d bytes)", image_id, mime_type, len(data))
        return image_id

    def get(self, image_id: str) -> Image:
        path, meta_path = self._paths(image_id)
        try:
            data = path.read_bytes()
            meta = json.loads(meta_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise ImageNotFound(image_id)
        return Image(id=image_id, file_name=meta["file_name"], mime_type=meta["mime_type"], data=data)

    def exists(self, image_id: str) -> bool:
        try:
            path, meta_path = self._paths(image_id)
        except ImageNotFound:
            return False
        return path.exists() and meta_path.exists()

    def delete(self, image_id: str, missing_ok: bool = False):
        try:
            path, meta_path = self._paths(image_id)
        except ImageNotFound:
            if missing_ok:
                return
            raise
        if not missing_ok and not path.exists():
            raise ImageNotFound(image_id)
        path.unlink(missing_ok=True)
        meta_path.unlink(missing_ok=True)
        logger.info("Deleted image %s", image_id)
