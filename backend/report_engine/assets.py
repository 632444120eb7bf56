"""
Asset Encoder

Turns an uploaded file into a self-describing inline asset (media type +
base64 text) that every renderer can embed without touching the disk again.
"""

import asyncio
import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .exceptions import AssetReadError

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadedFile:
    """A file spooled to temporary storage by the transport layer."""
    path: Path
    media_type: str
    filename: str = ""


@dataclass(frozen=True)
class EncodedAsset:
    media_type: str
    data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"

    @classmethod
    def from_data_url(cls, url: str) -> "EncodedAsset":
        """
        Parse a data URL back into an asset.

        Raises:
            ValueError: url is not a base64 data URL
        """
        if not url.startswith("data:") or "," not in url:
            raise ValueError("Not a data URL")
        header, data = url.split(",", 1)
        if not header.endswith(";base64"):
            raise ValueError("Data URL is not base64 encoded")
        media_type = header[len("data:"):-len(";base64")] or DEFAULT_MEDIA_TYPE
        return cls(media_type=media_type, data=data)

    @classmethod
    def from_bytes(cls, content: bytes, media_type: str) -> "EncodedAsset":
        return cls(media_type=media_type, data=base64.b64encode(content).decode("ascii"))

    def decode(self) -> bytes:
        return base64.b64decode(self.data)

    @property
    def is_jpeg(self) -> bool:
        return "jpeg" in self.media_type

    @property
    def extension(self) -> str:
        """File extension used when the asset is written out as a file."""
        return "jpg" if self.is_jpeg else "png"


def encode_file(upload: UploadedFile) -> EncodedAsset:
    """
    Read an uploaded file fully and encode it.

    The media type is taken verbatim from the upload metadata.

    Raises:
        AssetReadError: the spooled file is missing or unreadable
    """
    try:
        content = Path(upload.path).read_bytes()
    except OSError as e:
        raise AssetReadError(upload.path, e.strerror or str(e)) from e

    return EncodedAsset.from_bytes(content, upload.media_type or DEFAULT_MEDIA_TYPE)


async def encode_files(uploads: Sequence[UploadedFile]) -> List[EncodedAsset]:
    """Encode files concurrently. Results keep input order."""
    if not uploads:
        return []
    assets = await asyncio.gather(*(asyncio.to_thread(encode_file, u) for u in uploads))
    logger.debug("Encoded %d uploaded files", len(assets))
    return list(assets)
