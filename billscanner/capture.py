import base64
import hashlib
import io
from dataclasses import dataclass
from typing import Optional

from loguru import logger
from PIL import Image, UnidentifiedImageError

DEFAULT_MIME_TYPE = "image/jpeg"


def sniff_mime_type(data: bytes) -> str:
    """Guess an image mime type from its bytes, defaulting to JPEG."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "", DEFAULT_MIME_TYPE)
    except (UnidentifiedImageError, OSError):
        logger.warning("Could not identify image format, assuming {}", DEFAULT_MIME_TYPE)
        return DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class CapturedImage:
    data: bytes
    mime_type: str
    name: str = "receipt"

    @property
    def base64_payload(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_payload}"

    @property
    def digest(self) -> str:
        return hashlib.sha1(self.data).hexdigest()


def from_upload(uploaded) -> Optional[CapturedImage]:
    """Build a CapturedImage from a Streamlit UploadedFile (or camera photo).

    Returns None when nothing was selected.
    """
    if uploaded is None:
        return None
    data = uploaded.getvalue()
    if not data:
        return None
    mime_type = getattr(uploaded, "type", None) or sniff_mime_type(data)
    return CapturedImage(data=data, mime_type=mime_type, name=getattr(uploaded, "name", "receipt"))
