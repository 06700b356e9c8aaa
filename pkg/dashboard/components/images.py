import io
import base64
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from components.constants import MAX_GALLERY_IMAGES
from utils.cancellation import CancellationToken


def _file_name(file):
    return getattr(file, "name", None) or "image"


def _file_bytes(file) -> bytes:
    if isinstance(file, (bytes, bytearray)):
        return bytes(file)
    if hasattr(file, "getvalue"):
        return file.getvalue()
    return file.read()


def upload_id(file):
    # UploadedFile.file_id is unique per upload; plain files fall back to the name
    return getattr(file, "file_id", None) or _file_name(file)


def fresh_uploads(files, consumed: set) -> list:
    """
    Drop the files already taken from a multi-file uploader.

    The uploader reports every file it holds, not just the ones added since
    the last change, so ids are remembered in ``consumed``.
    """
    fresh = []
    for file in files or []:
        file_id = upload_id(file)
        if file_id in consumed:
            continue
        consumed.add(file_id)
        fresh.append(file)
    return fresh


def encode_image(file) -> str:
    """Return the image as a ``data:`` URI; raises ValueError if it does not decode."""
    raw_bytes = _file_bytes(file)
    try:
        with Image.open(io.BytesIO(raw_bytes)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValueError(f"{_file_name(file)} is not a readable image") from e

    mime = getattr(file, "type", None) or Image.MIME.get(image_format, "image/jpeg")
    encoded = base64.b64encode(raw_bytes).decode("utf-8")
    return f"data:{mime};base64,{encoded}"


class ImageAttachments:
    """Ordered, append-only list of photo previews as data URIs."""

    def __init__(self):
        self.logger = logging.getLogger(ImageAttachments.__name__)
        self.items = []

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def add_from_gallery(self, files, token: Optional[CancellationToken] = None) -> list:
        """
        Encode up to five selected files and append them in selection order.

        Files that fail to decode are skipped; their names are returned.
        """
        if not files:
            return []

        encoded, rejected = [], []
        for file in list(files)[:MAX_GALLERY_IMAGES]:
            try:
                encoded.append(encode_image(file))
            except ValueError as e:
                self.logger.warning(f"Skipping attachment: {e}")
                rejected.append(_file_name(file))

        if token is not None and token.cancelled:
            return rejected
        self.items.extend(encoded)
        return rejected

    def add_from_camera(self, file, token: Optional[CancellationToken] = None) -> bool:
        if file is None:
            return False
        try:
            encoded = encode_image(file)
        except ValueError as e:
            self.logger.warning(f"Skipping camera capture: {e}")
            return False

        if token is not None and token.cancelled:
            return False
        self.items.append(encoded)
        return True
