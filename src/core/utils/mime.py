from collections.abc import Mapping

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
}

WEBP_RIFF = b"RIFF"
WEBP_FOURCC = b"WEBP"


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    # RIFF container: 4-byte size then the format fourcc
    if file_data.startswith(WEBP_RIFF) and file_data[8:12] == WEBP_FOURCC:
        return "image/webp"

    raise ValueError("Unsupported or unknown file type")
