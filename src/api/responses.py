"""Response helpers shared by the API routes"""

import re
from urllib.parse import quote

# Anything outside printable ASCII, plus the characters that end or escape a
# quoted-string, is replaced in the plain filename parameter.
UNSAFE_FILENAME_CHARS = re.compile(r'[^\x20-\x7e]|["\\]')


def attachment_disposition(filename: str) -> str:
    """
    Content-Disposition value for a download

    Names that are not plain ASCII keep an ASCII fallback in `filename` and
    travel unchanged as `filename*=UTF-8''...` (RFC 5987).
    """
    fallback = UNSAFE_FILENAME_CHARS.sub("_", filename)
    value = f'attachment; filename="{fallback}"'
    if fallback != filename:
        value += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return value
