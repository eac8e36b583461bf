"""List preview text for a note body: markup stripped, length capped."""

import re

_TAG = re.compile(r"<[^>]*>")
PREVIEW_LENGTH = 200


def preview_text(body: str, limit: int = PREVIEW_LENGTH) -> str:
    return _TAG.sub("", body)[:limit]
