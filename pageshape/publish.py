"""Repository paths for published Markdown documents.

A page at ``https://example.com/blog/my-post/`` lands at
``<base>/example.com/blog_my-post.md``.
"""

from __future__ import annotations

import posixpath
import re
from urllib.parse import urlparse

_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_-]")

UNKNOWN_HOST = "unknown-host"
INDEX_NAME = "index"


def publish_path(url: str, base_path: str = "") -> str:
    """Return the forward-slash path under which *url*'s Markdown is stored."""
    parsed = urlparse((url or "").strip())
    hostname = parsed.hostname or UNKNOWN_HOST
    page = parsed.path.strip("/") or INDEX_NAME
    file_name = _UNSAFE_RE.sub("_", page) + ".md"
    base = (base_path or "").strip().strip("/")
    return posixpath.join(base, hostname, file_name) if base else posixpath.join(hostname, file_name)
