"""
Document reference helpers: turning editor URIs into paths the compiler
can be given, and checking that paths survive being passed as text.
"""
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from ..errors import NonRepresentablePathError, UnsupportedReferenceError

PathArg = Union[str, bytes, "os.PathLike"]

_LOCAL_HOSTS = ("", "localhost")


def as_text(path: PathArg) -> Optional[str]:
    """Return the path as UTF-8 representable text, or None if it has none."""
    raw = os.fspath(path)
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError:
        # Undecodable filename bytes come back from os.fsdecode as surrogates.
        return None
    return raw


def uri_to_path(uri: str) -> str:
    """
    Resolve a ``file://`` URI to a local filesystem path.
    Raises UnsupportedReferenceError for other schemes or remote hosts and
    NonRepresentablePathError when the path is not valid UTF-8.
    """
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        raise UnsupportedReferenceError(uri)
    if parsed.netloc not in _LOCAL_HOSTS or not parsed.path:
        raise UnsupportedReferenceError(uri, "Failed to normalize URI path")

    if os.name == "nt":
        path = url2pathname(parsed.path)
    else:
        path = unquote(parsed.path, errors="surrogateescape")

    text = as_text(path)
    if text is None:
        raise NonRepresentablePathError(path)
    return text


def path_to_uri(path: PathArg) -> str:
    """Absolute ``file://`` URI for a local path."""
    return Path(os.fsdecode(path)).resolve().as_uri()
