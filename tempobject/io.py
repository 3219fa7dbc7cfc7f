"""Resolution of the objects a TempObject can be created from."""

import io
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any, Optional, Protocol, Union, runtime_checkable

from tempobject.exceptions import InvalidSourceError
from tempobject.infra.io.adapters import get_adapter

logger = logging.getLogger(__name__)


FilePath = Union[str, bytes, os.PathLike]


@runtime_checkable
class NamedSource(Protocol):
    """An object that knows the filename it was originally uploaded as."""

    original_filename: Optional[str]


@runtime_checkable
class PathedSource(Protocol):
    """An object that knows where its content lives on disk."""

    path: FilePath


class SourceKind(Enum):
    BYTES = "bytes"
    PATH = "path"


@dataclass(frozen=True)
class ResolvedSource:
    """What an input object turned out to be.

    Args:
        kind (SourceKind): Which representation the source provides.
        data (bytes): The payload, set when kind is `SourceKind.BYTES`.
        path (str): Absolute path to the payload, set when kind is
            `SourceKind.PATH`.
        original_filename (str): Best-effort name hint, or None.
    """

    kind: SourceKind
    data: Optional[bytes] = None
    path: Optional[str] = None
    original_filename: Optional[str] = None


def _is_path(obj: Any) -> bool:
    return isinstance(obj, str) or hasattr(obj, "__fspath__")


def absolute_path(file_path: FilePath) -> str:
    """Absolute `str` path for a str, bytes or `os.PathLike` path."""
    path = os.fspath(file_path)
    if isinstance(path, bytes):
        path = os.fsdecode(path)
    return os.path.abspath(path)


def filepath_from_file_or_path(file_or_path: Any) -> Optional[str]:
    """Return the absolute path behind a path or an open file handle.

    Returns None for handles that are not backed by a file on disk, like
    `io.BytesIO`, a file opened from a descriptor, `sys.stdin` or an upload
    wrapper whose `name` is a form field.
    """
    if _is_path(file_or_path):
        return absolute_path(file_or_path)

    name = getattr(file_or_path, "name", None)
    if not isinstance(name, (str, bytes)) or not name:
        return None

    path = absolute_path(name)
    adapter = get_adapter(path)
    if adapter is None or not adapter.is_file(path):
        return None
    return path


def _original_filename(obj: Any, path: Optional[str]) -> Optional[str]:
    if isinstance(obj, NamedSource) and obj.original_filename is not None:
        return obj.original_filename

    # Anonymous handles such as NamedTemporaryFile() carry a generated
    # name that says nothing about the content.
    if path is not None and (_is_path(obj) or isinstance(obj, io.IOBase)):
        return os.path.basename(path)

    return None


def _read_stream(stream: IO) -> bytes:
    if hasattr(stream, "seekable") and stream.seekable():
        stream.seek(0)
    data = stream.read()
    if isinstance(data, str):
        data = data.encode("utf8")
    return data


def resolve_source(obj: Any) -> ResolvedSource:
    """Classify the object a TempObject is created from.

    The following input types are supported:
        - A bytes, bytearray or memoryview object containing the data.
        - A string or `pathlib.Path` object representing a local file path.
          Relative paths are resolved against the current directory.
        - An open file handle whose `name` is an existing file. Only its
          path is used; the handle itself is left untouched.
        - Any other readable file-like object (eg. `io.BytesIO`, an upload
          stream). Its content is read into memory.
        - Any object with a `path` attribute (see `PathedSource`).

    Args:
        obj: The input object.

    Returns:
        ResolvedSource: The representation the input provides.

    Raises:
        InvalidSourceError: If the input type is not supported.

    Example:

        >>> resolve_source(b"HELLO").kind
        <SourceKind.BYTES: 'bytes'>
        >>> resolve_source("/tmp/round.gif").original_filename
        'round.gif'
    """
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return ResolvedSource(
            kind=SourceKind.BYTES,
            data=bytes(obj),
            original_filename=_original_filename(obj, None),
        )

    if _is_path(obj):
        path = absolute_path(obj)
        return ResolvedSource(
            kind=SourceKind.PATH,
            path=path,
            original_filename=_original_filename(obj, path),
        )

    if hasattr(obj, "read"):
        path = filepath_from_file_or_path(obj)
        if path is not None:
            return ResolvedSource(
                kind=SourceKind.PATH,
                path=path,
                original_filename=_original_filename(obj, path),
            )

        logger.debug(
            f"{obj.__class__.__name__} has no path, reading it into memory"
        )
        return ResolvedSource(
            kind=SourceKind.BYTES,
            data=_read_stream(obj),
            original_filename=_original_filename(obj, None),
        )

    if isinstance(obj, PathedSource) and _is_path(obj.path):
        return ResolvedSource(
            kind=SourceKind.PATH,
            path=absolute_path(obj.path),
            original_filename=_original_filename(obj, None),
        )

    raise InvalidSourceError(
        f"Unsupported source type: {obj.__class__.__name__}. Expected bytes, "
        "a path, a file handle or another TempObject."
    )
