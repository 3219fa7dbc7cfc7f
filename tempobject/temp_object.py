"""A payload that lives in memory, on disk, or both.

A `TempObject` wraps one piece of binary data and hands it out as bytes, as
a path or as an open file, converting between memory and disk only when a
representation is asked for. Every conversion happens at most once; the
result is cached for the lifetime of the object.

Example:

    >>> with TempObject(b"HELLO") as temp_object:
    ...     path = temp_object.path  # written to a temp file on first use
    ...     temp_object.data
    b'HELLO'
"""

import logging
import os
import tempfile
from io import BytesIO
from typing import (
    Any,
    BinaryIO,
    Callable,
    Iterator,
    Optional,
    TypeVar,
    Union,
)

from tempobject.config import get_config
from tempobject.exceptions import AdapterError, ClosedError, InvalidSourceError
from tempobject.infra.io.adapters import Adapter, get_adapter
from tempobject.io import (
    FilePath,
    SourceKind,
    absolute_path,
    resolve_source,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TempFileHandle:
    """A closed handle on a file that can be opened again and again.

    Every call to `open` returns a new binary handle positioned at the start
    of the file, so the content can be read any number of times.
    """

    def __init__(self, path: str):
        self.path = path
        self._fp: Optional[BinaryIO] = None

    @property
    def name(self) -> str:
        return self.path

    @property
    def closed(self) -> bool:
        return self._fp is None or self._fp.closed

    def open(self) -> BinaryIO:
        self.close()
        self._fp = open(self.path, "rb")
        return self._fp

    def close(self):
        if self._fp is not None:
            self._fp.close()

    def __enter__(self) -> BinaryIO:
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return f"TempFileHandle(path={self.path!r}, closed={self.closed})"


class TempObject:
    """Lazily converted binary payload.

    Args:
        obj: The payload. Either bytes, a path, an open file handle, an
            object with a `path` attribute or another TempObject. See
            `tempobject.io.resolve_source` for the details.
        name: Overrides the name hint taken from `obj`.

    Raises:
        InvalidSourceError: If `obj` is none of the supported types.
        ClosedError: If `obj` is a TempObject that is already closed.
    """

    # Bytes per chunk when iterating. None falls back to the
    # "block_size" config; subclasses may set their own.
    block_size: Optional[int] = None

    Closed = ClosedError
    InvalidSource = InvalidSourceError

    def __init__(self, obj: Any, name: Optional[str] = None):
        self._data: Optional[bytes] = None
        self._path: Optional[str] = None
        self._tempfile_path: Optional[str] = None
        self._closed = False

        if isinstance(obj, TempObject):
            obj._ensure_open()
            # The source keeps ownership of its temp file, so only a
            # caller supplied path is shared with the copy.
            self._data = obj._data
            if obj._path != obj._tempfile_path:
                self._path = obj._path
            self.original_filename = obj.original_filename
        else:
            source = resolve_source(obj)
            if source.kind == SourceKind.BYTES:
                self._data = source.data
            else:
                self._path = source.path
            self.original_filename = source.original_filename

        if name is not None:
            self.original_filename = name

    @property
    def name(self) -> Optional[str]:
        return self.original_filename

    @name.setter
    def name(self, value: Optional[str]):
        self.original_filename = value

    @property
    def ext(self) -> Optional[str]:
        """Extension of the name hint, without the leading dot."""
        if not self.original_filename:
            return None
        ext = os.path.splitext(self.original_filename)[1]
        return ext[1:] or None

    @property
    def basename(self) -> Optional[str]:
        """Name hint without its extension."""
        if not self.original_filename:
            return None
        return os.path.splitext(os.path.basename(self.original_filename))[0]

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def data(self) -> bytes:
        """The payload as bytes. Reads the file once if needed."""
        self._ensure_open()
        if self._data is None:
            stream = BytesIO()
            self._adapter(self._path).read_to_stream(self._path, stream)
            self._data = stream.getvalue()
        return self._data

    @property
    def path(self) -> str:
        """Absolute path of a file holding the payload.

        Bytes are written to a temp file on first access; later calls return
        the same path.
        """
        self._ensure_open()
        if self._path is None:
            self._path = self._write_tempfile()
        return self._path

    @property
    def size(self) -> int:
        """Size of the payload in bytes, without reading a file into memory."""
        self._ensure_open()
        if self._data is not None:
            return len(self._data)
        return self._adapter(self._path).size(self._path)

    def file(
        self, func: Optional[Callable[[BinaryIO], T]] = None
    ) -> Union[BinaryIO, T]:
        """Open the payload for reading.

        Without `func` the open handle is returned and the caller is
        responsible for closing it (eg. by using it in a `with` block). With
        `func`, the handle is passed to it and closed afterwards, and the
        result of `func` is returned.

        Example:

            >>> temp_object.file(lambda fp: fp.read())
            b'HELLO'
        """
        fp = open(self.path, "rb")
        if func is None:
            return fp

        with fp:
            return func(fp)

    def tempfile(self) -> TempFileHandle:
        """A closed, reopenable handle on the payload's file."""
        return TempFileHandle(self.path)

    def to_file(
        self,
        path: FilePath,
        mode: Optional[int] = None,
        mkdirs: bool = True,
    ) -> BinaryIO:
        """Write the payload to `path` and return it opened for reading.

        An existing file at `path` is overwritten. The file gets permission
        bits `mode`, which defaults to the "file_mode" config (0o644).

        Args:
            path: The destination.
            mode: Permission bits for the destination.
            mkdirs: Create missing parent directories.

        Returns:
            BinaryIO: The destination, opened in 'rb' mode.
        """
        self._ensure_open()
        dest = absolute_path(path)
        adapter = self._adapter(dest)

        if mkdirs:
            adapter.makedirs(os.path.dirname(dest))

        if self._path is not None:
            if self._path != dest:
                logger.debug(f"Copying {self._path} to {dest}")
                with open(self._path, "rb") as source_file:
                    adapter.write_from_stream(dest, source_file)
        else:
            logger.debug(f"Writing {len(self._data)} bytes to {dest}")
            adapter.write_from_stream(dest, BytesIO(self._data))

        os.chmod(dest, get_config("file_mode") if mode is None else mode)
        return open(dest, "rb")

    def each(self, block_size: Optional[int] = None) -> Iterator[bytes]:
        """Iterate over the payload in chunks of `block_size` bytes.

        Uses whichever representation is already there: cached bytes are
        sliced, a path is streamed from disk. Iterating never converts one
        representation into the other.
        """
        self._ensure_open()
        if block_size is None:
            block_size = self._block_size()
        if block_size < 1:
            raise ValueError(f"block_size must be at least 1, got {block_size}")

        if self._data is not None:
            return self._iter_data(self._data, block_size)
        return self._adapter(self._path).read_chunks(self._path, block_size)

    def __iter__(self) -> Iterator[bytes]:
        return self.each()

    def close(self):
        """Remove the owned temp file, if any, and drop all representations.

        Calling close on a closed object does nothing.
        """
        if self._closed:
            return

        try:
            if self._tempfile_path is not None and os.path.exists(
                self._tempfile_path
            ):
                os.remove(self._tempfile_path)
                logger.debug(f"Removed temp file {self._tempfile_path}")
        finally:
            self._data = None
            self._path = None
            self._tempfile_path = None
            self._closed = True

    def __enter__(self) -> "TempObject":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        representations = []
        if self._data is not None:
            representations.append(f"data={len(self._data)} bytes")
        if self._path is not None:
            representations.append(f"path={self._path!r}")
        if self._closed:
            representations.append("closed")
        return (
            f"{self.__class__.__name__}(name={self.original_filename!r}"
            + "".join(f", {r}" for r in representations)
            + ")"
        )

    @classmethod
    def _block_size(cls) -> int:
        if cls.block_size is not None:
            return cls.block_size
        return get_config("block_size")

    @staticmethod
    def _iter_data(data: bytes, block_size: int) -> Iterator[bytes]:
        for offset in range(0, len(data), block_size):
            yield data[offset : offset + block_size]

    @staticmethod
    def _adapter(url: str) -> Adapter:
        adapter = get_adapter(url)
        if adapter is None:
            raise AdapterError(f"No adapter found for {url}")
        return adapter

    def _ensure_open(self):
        if self._closed:
            raise ClosedError(
                f"{self.__class__.__name__} has been closed and can no "
                "longer be read"
            )

    def _write_tempfile(self) -> str:
        suffix = f".{self.ext}" if self.ext else ""
        fd, path = tempfile.mkstemp(
            prefix=get_config("tempfile_prefix"),
            suffix=suffix,
            dir=get_config("tempdir"),
        )
        try:
            try:
                fp = os.fdopen(fd, "wb")
            except OSError:
                os.close(fd)
                raise

            with fp:
                fp.write(self._data)
        except OSError:
            if os.path.exists(path):
                os.remove(path)
            raise

        logger.debug(f"Wrote {len(self._data)} bytes to temp file {path}")
        self._tempfile_path = path
        return path
