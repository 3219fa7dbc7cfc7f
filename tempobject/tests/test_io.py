import os
import tempfile
from io import BytesIO, StringIO
from pathlib import Path

import pytest

from tempobject.exceptions import InvalidSourceError
from tempobject.io import (
    NamedSource,
    PathedSource,
    ResolvedSource,
    SourceKind,
    filepath_from_file_or_path,
    resolve_source,
)


@pytest.fixture()
def sample_path(tmp_path: Path) -> Path:
    path = tmp_path / "round.gif"
    path.write_bytes(b"GIF89a")
    return path


class TestResolveSource:
    """Tests for the resolve_source function."""

    def test_bytes(self):
        """It should keep bytes in memory."""
        assert resolve_source(b"HELLO") == ResolvedSource(
            kind=SourceKind.BYTES, data=b"HELLO"
        )

    def test_memoryview(self):
        source = resolve_source(memoryview(b"HELLO"))
        assert source.kind == SourceKind.BYTES
        assert source.data == b"HELLO"

    def test_path_str(self, sample_path: Path):
        assert resolve_source(str(sample_path)) == ResolvedSource(
            kind=SourceKind.PATH,
            path=str(sample_path),
            original_filename="round.gif",
        )

    def test_path_obj(self, sample_path: Path):
        source = resolve_source(sample_path)
        assert source.kind == SourceKind.PATH
        assert source.path == str(sample_path)

    def test_path_bytes_is_data(self, sample_path: Path):
        """A bytes object is always data, never a path."""
        source = resolve_source(os.fsencode(sample_path))
        assert source.kind == SourceKind.BYTES

    def test_file(self, sample_path: Path):
        with open(sample_path, "rb") as fp:
            source = resolve_source(fp)
            assert fp.tell() == 0
        assert source.kind == SourceKind.PATH
        assert source.path == str(sample_path)
        assert source.original_filename == "round.gif"

    def test_text_file(self, sample_path: Path):
        with open(sample_path, "r") as fp:
            source = resolve_source(fp)
        assert source.path == str(sample_path)

    def test_stream(self):
        """It should read streams without a path into memory."""
        source = resolve_source(BytesIO(b"HELLO"))
        assert source.kind == SourceKind.BYTES
        assert source.data == b"HELLO"
        assert source.original_filename is None

    def test_text_stream(self):
        source = resolve_source(StringIO("HELLO"))
        assert source.data == b"HELLO"

    def test_stream_named_like_form_field(self, tmp_path: Path, monkeypatch):
        """A `name` that is not a file on disk should not be taken as a path."""
        monkeypatch.chdir(tmp_path)
        stream = BytesIO(b"HELLO")
        stream.name = "file"
        source = resolve_source(stream)
        assert source.kind == SourceKind.BYTES
        assert source.data == b"HELLO"
        assert source.path is None

    def test_stream_named_like_stdin(self):
        stream = BytesIO(b"HELLO")
        stream.name = "<stdin>"
        assert resolve_source(stream).data == b"HELLO"

    def test_named_stream(self):
        stream = BytesIO(b"HELLO")
        stream.original_filename = "hello.txt"
        source = resolve_source(stream)
        assert source.kind == SourceKind.BYTES
        assert source.original_filename == "hello.txt"

    @pytest.mark.parametrize("obj", [3, None, 1.5, ["HELLO"], object()])
    def test_unsupported(self, obj):
        with pytest.raises(InvalidSourceError):
            resolve_source(obj)


class TestCapabilities:
    def test_named_source(self):
        class Upload:
            original_filename = "photo.jpg"

        assert isinstance(Upload(), NamedSource)
        assert not isinstance(b"HELLO", NamedSource)

    def test_pathed_source(self, sample_path: Path):
        class Stored:
            path = str(sample_path)

        assert isinstance(Stored(), PathedSource)
        assert resolve_source(Stored()).path == str(sample_path)

    def test_pathed_source_without_usable_path(self):
        class Stored:
            path = None

        with pytest.raises(InvalidSourceError):
            resolve_source(Stored())


def test_filepath_from_file_or_path(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert filepath_from_file_or_path("data.xml") == str(tmp_path / "data.xml")
    assert filepath_from_file_or_path(Path("/tmp/x")) == os.path.abspath(
        "/tmp/x"
    )
    assert filepath_from_file_or_path(BytesIO(b"")) is None

    stream = BytesIO(b"")
    stream.name = "data.xml"
    assert filepath_from_file_or_path(stream) is None
    (tmp_path / "data.xml").write_bytes(b"<xml/>")
    assert filepath_from_file_or_path(stream) == str(tmp_path / "data.xml")

    with tempfile.TemporaryFile() as fp:
        # Anonymous temp files are named by their descriptor on POSIX
        if not isinstance(fp.name, str):
            assert filepath_from_file_or_path(fp) is None
