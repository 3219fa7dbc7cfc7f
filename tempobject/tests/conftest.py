"""Module to store common fixtures. """

import tempfile
from io import BytesIO
from pathlib import Path

import pytest

from tempobject import TempObject
from tempobject.config import reset_config

SOURCE_KINDS = [
    "bytes",
    "path_str",
    "pathlib",
    "file",
    "named_tempfile",
    "stream",
    "temp_object",
]


@pytest.fixture(scope="session")
def base_dir() -> Path:
    return Path(__file__).parent


@pytest.fixture(autouse=True)
def tear_down():
    """Make sure all config changes are reverted for next tests."""
    try:
        yield
    finally:
        reset_config()


@pytest.fixture
def sample_data() -> bytes:
    """20000 bytes of non-repeating-looking content."""
    return bytes(i * 7 % 251 for i in range(20000))


@pytest.fixture
def make_source(tmp_path: Path):
    """Build an input object of the requested kind holding the given data."""
    handles = []

    def _make_source(kind: str, data: bytes = b"HELLO"):
        path = tmp_path / "test_file"
        if kind in ("path_str", "pathlib", "file"):
            path.write_bytes(data)

        if kind == "bytes":
            return data
        elif kind == "path_str":
            return str(path)
        elif kind == "pathlib":
            return path
        elif kind == "file":
            fp = open(path, "rb")
            handles.append(fp)
            return fp
        elif kind == "named_tempfile":
            fp = tempfile.NamedTemporaryFile(dir=tmp_path)
            fp.write(data)
            fp.flush()
            fp.seek(0)
            handles.append(fp)
            return fp
        elif kind == "stream":
            return BytesIO(data)
        elif kind == "temp_object":
            return TempObject(data)
        raise ValueError(f"Unknown source kind {kind}")

    yield _make_source

    for handle in handles:
        handle.close()


@pytest.fixture(params=SOURCE_KINDS)
def source_kind(request) -> str:
    return request.param


@pytest.fixture
def new_temp_object(make_source, source_kind):
    """Create TempObjects from every supported kind of input."""
    temp_objects = []

    def _new_temp_object(data: bytes = b"HELLO", klass=TempObject):
        temp_object = klass(make_source(source_kind, data))
        temp_objects.append(temp_object)
        return temp_object

    yield _new_temp_object

    for temp_object in temp_objects:
        temp_object.close()
