import re
import shutil
from abc import ABC, abstractmethod
from typing import BinaryIO, Iterator

import fsspec

from tempobject.exceptions import InputNotFoundError

from .adapter import Adapter


class FSSpecAdapter(Adapter, ABC):
    def _infer_protocol(self, url: str) -> str:
        """
        Infer the protocol based on the URL prefix.
        """
        protocol_pattern = re.compile(r"^[a-zA-Z\d]+://")
        match = protocol_pattern.match(url)
        if match:
            return match.group(0)[:-3]  # Remove '://' from the matched protocol
        return "file"  # Default to 'file' for local paths

    @abstractmethod
    def _get_filesystem(self, url: str) -> fsspec.AbstractFileSystem:
        """
        Get the fsspec filesystem that holds the given URL.
        """

    @abstractmethod
    def supports(self, url: str) -> bool:
        """
        Check if the adapter can handle the URL.
        """

    def is_file(self, url: str) -> bool:
        fs = self._get_filesystem(url)
        return fs.isfile(url)

    def size(self, url: str) -> int:
        """
        Size in bytes of the file at the URL, taken from its metadata.
        """
        fs = self._get_filesystem(url)
        try:
            return fs.size(url)
        except FileNotFoundError as e:
            raise InputNotFoundError(f"Input file not found: {url}") from e

    def read_to_stream(self, url: str, output: BinaryIO):
        """
        Reads content from the given URL and writes it to output. Copies
        data in chunks.
        """
        fs = self._get_filesystem(url)
        try:
            with fs.open(url, "rb") as source_file:
                shutil.copyfileobj(source_file, output)
        except FileNotFoundError as e:
            raise InputNotFoundError(f"Input file not found: {url}") from e

    def read_chunks(self, url: str, block_size: int) -> Iterator[bytes]:
        """
        Lazily yields the content of the URL in blocks of block_size bytes.
        The file is only opened once iteration starts.
        """
        fs = self._get_filesystem(url)
        try:
            source_file = fs.open(url, "rb")
        except FileNotFoundError as e:
            raise InputNotFoundError(f"Input file not found: {url}") from e

        with source_file:
            while True:
                chunk = source_file.read(block_size)
                if not chunk:
                    break
                yield chunk

    def write_from_stream(self, url: str, input: BinaryIO):  # noqa: A002
        """
        Writes content from input to the given URL, replacing whatever is
        there. Copies data in chunks.
        """
        fs = self._get_filesystem(url)
        with fs.open(url, "wb") as dest_file:
            shutil.copyfileobj(input, dest_file)

    def makedirs(self, url: str):
        fs = self._get_filesystem(url)
        fs.makedirs(url, exist_ok=True)
