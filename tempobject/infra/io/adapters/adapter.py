from abc import ABC, abstractmethod
from typing import BinaryIO, Iterator


class Adapter(ABC):
    @abstractmethod
    def supports(self, url: str) -> bool:
        pass

    @abstractmethod
    def is_file(self, url: str) -> bool:
        pass

    @abstractmethod
    def size(self, url: str) -> int:
        pass

    @abstractmethod
    def read_to_stream(self, url: str, output: BinaryIO):
        pass

    @abstractmethod
    def read_chunks(self, url: str, block_size: int) -> Iterator[bytes]:
        pass

    @abstractmethod
    def write_from_stream(self, url: str, input: BinaryIO):  # noqa: A002
        pass

    @abstractmethod
    def makedirs(self, url: str):
        pass


__all__ = ["Adapter"]
