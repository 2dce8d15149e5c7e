import io
from typing import Optional

import pytest

from shrine import MemoryStorage, Uploader, ValidationEngine


class FakeIO(io.BytesIO):
    """In-memory upload carrying the attributes real uploads expose."""

    def __init__(
        self,
        content: bytes = b"file",
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        dimensions: Optional[tuple[int, int]] = None,
    ):
        super().__init__(content)
        self.original_filename = filename
        self.content_type = content_type
        self.dimensions = dimensions


def read_dimensions(upload: io.BytesIO) -> Optional[tuple[int, int]]:
    """Dimensions analyzer returning the dimensions a FakeIO declares."""
    return getattr(upload, "dimensions", None)


@pytest.fixture
def fakeio():
    """Factory for FakeIO uploads."""
    return FakeIO


@pytest.fixture
def storages() -> dict[str, MemoryStorage]:
    return {"cache": MemoryStorage(), "store": MemoryStorage()}


@pytest.fixture
def uploader(storages: dict[str, MemoryStorage]) -> Uploader:
    return Uploader("store", storages)


@pytest.fixture
def image_uploader(storages: dict[str, MemoryStorage]) -> Uploader:
    """Uploader storing width and height of uploads."""
    return Uploader("store", storages, dimensions_analyzer=read_dimensions)


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine()
