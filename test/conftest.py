import io
import unittest.mock

import pytest

from diamondio import sourceio

from . import write_sources


@pytest.fixture
def sources(tmp_path):
    return write_sources(tmp_path)


@pytest.fixture
def missing(tmp_path):
    return str(tmp_path / 'nonexistent.txt')


@pytest.fixture
def stdin():
    return io.BytesIO(b'from stdin\n')


@pytest.fixture
def opened():
    """Record every source opened, (via ``open_source``)."""
    sources = []
    open_source = sourceio.open_source

    def record(*args, **kwargs):
        source = open_source(*args, **kwargs)
        sources.append(source)
        return source

    with unittest.mock.patch.object(sourceio, 'open_source', side_effect=record) as mock:
        mock.sources = sources
        yield mock
