"""
streamio
--------

Present a sequence of sources as one continuous binary stream.

"""
from . import baseio


class DiamondStreamIO(baseio.StreamBufferedIOBase):
    r"""Readable binary file-like interface to all sources of a
    ``Diamond``, consolidated into a single stream.

    Unlike the segmented reads of ``Diamond``, the boundaries between
    sources are invisible: reads proceed from the end of one source
    directly into the next, and only the end of the last source is
    reported as the end of the stream. Given ``a.txt`` with content
    ``'x\ny'`` and ``b.txt`` with content ``'z\n'``::

        >>> with Diamond(['a.txt', 'b.txt']).reader() as stream:
        ...     stream.read()
        b'x\nyz\n'

    ``DiamondStreamIO`` may be wrapped by ``io.TextIOWrapper``, (as by
    ``Diamond.text_reader``), or handed to any consumer expecting a
    binary file.

    It is not "seekable" nor "writable". Closing the stream closes the
    source, if any, currently open.

    """
    def __init__(self, diamond):
        super().__init__()
        self.__diamond__ = diamond

    @property
    def current_token(self):
        return self.__diamond__.current_token

    def fill(self):
        if self.closed:
            raise baseio.IOClosed()

        while True:
            source = self.__diamond__._source()
            if source is None:
                return b''

            available = source.fill()
            if available:
                return available

            self.__diamond__._discard()

    def consume(self, amount):
        source = self.__diamond__._current
        if source is not None:
            source.consume(amount)

    def close(self):
        try:
            self.__diamond__.close()
        finally:
            super().close()
