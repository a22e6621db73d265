"""
baseio
------

Low-level primitives.

"""
import errno
import io
import os


class IOClosed(ValueError):
    """Exception indicating an attempted operation on a file-like
    object which has been closed.

    """
    _default_message_ = "I/O operation on closed file"

    def __init__(self, *args):
        if not args:
            args = (self._default_message_,)

        super().__init__(*args)


class IOConsumed(IOClosed):
    """Exception indicating an attempted operation on a diamond reader
    whose state has been handed over to an iterator or stream.

    """
    _default_message_ = "diamond reader has been consumed"


class StdinBusy(OSError):
    """Standard input is already held by another open source."""

    def __init__(self, *args):
        if not args:
            args = (errno.EBUSY, os.strerror(errno.EBUSY), '<stdin>')

        super().__init__(*args)


def delimiter_byte(delimiter):
    """Normalize ``delimiter`` -- an ``int`` or a single-byte ``bytes``
    -- to a single-byte ``bytes``.

    """
    if isinstance(delimiter, int):
        if not 0 <= delimiter <= 255:
            raise ValueError(f"delimiter out of byte range: {delimiter!r}")

        return bytes((delimiter,))

    if isinstance(delimiter, (bytes, bytearray)) and len(delimiter) == 1:
        return bytes(delimiter)

    raise ValueError(f"delimiter must be a single byte: {delimiter!r}")


class StreamBufferedIOBase(io.BufferedIOBase):
    """Readable binary file-like abstract base class.

    Concrete classes must implement methods ``fill`` -- to return the
    bytes currently available to be read, (refilling from the
    underlying source as necessary, and returning empty bytes only at
    the end of the stream) -- and ``consume`` -- to mark the given
    number of those bytes as read.

    ``read``, ``read1``, ``peek``, ``readinto``, ``readline``, iteration
    and ``read_until`` are implemented in terms of these.

    """
    def fill(self):
        raise NotImplementedError("StreamBufferedIOBase subclasses must implement fill")

    def consume(self, amount):
        raise NotImplementedError("StreamBufferedIOBase subclasses must implement consume")

    def readable(self):
        if self.closed:
            raise IOClosed()

        return True

    def peek(self, size=0):
        if self.closed:
            raise IOClosed()

        return self.fill()

    def read1(self, size=-1):
        if self.closed:
            raise IOClosed()

        available = self.fill()

        if size is None or size < 0:
            result = bytes(available)
        else:
            result = bytes(available[:size])

        self.consume(len(result))
        return result

    def read(self, size=-1):
        if self.closed:
            raise IOClosed()

        if size is not None and size < 0:
            size = None

        chunks = []

        while size is None or size > 0:
            content = self.read1(-1 if size is None else size)
            if not content:
                break

            if size is not None:
                size -= len(content)

            chunks.append(content)

        return b''.join(chunks)

    def read_until(self, delimiter, buffer):
        """Append bytes to ``buffer`` up to and including ``delimiter``
        or the end of the stream.

        Returns the number of bytes appended -- zero only at the end of
        the stream.

        """
        if self.closed:
            raise IOClosed()

        delimiter = delimiter_byte(delimiter)
        count = 0

        while True:
            available = self.fill()
            if not available:
                break

            index = available.find(delimiter)
            end = len(available) if index == -1 else index + 1

            buffer.extend(available[:end])
            self.consume(end)
            count += end

            if index != -1:
                break

        return count
