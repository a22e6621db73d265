"""
sourceio
--------

Open the sources named by command-line arguments, one at a time.

A source is either standard input -- named by the token ``-`` -- or a
file at the path named by any other token. Each is represented by a
buffered, readable file-like object, (``StdinSource`` or
``FileSource``), and a sequence of tokens is lazily opened, in order,
by ``SourceSequence``.

"""
import errno
import io
import itertools
import os
import sys
import threading

from . import baseio


STDIN_TOKEN = '-'

_stdin_lock = threading.Lock()


def is_stdin_token(token):
    """Whether ``token`` names standard input.

    Only the string ``'-'`` (or its ``bytes`` equivalent) does so.
    Path objects always name files, such that ``Path('-')`` may be used
    to read a file actually named ``-``.

    """
    if isinstance(token, bytes):
        return token == os.fsencode(STDIN_TOKEN)

    return isinstance(token, str) and token == STDIN_TOKEN


class SourceIOBase(baseio.StreamBufferedIOBase):
    """Buffered reader of a single source.

    Bytes are read from the underlying ``stream`` in chunks of at most
    ``buffer_size``, and retained until consumed.

    A failed read of the underlying stream leaves the source as it was,
    such that the read may be retried.

    """
    buffer_size = io.DEFAULT_BUFFER_SIZE

    _stream = None

    def __init__(self, token, stream):
        super().__init__()
        self.token = token
        self._stream = stream
        self._remainder = b''
        self._position = 0

    def __repr__(self):
        return f'<{self.__class__.__name__} token={self.token!r}>'

    def _read_chunk(self):
        read1 = getattr(self._stream, 'read1', self._stream.read)
        return read1(self.buffer_size) or b''

    def _available(self):
        if self._position >= len(self._remainder):
            self._remainder = self._read_chunk()
            self._position = 0

        return len(self._remainder) - self._position

    def fill(self):
        if self.closed:
            raise baseio.IOClosed()

        self._available()

        if self._position:
            self._remainder = self._remainder[self._position:]
            self._position = 0

        return self._remainder

    def consume(self, amount):
        self._position = min(self._position + amount, len(self._remainder))

    def read_until(self, delimiter, buffer):
        if self.closed:
            raise baseio.IOClosed()

        delimiter = baseio.delimiter_byte(delimiter)
        count = 0

        while self._available():
            index = self._remainder.find(delimiter, self._position)
            end = len(self._remainder) if index == -1 else index + 1

            buffer.extend(self._remainder[self._position:end])
            count += end - self._position
            self._position = end

            if index != -1:
                break

        return count

    def close(self):
        self._remainder = b''
        self._position = 0
        super().close()


class StdinSource(SourceIOBase):
    """Source reading the process's (binary) standard input.

    Standard input is held exclusively while the source is open: at
    most one ``StdinSource`` may be open at a time, and opening another
    raises ``StdinBusy``. Closing the source releases standard input --
    it does not close it.

    """
    _locked = False

    def __init__(self, token=STDIN_TOKEN, stream=None):
        if stream is None:
            stream = getattr(sys.stdin, 'buffer', None)
            if stream is None:
                raise OSError(errno.EBADF, "standard input unavailable", '<stdin>')

        if not _stdin_lock.acquire(blocking=False):
            raise baseio.StdinBusy()

        self._locked = True

        super().__init__(token, stream)

    def close(self):
        try:
            super().close()
        finally:
            if self._locked:
                self._locked = False
                _stdin_lock.release()


class FileSource(SourceIOBase):
    """Source reading the file at the path named by ``token``."""

    def __init__(self, token):
        stream = open(token, 'rb')
        super().__init__(token, stream)

    def close(self):
        try:
            super().close()
        finally:
            if self._stream is not None:
                self._stream.close()


def open_source(token, stdin=None):
    """Open the source named by ``token``.

    Any failure to open -- (*e.g.* ``FileNotFoundError``,
    ``PermissionError`` or ``StdinBusy``) -- is raised as is.

    """
    if is_stdin_token(token):
        return StdinSource(token, stdin)

    return FileSource(token)


class SourceSequence:
    """Lazy, single-pass iterator of the sources named by ``tokens``.

    ``tokens`` default to the process's command-line arguments, (less
    the program name), as of the first call to ``next``. A single token
    may be given in place of a sequence. Given no tokens, a single
    source of standard input is produced.

    Only one token is opened per call to ``next``, and a token which
    fails to open raises its error from that call. The failed token is
    nonetheless consumed: the following call continues with the next
    token.

    The token most recently produced is available as ``token``.

    """
    _empty = object()

    def __init__(self, tokens=None, stdin=None):
        if isinstance(tokens, (str, bytes, os.PathLike)):
            tokens = (tokens,)

        self.__tokens__ = tokens
        self.__iterator__ = None
        self.stdin = stdin
        self.token = None

    def _iter_tokens(self):
        tokens = sys.argv[1:] if self.__tokens__ is None else self.__tokens__
        iterator = iter(tokens)

        first = next(iterator, self._empty)
        if first is self._empty:
            return iter((STDIN_TOKEN,))

        return itertools.chain((first,), iterator)

    def __iter__(self):
        return self

    def __next__(self):
        if self.__iterator__ is None:
            self.__iterator__ = self._iter_tokens()

        self.token = next(self.__iterator__)
        return open_source(self.token, self.stdin)
