"""
lineio
------

Read lines, like Perl's diamond (``<>``) operator, from the files and
standard input named on the command line.

"""
import copy
import io

from . import baseio, sourceio, streamio


class Diamond:
    r"""Read lines from the files and standard input (``-``) named by
    command-line arguments -- or from standard input if no argument is
    given -- as does Perl's diamond (``<>``) operator, and many a Unix
    filter program.

    Sources are opened lazily and in order, one at a time; each is
    closed as soon as it is exhausted, before the next is opened.

    For example, to print every line given on the command line::

        >>> for line in Diamond():
        ...     print(line, end='')

    ...which, invoked as follows, prints all lines of ``file1.txt``,
    ``file2.txt``, standard input, and then ``file3.txt``:

    .. code-block:: sh

        mycmd file1.txt file2.txt - file3.txt

    The tokens to read may instead be specified explicitly::

        >>> diamond = Diamond(['file1.txt', '-'])

    ``Diamond`` offers two styles of read:

    *Segmented* reads -- ``read_until``, ``read_line`` and ``line_iter``
    -- return at the end of each source, whether or not the source's
    final line ends with a newline. Given ``a.txt`` with content
    ``'x\ny'`` and ``b.txt`` with content ``'z\n'``::

        >>> list(Diamond(['a.txt', 'b.txt']))
        ['x\n', 'y', 'z\n']

    The *consolidated* stream returned by ``reader`` instead treats all
    sources as one continuous stream of bytes::

        >>> Diamond(['a.txt', 'b.txt']).reader().readlines()
        [b'x\n', b'yz\n']

    A source which cannot be opened raises its error from the read
    which required it. That source is then skipped: the following read
    continues with the next source. Errors reading an open source are
    raised as is, and leave that source open, such that the read may be
    retried.

    ``line_iter``, ``reader`` and ``text_reader`` take over the state of
    the ``Diamond``; thereafter, its methods raise ``IOConsumed``.

    """
    _log_debug = False

    def __init__(self, tokens=None, stdin=None):
        self._init_state(sourceio.SourceSequence(tokens, stdin))

    def _init_state(self, remaining):
        self._remaining = remaining
        self._current = None
        self._exhausted = False
        self._closed = False
        self._consumed = False

    @classmethod
    def _from_sources(cls, sources):
        """Construct a ``Diamond`` reading the given iterable of
        already-constructed sources (rather than opening tokens).

        """
        diamond = cls.__new__(cls)
        diamond._init_state(iter(sources))
        return diamond

    @classmethod
    def _print_log(cls, where, message='', *message_args):
        if cls._log_debug:
            print('[debug]', '[%s]' % where, message % message_args)

    def __repr__(self):
        return f'<{self.__class__.__name__} current_token={self.current_token!r}>'

    @property
    def closed(self):
        return self._closed

    @property
    def current_token(self):
        """Token of the source currently open (or ``None``)."""
        return getattr(self._current, 'token', None)

    def _check_open(self):
        if self._consumed:
            raise baseio.IOConsumed()

        if self._closed:
            raise baseio.IOClosed()

    def _source(self):
        """Return the current source, opening the next as necessary.

        ``None`` indicates that all sources have been exhausted.

        """
        if self._current is None and not self._exhausted:
            try:
                self._current = next(self._remaining)
            except StopIteration:
                self._exhausted = True
                self._print_log('source', 'exhausted all')
            else:
                self._print_log('source', 'opened %r', self.current_token)

        return self._current

    def _discard(self):
        (source, self._current) = (self._current, None)
        self._print_log('source', 'exhausted %r', getattr(source, 'token', None))
        source.close()

    def _read_segment(self, read):
        while True:
            source = self._source()
            if source is None:
                return 0

            count = read(source)
            if count:
                return count

            self._discard()

    def read_until(self, delimiter, buffer):
        """Append bytes to the ``bytearray`` ``buffer`` until the
        ``delimiter`` byte or the end of the current source is reached.

        Works like ``read_until`` of a single buffered stream, except
        that it also returns at the end of each source.

        Returns the number of bytes appended; ``0`` indicates that all
        sources have been exhausted.

        """
        self._check_open()
        delimiter = baseio.delimiter_byte(delimiter)
        return self._read_segment(lambda source: source.read_until(delimiter, buffer))

    def read_line(self, buffer):
        """Write the next line to the writable text ``buffer``.

        The line is decoded as UTF-8, and retains its newline, if any.
        Lines also end at the end of each source.

        Returns the number of *bytes* read; ``0`` indicates that all
        sources have been exhausted. Invalid UTF-8 raises
        ``UnicodeDecodeError``, and nothing is written to ``buffer``.

        """
        self._check_open()
        write = buffer.write

        line = bytearray()
        count = self._read_segment(lambda source: source.read_until(b'\n', line))

        if count:
            write(line.decode('utf-8'))

        return count

    def _detach(self):
        self._check_open()

        detached = copy.copy(self)

        self._current = None
        self._remaining = iter(())
        self._exhausted = True
        self._consumed = True

        return detached

    def _iter_lines(self):
        with self:
            while True:
                buffer = io.StringIO()
                if not self.read_line(buffer):
                    break

                yield buffer.getvalue()

    def line_iter(self):
        """Generate the lines of all sources, (as with ``read_line``).

        Errors are raised from the generator, which is thereby ended.

        """
        return self._detach()._iter_lines()

    __iter__ = line_iter

    def reader(self):
        """Return a readable binary stream of all sources, as though
        they were one continuous stream.

        """
        return streamio.DiamondStreamIO(self._detach())

    def text_reader(self, encoding='utf-8', errors='strict', newline=None):
        """Return a readable text stream of all sources, as though they
        were one continuous stream.

        """
        return io.TextIOWrapper(self.reader(),
                                encoding=encoding,
                                errors=errors,
                                newline=newline)

    def close(self):
        if self._closed:
            return

        self._closed = True
        self._exhausted = True

        if self._current is not None:
            self._discard()

    def __enter__(self):
        self._check_open()
        return self

    def __exit__(self, *exc_info):
        self.close()


def diamond(tokens=None, stdin=None):
    return Diamond(tokens, stdin)


diamond.__doc__ = Diamond.__doc__
