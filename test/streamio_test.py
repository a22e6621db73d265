import errno
import io
import unittest.mock

import pytest

import diamondio


class TestDiamondStreamIO:

    @pytest.fixture
    def stream(self, sources):
        with diamondio.Diamond([sources['a'], sources['b']]).reader() as stream:
            yield stream

    def test_context_manager(self, sources):
        stream = diamondio.Diamond([sources['a']]).reader()
        assert not stream.closed

        with stream as stream1:
            assert stream is stream1
            assert not stream.closed

        assert stream.closed

    def test_readable(self, stream):
        assert stream.readable()

    def test_readable_closed(self, stream):
        stream.close()

        with pytest.raises(diamondio.IOClosed):
            stream.readable()

    def test_read(self, stream):
        assert stream.read() == b'x\nyz\n'
        assert stream.read() == b''

    def test_read_parts(self, stream):
        for (size, chunk) in (
            (3, b'x\ny'),
            (1, b'z'),
            (5, b'\n'),
            (5, b''),
        ):
            assert stream.read(size) == chunk

    def test_read_across_sources(self, stream):
        assert stream.read(4) == b'x\nyz'

    def test_read1(self, stream):
        # at most the content buffered of one source
        assert stream.read1(10) == b'x\ny'
        assert stream.read1(10) == b'z\n'
        assert stream.read1(10) == b''

    def test_readinto(self, stream):
        buffer = bytearray(10)
        assert stream.readinto(buffer) == 5
        assert buffer[:5] == b'x\nyz\n'

    def test_readline(self, stream):
        assert stream.readline() == b'x\n'
        assert stream.readline() == b'yz\n'
        assert stream.readline() == b''

    def test_iter(self, stream):
        assert list(stream) == [b'x\n', b'yz\n']

    def test_read_until(self, sources):
        with diamondio.Diamond([sources['a'], sources['csv']]).reader() as stream:
            buffer = bytearray()

            assert stream.read_until(b',', buffer) == 7
            assert buffer == b'x\nyone,'

            assert stream.read_until(b',', buffer) == 4
            assert stream.read_until(b',', buffer) == 5
            assert stream.read_until(b',', buffer) == 0
            assert buffer == b'x\nyone,two,three'

    def test_peek_consume(self, stream):
        assert stream.peek() == b'x\ny'

        stream.consume(2)
        assert stream.peek() == b'y'

        stream.consume(1)
        assert stream.peek() == b'z\n'

        stream.consume(2)
        assert stream.peek() == b''

    def test_consume_without_source(self, stream):
        stream.consume(0)
        stream.consume(3)

        assert stream.current_token is None
        assert stream.read() == b'x\nyz\n'

    def test_current_token(self, stream, sources):
        assert stream.current_token is None

        stream.read(3)
        assert stream.current_token == sources['a']

        stream.read(1)
        assert stream.current_token == sources['b']

    def test_skip_empty(self, sources):
        diamond = diamondio.Diamond([
            sources['empty'],
            sources['a'],
            sources['empty'],
            sources['b'],
            sources['empty'],
        ])
        assert diamond.reader().read() == b'x\nyz\n'

    def test_stdin(self, sources, stdin):
        diamond = diamondio.Diamond([sources['a'], '-'], stdin)
        assert diamond.reader().read() == b'x\nyfrom stdin\n'

    def test_open_failure(self, sources, missing):
        stream = diamondio.Diamond([sources['a'], missing, sources['b']]).reader()

        assert stream.read(3) == b'x\ny'

        with pytest.raises(FileNotFoundError):
            stream.read()

        assert stream.read() == b'z\n'

    def test_read_failure(self):
        stream = unittest.mock.Mock(**{
            'read1.side_effect': [b'ab', OSError(errno.EIO, 'boom'), b'cd', b''],
        })
        source = diamondio.SourceIOBase('flaky', stream)

        with diamondio.Diamond._from_sources([source]).reader() as reader:
            assert reader.read(2) == b'ab'

            with pytest.raises(OSError):
                reader.read()

            # source retained for retry
            assert reader.current_token == 'flaky'
            assert not source.closed

            assert reader.read() == b'cd'
            assert source.closed
            assert reader.read() == b''

    def test_exhausted(self, stream, opened):
        stream.read()

        for _ in range(3):
            assert stream.read() == b''
            assert stream.peek() == b''

        assert opened.call_count == 2

    def test_close(self, sources, opened):
        stream = diamondio.Diamond([sources['a'], sources['b']]).reader()
        stream.read(1)

        stream.close()

        (source,) = opened.sources
        assert source.closed

        with pytest.raises(diamondio.IOClosed):
            stream.read()

    def test_text_reader(self, sources):
        with diamondio.Diamond([sources['a'], sources['b']]).text_reader() as text:
            assert text.readlines() == ['x\n', 'yz\n']

    def test_text_reader_invalid(self, sources):
        with diamondio.Diamond([sources['invalid']]).text_reader() as text:
            with pytest.raises(UnicodeDecodeError):
                text.read()

    def test_text_reader_errors(self, sources):
        with diamondio.Diamond([sources['invalid']]).text_reader(errors='replace') as text:
            assert text.read() == '\ufffd\ufffd\nvalid\n'

    def test_not_seekable(self, stream):
        assert not stream.seekable()

    def test_not_writable(self, stream):
        assert not stream.writable()

    @pytest.mark.parametrize('method_name,method_args', (
        ('seek', (0,)),
        ('tell', ()),
        ('truncate', ()),
        ('write', (b'hi',)),
        ('fileno', ()),
    ))
    def test_write_methods(self, stream, method_name, method_args):
        method = getattr(stream, method_name)

        with pytest.raises(io.UnsupportedOperation):
            method(*method_args)
