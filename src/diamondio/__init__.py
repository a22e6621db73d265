"""
Diamond I/O: Perl's diamond (``<>``) operator for Python.

Read lines from the files and standard input named on the command line
-- or from standard input when none is named -- either segmented by
source or as one consolidated stream.

"""
from .baseio import (IOClosed, IOConsumed, StdinBusy, StreamBufferedIOBase)
from .sourceio import (
    STDIN_TOKEN,
    FileSource,
    SourceIOBase,
    SourceSequence,
    StdinSource,
    open_source,
)
from .streamio import DiamondStreamIO
from .lineio import Diamond, diamond


__all__ = (
    'IOClosed',
    'IOConsumed',
    'StdinBusy',
    'StreamBufferedIOBase',
    'STDIN_TOKEN',
    'FileSource',
    'SourceIOBase',
    'SourceSequence',
    'StdinSource',
    'open_source',
    'DiamondStreamIO',
    'Diamond',
    'diamond',
)


__version__ = '0.1.0'
