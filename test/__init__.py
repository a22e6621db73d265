EXAMPLE_SOURCES = {
    'a': b'x\ny',
    'b': b'z\n',
    'c': b'last line\n',
    'empty': b'',
    'csv': b'one,two,three',
    'invalid': b'\xff\xfe\nvalid\n',
}


def write_sources(directory, contents=EXAMPLE_SOURCES):
    """Write each of the given ``contents`` to a file under
    ``directory``, and return a mapping of names to file paths.

    """
    paths = {}

    for (name, content) in contents.items():
        path = directory / f'{name}.txt'
        path.write_bytes(content)
        paths[name] = str(path)

    return paths
