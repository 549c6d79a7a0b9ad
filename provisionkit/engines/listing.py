"""
Parsers for archive listing output.

Each compression engine lists archive members differently. These parsers
normalize that output to an ordered list of member file paths:
directories are dropped, a leading ``./`` (or ``.\\``) is stripped and the
tool's ordering is preserved.
"""

from typing import List

from provisionkit.core.exceptions import ListingParseError

_CURRENT_DIR_PREFIXES = ("./", ".\\")


def _split_lines(output: str) -> List[str]:
    # Drop "\r" left behind by Windows line endings
    return [line.rstrip("\r") for line in output.split("\n")]


def _strip_current_dir(name: str) -> str:
    if name.startswith(_CURRENT_DIR_PREFIXES):
        return name[2:]
    return name


def parse_tar_listing(output: str) -> List[str]:
    """
    Parse the output of ``tar -t``.

    Args:
        output: Raw listing, one member per line

    Returns:
        Member file paths in listing order, directories excluded

    Example:
        >>> parse_tar_listing("./\\n./a.txt\\n./dir/\\n./dir/b.txt\\n")
        ['a.txt', 'dir/b.txt']
    """
    return [
        _strip_current_dir(line)
        for line in _split_lines(output)
        if line and not line.endswith("/")
    ]


def parse_7z_listing(output: str) -> List[str]:
    """
    Parse the output of ``7z l``.

    The listing is a table. The header row names the ``Attr`` and ``Name``
    columns and the member rows sit between two rows of dashes::

           Date      Time    Attr         Size   Compressed  Name
        ------------------- ----- ------------ ------------  ------------
        2018-01-01 00:00:00 D....            0            0  dir
        2018-01-01 00:00:00 .....           10           10  dir/b.txt
        ------------------- ----- ------------ ------------  ------------

    Rows whose attribute column starts with ``D`` are directories.

    Args:
        output: Raw output of ``7z l``

    Returns:
        Member file paths in listing order, directories excluded

    Raises:
        ListingParseError: If the header row or the dash delimiters are missing
    """
    lines = _split_lines(output)

    header = next((l for l in lines if " Name" in l and " Attr" in l), None)
    if header is None:
        raise ListingParseError("7z listing has no header row with Name and Attr")

    name_idx = header.index("Name")
    # Attribute flags start one column before the right-aligned "Attr" label
    attr_idx = header.index("Attr") - 1

    rows = [
        line[name_idx:]
        for line in lines
        if len(line) > name_idx and line[attr_idx] != "D"
    ]

    bounds = [i for i, row in enumerate(rows) if row and set(row) == {"-"}]
    if len(bounds) < 2:
        raise ListingParseError("7z listing is missing its dash delimiter rows")

    return [_strip_current_dir(row) for row in rows[bounds[0] + 1 : bounds[1]]]
