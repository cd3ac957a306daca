"""Single-line CSV tokenizing."""


def tokenize_line(line: str) -> list[str]:
    """Split one CSV line into trimmed cells.

    Double-quoted fields may contain commas, and a doubled quote inside a
    quoted field is a literal quote:

    - 'a,"b,c",d' -> ["a", "b,c", "d"]
    - '"a""b"' -> ['a"b']

    Stray quotes simply toggle quoting, so malformed input never raises.

    Args:
        line: One line of text without its line break

    Returns:
        List of cell strings
    """
    cells = []
    current = []
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    cells.append("".join(current).strip())
    return cells


def strip_header(cell: str) -> str:
    """Remove single quotes some banks wrap header names in."""
    return cell.replace("'", "").strip()
