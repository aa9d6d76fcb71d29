"""
Quote-aware CSV line tokenizer.

Handles quoted fields and doubled-quote escapes on a single line. Quoted
newlines are not supported: callers split the file on ``\\n`` first.
Unterminated quotes are tolerated and whatever was accumulated is flushed.
"""

from typing import List


def parse_csv_line(line: str) -> List[str]:
    """
    Split one CSV line into trimmed field values.

    Args:
        line: Raw text of one line (no trailing newline required)

    Returns:
        Ordered field values; always at least one (possibly empty) value

    Examples:
        >>> parse_csv_line("a, b ,c")
        ['a', 'b', 'c']
        >>> parse_csv_line('"x""y",z')
        ['x"y', 'z']
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]

        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                # Escaped quote
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def split_csv_lines(csv_text: str) -> List[str]:
    """
    Split raw CSV text into lines, dropping blank ones.

    Args:
        csv_text: Full file contents

    Returns:
        Non-blank lines in file order
    """
    return [line for line in csv_text.split("\n") if line.strip()]
