from dataclasses import dataclass
from typing import Iterator, Optional, Union

MARKER = '#'


@dataclass(frozen=True)
class DirectiveLine:
    """A '#TAG:...' line split into tag name and raw attribute list."""
    tag_name: str
    data: str = ""


@dataclass(frozen=True)
class UriLine:
    """Any non-blank line that is not a directive or comment."""
    text: str


Token = Union[DirectiveLine, UriLine]


class LineTokenizer:
    """Turns raw playlist text into directive and URI tokens, dropping blanks and comments."""

    @staticmethod
    def tokenize_line(line: str) -> Optional[Token]:
        """
        Classify one physical line.

        Args:
            line: A line of playlist text without its newline

        Returns:
            A DirectiveLine, a UriLine, or None for blank and comment lines
        """
        line = line.strip()
        if not line:
            return None

        if line.startswith(MARKER):
            tag_name, _, data = line[len(MARKER):].partition(':')
            if not tag_name or any(char.isspace() for char in tag_name):
                # Plain comment, e.g. "#" or "# generated by ..."
                return None
            return DirectiveLine(tag_name=tag_name, data=data)

        return UriLine(text=line)

    @classmethod
    def tokenize(cls, text: str) -> Iterator[Token]:
        for line in text.splitlines():
            token = cls.tokenize_line(line)
            if token is not None:
                yield token
