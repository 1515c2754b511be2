import re
from typing import Dict, List, Mapping

_QUOTE = '"'
_ESCAPE = '\\'
_ESCAPED_CHAR = re.compile(r'\\([\\"])')
# Values containing any of these are written quoted so they survive a re-parse
_NEEDS_QUOTES = (',', '=', ' ', '\t', _QUOTE, _ESCAPE)


class AttributeParser:
    """Splits the attribute list of a directive (e.g. BANDWIDTH=1,CODECS="a,b") into a mapping."""

    @staticmethod
    def split(data: str) -> List[str]:
        """
        Split an attribute list on commas that are not inside a quoted value.

        Inside quotes a backslash escapes the next character, so \\" does
        not end the value.

        Args:
            data: Everything after the first ':' of a directive line

        Returns:
            The raw segments, in source order
        """
        segments = []
        current = []
        in_quotes = False
        escaped = False
        for char in data:
            if escaped:
                escaped = False
            elif in_quotes and char == _ESCAPE:
                escaped = True
            elif char == _QUOTE:
                in_quotes = not in_quotes
            if char == ',' and not in_quotes:
                segments.append(''.join(current))
                current = []
            else:
                current.append(char)
        segments.append(''.join(current))
        return segments

    @staticmethod
    def unquote(value: str) -> str:
        value = value.strip()
        if len(value) >= 2 and value.startswith(_QUOTE) and value.endswith(_QUOTE):
            return _ESCAPED_CHAR.sub(r'\1', value[1:-1])
        # Unbalanced quotes are kept as written
        return value

    @classmethod
    def parse(cls, data: str) -> Dict[str, str]:
        """
        Parse an attribute list into an ordered mapping of name to value.

        Segments without '=' are stored as flags with an empty value. Empty
        segments are skipped and a repeated name keeps the last value.
        """
        attributes = {}
        for segment in cls.split(data):
            segment = segment.strip()
            if not segment:
                continue
            if '=' in segment:
                key, value = segment.split('=', 1)
                key = key.strip()
                if not key:
                    continue
                attributes[key] = cls.unquote(value)
            else:
                attributes[segment] = ''
        return attributes

    @classmethod
    def parse_extinf(cls, data: str) -> Dict[str, str]:
        """Parse the "<duration>,<title>" value of an #EXTINF line."""
        attributes = {}
        duration, _, title = data.partition(',')
        attributes['DURATION'] = duration.strip()
        title = title.strip()
        if title:
            attributes['TITLE'] = title
        return attributes

    @staticmethod
    def serialize(attributes: Mapping[str, str]) -> str:
        """Render a mapping back into KEY=VALUE,... form."""
        parts = []
        for key, value in attributes.items():
            if value == '':
                parts.append(key)
            elif any(char in value for char in _NEEDS_QUOTES):
                escaped = value.replace(_ESCAPE, _ESCAPE * 2).replace(_QUOTE, _ESCAPE + _QUOTE)
                parts.append(f'{key}="{escaped}"')
            else:
                parts.append(f'{key}={value}')
        return ','.join(parts)
