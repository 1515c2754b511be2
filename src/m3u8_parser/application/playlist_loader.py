from typing import Optional, Union

from m3u8_parser.domain.entities.playlist import Playlist
from m3u8_parser.domain.errors import DecodeError
from m3u8_parser.infrastructure.network.playlist_fetcher import PlaylistFetcher
from .parsing.playlist_builder import PlaylistBuilder

DEFAULT_ENCODING = 'utf-8'


def _looks_like_text(value: str) -> bool:
    return '\n' in value or '\r' in value or value.lstrip().startswith('#')


class PlaylistLoader:
    """Entry point that turns a URI, text or bytes into a Playlist."""

    def __init__(self, fetcher: Optional[PlaylistFetcher] = None):
        self._fetcher = fetcher

    @property
    def fetcher(self) -> PlaylistFetcher:
        # Created lazily so parsing plain text never opens a session
        if self._fetcher is None:
            self._fetcher = PlaylistFetcher()
        return self._fetcher

    def load(self, uri_or_text: Union[str, bytes]) -> Playlist:
        """
        Parse playlist bytes or text, or fetch and parse the playlist at a URI.

        A str containing a line break or starting with '#' is treated as
        playlist text, any other str as a URI.

        Raises:
            FetchError: the URI could not be retrieved
            DecodeError: the bytes are not valid UTF-8
        """
        if isinstance(uri_or_text, bytes):
            return self.parse_bytes(uri_or_text)
        if _looks_like_text(uri_or_text):
            return self.parse_text(uri_or_text)
        return self.from_uri(uri_or_text)

    def from_uri(self, uri: str) -> Playlist:
        data = self.fetcher.fetch(uri)
        return self.parse_bytes(data, base_uri=uri)

    def parse_bytes(self, data: bytes, base_uri: Optional[str] = None, encoding: str = DEFAULT_ENCODING) -> Playlist:
        return self.parse_text(decode(data, encoding), base_uri=base_uri)

    def parse_text(self, text: str, base_uri: Optional[str] = None) -> Playlist:
        return PlaylistBuilder.from_text(text, base_uri=base_uri)


def decode(data: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode playlist bytes, tolerating a UTF-8 byte order mark."""
    codec = encoding
    if encoding.lower().replace('-', '').replace('_', '') == 'utf8':
        codec = 'utf-8-sig'
    try:
        return data.decode(codec)
    except UnicodeDecodeError as e:
        raise DecodeError(encoding, str(e)) from e
    except LookupError as e:
        raise DecodeError(encoding, f"unknown encoding: {e}") from e


def parse(uri_or_text: Union[str, bytes], fetcher: Optional[PlaylistFetcher] = None) -> Playlist:
    return PlaylistLoader(fetcher).load(uri_or_text)


def parse_text(text: str, base_uri: Optional[str] = None) -> Playlist:
    return PlaylistLoader().parse_text(text, base_uri=base_uri)


def parse_bytes(data: bytes, base_uri: Optional[str] = None, encoding: str = DEFAULT_ENCODING) -> Playlist:
    return PlaylistLoader().parse_bytes(data, base_uri=base_uri, encoding=encoding)


def from_uri(uri: str, fetcher: Optional[PlaylistFetcher] = None) -> Playlist:
    return PlaylistLoader(fetcher).from_uri(uri)
