from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urljoin

from .stream_type import StreamType
from .tag_category import (
    ENDLIST_TAG,
    INDEPENDENT_SEGMENTS_TAG,
    MEDIA_SEQUENCE_TAG,
    PLAYLIST_TYPE_TAG,
    SEGMENT_TAG,
    TARGET_DURATION_TAG,
    VERSION_TAG,
)
from .tagged_entry import TaggedEntry

DEFAULT_VERSION = "2"


def _sorted_by(entries: Iterable[TaggedEntry], key: str) -> List[TaggedEntry]:
    # sorted() is stable, so ties and entries missing the key keep source order
    return sorted(entries, key=lambda entry: (key not in entry.attributes, entry.attributes.get(key, "")))


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class Playlist:
    """Parsed representation of an M3U8 manifest."""

    media_tags: Tuple[TaggedEntry, ...] = ()
    media_resources: Tuple[TaggedEntry, ...] = ()
    variant_streams: Tuple[TaggedEntry, ...] = ()
    tags: Tuple[TaggedEntry, ...] = ()  # Every directive not classified into the three above
    has_header: bool = False
    base_uri: Optional[str] = None

    def get_media_tags(self, key: str) -> List[TaggedEntry]:
        """
        Return the alternative renditions ordered by the value of an attribute.

        Args:
            key: Attribute name to sort on, e.g. "GROUP-ID"

        Returns:
            A new list sorted ascending by string value; entries missing the key come last
        """
        return _sorted_by(self.media_tags, key)

    def get_media_resources(self, key: str) -> List[TaggedEntry]:
        """Return the media segment entries ordered by the value of an attribute."""
        return _sorted_by(self.media_resources, key)

    def get_variant_streams(self, key: str) -> List[TaggedEntry]:
        """Return the variant streams ordered by the value of an attribute."""
        return _sorted_by(self.variant_streams, key)

    def get_tags(self, key: str) -> List[TaggedEntry]:
        return _sorted_by(self.tags, key)

    def find_tags(self, tag_name: str) -> List[TaggedEntry]:
        """Return the unclassified tags with the given name, in source order."""
        return [tag for tag in self.tags if tag.tag_name == tag_name]

    def _last_value(self, tag_name: str) -> Optional[str]:
        found = self.find_tags(tag_name)
        if not found:
            return None
        return found[-1].value.strip()

    @property
    def version(self) -> str:
        return self._last_value(VERSION_TAG) or DEFAULT_VERSION

    @property
    def independent_segments(self) -> bool:
        return bool(self.find_tags(INDEPENDENT_SEGMENTS_TAG))

    @property
    def target_duration(self) -> Optional[int]:
        return _to_int(self._last_value(TARGET_DURATION_TAG))

    @property
    def media_sequence(self) -> Optional[int]:
        return _to_int(self._last_value(MEDIA_SEQUENCE_TAG))

    @property
    def is_master(self) -> bool:
        return bool(self.variant_streams)

    @property
    def stream_type(self) -> StreamType:
        playlist_type = (self._last_value(PLAYLIST_TYPE_TAG) or "").upper()
        if playlist_type == "EVENT":
            return StreamType.EVENT
        if playlist_type == "VOD" or self.find_tags(ENDLIST_TAG):
            return StreamType.VOD
        # No #EXT-X-ENDLIST means the server may still append segments
        return StreamType.LIVE

    @property
    def duration(self) -> float:
        """Total duration in seconds of the segments whose duration could be read."""
        total = 0.0
        for resource in self.media_resources:
            if resource.tag_name != SEGMENT_TAG:
                continue
            try:
                total += float(resource.get("DURATION", ""))
            except ValueError:
                continue
        return total

    def resolve_uri(self, entry: TaggedEntry) -> Optional[str]:
        """Make an entry's URI absolute against the URI the playlist was loaded from."""
        uri = entry.uri if entry.uri is not None else entry.get("URI")
        if uri is None or not self.base_uri:
            return uri
        return urljoin(self.base_uri, uri)
