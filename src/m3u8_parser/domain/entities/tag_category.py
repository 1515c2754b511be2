from enum import Enum
from types import MappingProxyType


class TagCategory(Enum):
    """Collection a directive is stored in once parsed."""
    MEDIA_TAG = "media_tag"
    MEDIA_RESOURCE = "media_resource"
    VARIANT_STREAM = "variant_stream"
    GENERIC = "generic"


HEADER_TAG = "EXTM3U"
SEGMENT_TAG = "EXTINF"
MEDIA_TAG = "EXT-X-MEDIA"
STREAM_INF_TAG = "EXT-X-STREAM-INF"
I_FRAME_STREAM_INF_TAG = "EXT-X-I-FRAME-STREAM-INF"

VERSION_TAG = "EXT-X-VERSION"
INDEPENDENT_SEGMENTS_TAG = "EXT-X-INDEPENDENT-SEGMENTS"
TARGET_DURATION_TAG = "EXT-X-TARGETDURATION"
MEDIA_SEQUENCE_TAG = "EXT-X-MEDIA-SEQUENCE"
PLAYLIST_TYPE_TAG = "EXT-X-PLAYLIST-TYPE"
ENDLIST_TAG = "EXT-X-ENDLIST"

# Tags not listed here are GENERIC
TAG_CATEGORIES = MappingProxyType({
    MEDIA_TAG: TagCategory.MEDIA_TAG,
    SEGMENT_TAG: TagCategory.MEDIA_RESOURCE,
    I_FRAME_STREAM_INF_TAG: TagCategory.MEDIA_RESOURCE,
    STREAM_INF_TAG: TagCategory.VARIANT_STREAM,
})

# The URI of these tags is the next non-comment line, not an attribute
URI_EXPECTING_TAGS = frozenset({SEGMENT_TAG, STREAM_INF_TAG})


def classify(tag_name: str) -> TagCategory:
    return TAG_CATEGORIES.get(tag_name, TagCategory.GENERIC)


def expects_uri(tag_name: str) -> bool:
    return tag_name in URI_EXPECTING_TAGS
