import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Union

from m3u8_parser.domain.entities.playlist import Playlist
from m3u8_parser.domain.entities.tag_category import HEADER_TAG, SEGMENT_TAG, TagCategory, classify, expects_uri
from m3u8_parser.domain.entities.tagged_entry import TaggedEntry
from .attribute_parser import AttributeParser
from .line_tokenizer import DirectiveLine, LineTokenizer, Token, UriLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No directive is waiting for a URI line."""


@dataclass(frozen=True)
class AwaitingUri:
    """A directive was read whose URI is the next plain line."""
    entry: TaggedEntry


BuilderState = Union[Idle, AwaitingUri]


class PlaylistBuilder:
    """Builds a Playlist from tokens in a single forward pass."""

    def __init__(self, base_uri: Optional[str] = None):
        self.base_uri = base_uri
        self.state: BuilderState = Idle()
        self.has_header = False
        self.tokens_seen = 0  # The header only counts as the very first token
        self.collections: Dict[TagCategory, List[TaggedEntry]] = {category: [] for category in TagCategory}

    @classmethod
    def from_text(cls, text: str, base_uri: Optional[str] = None) -> Playlist:
        return cls(base_uri).build(LineTokenizer.tokenize(text))

    def build(self, tokens: Iterable[Token]) -> Playlist:
        """
        Consume the tokens in order and assemble the playlist.

        Args:
            tokens: Output of LineTokenizer.tokenize

        Returns:
            The finished, immutable Playlist
        """
        for token in tokens:
            self.tokens_seen += 1
            if isinstance(token, DirectiveLine):
                self._on_directive(token)
            else:
                self._on_uri(token)

        # End of input: a directive still waiting for its URI is kept without one
        self._flush_pending()

        if not self.has_header:
            logger.warning("Playlist does not start with #%s", HEADER_TAG)

        return Playlist(
            media_tags=tuple(self.collections[TagCategory.MEDIA_TAG]),
            media_resources=tuple(self.collections[TagCategory.MEDIA_RESOURCE]),
            variant_streams=tuple(self.collections[TagCategory.VARIANT_STREAM]),
            tags=tuple(self.collections[TagCategory.GENERIC]),
            has_header=self.has_header,
            base_uri=self.base_uri,
        )

    def _on_directive(self, line: DirectiveLine):
        self._flush_pending()

        if line.tag_name == HEADER_TAG:
            if self.tokens_seen == 1:
                self.has_header = True
            else:
                logger.debug("Ignoring #%s that is not the first line", HEADER_TAG)
            return

        entry = TaggedEntry(
            tag_name=line.tag_name,
            attributes=self._parse_attributes(line),
            value=line.data,
        )

        if expects_uri(entry.tag_name):
            self.state = AwaitingUri(entry)
        else:
            self._push(entry)

    def _on_uri(self, line: UriLine):
        if isinstance(self.state, AwaitingUri):
            self._push(replace(self.state.entry, uri=line.text))
            self.state = Idle()
        else:
            logger.debug("Dropping URI line without a preceding directive: %s", line.text)

    def _flush_pending(self):
        if isinstance(self.state, AwaitingUri):
            logger.debug("#%s has no URI line", self.state.entry.tag_name)
            self._push(self.state.entry)
            self.state = Idle()

    def _push(self, entry: TaggedEntry):
        category = classify(entry.tag_name)
        if category == TagCategory.GENERIC:
            logger.debug("Unclassified tag: #%s", entry.tag_name)
        self.collections[category].append(entry)

    @staticmethod
    def _parse_attributes(line: DirectiveLine) -> Dict[str, str]:
        if line.tag_name == SEGMENT_TAG:
            return AttributeParser.parse_extinf(line.data)
        return AttributeParser.parse(line.data)
