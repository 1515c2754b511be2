from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class TaggedEntry:
    """One parsed directive together with its continuation URI line, if any."""

    tag_name: str  # Directive name without the leading '#', e.g. "EXT-X-MEDIA"
    attributes: Mapping[str, str] = field(default_factory=dict, hash=False)
    uri: Optional[str] = None
    value: str = ""  # Raw text after the first ':'

    def __post_init__(self):
        # Copy so later changes to the caller's dict can't leak in
        object.__setattr__(self, 'attributes', MappingProxyType(dict(self.attributes)))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(key, default)

    def to_dict(self) -> Dict[str, str]:
        """Flat mapping of the attributes plus a synthetic "uri" key when a URI is present."""
        data = dict(self.attributes)
        if self.uri is not None:
            data['uri'] = self.uri
        return data
