from enum import Enum


class StreamType(Enum):
    VOD = "vod"
    LIVE = "live"
    EVENT = "event"
