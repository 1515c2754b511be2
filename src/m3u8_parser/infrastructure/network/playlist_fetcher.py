import logging
from typing import Optional

import requests

from m3u8_parser.domain.errors import FetchError
from m3u8_parser.infrastructure.config.fetch_config import FetchConfig

logger = logging.getLogger(__name__)


class PlaylistFetcher:
    """Retrieves the raw bytes of a playlist document over HTTP."""

    def __init__(self, config: Optional[FetchConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or FetchConfig.from_env()
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.user_agent
        })

    def fetch(self, uri: str) -> bytes:
        """
        Download the playlist at a URI.

        Args:
            uri: http(s) URL of the playlist

        Returns:
            The response body, undecoded

        Raises:
            FetchError: the request failed or the server answered with an error status
        """
        logger.debug("Fetching playlist %s", uri)
        try:
            response = self.session.get(uri, timeout=self.config.timeout, verify=self.config.verify_tls)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(uri, str(e)) from e
        return response.content

    def close(self):
        self.session.close()
