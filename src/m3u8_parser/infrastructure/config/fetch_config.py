import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = 'Mozilla/5.0 (compatible; m3u8_parser/1.0)'
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class FetchConfig:
    """Settings for retrieving playlists over HTTP."""
    timeout: float = DEFAULT_TIMEOUT  # Seconds, applied to connect and read
    user_agent: str = DEFAULT_USER_AGENT
    verify_tls: bool = True

    @staticmethod
    def from_env() -> "FetchConfig":
        """Build a config from M3U8_PARSER_* environment variables, falling back to defaults."""
        timeout = os.getenv("M3U8_PARSER_TIMEOUT", "").strip()
        user_agent = os.getenv("M3U8_PARSER_USER_AGENT", "").strip()
        verify_tls = os.getenv("M3U8_PARSER_VERIFY_TLS", "1").strip()
        try:
            timeout_value = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError:
            timeout_value = DEFAULT_TIMEOUT
        return FetchConfig(
            timeout=timeout_value,
            user_agent=user_agent or DEFAULT_USER_AGENT,
            verify_tls=verify_tls not in ("0", "false", "False"),
        )
