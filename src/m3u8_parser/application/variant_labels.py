import re
from typing import Optional

from m3u8_parser.domain.entities.tagged_entry import TaggedEntry


class VariantLabeler:
    """Builds human-readable labels for variant streams."""

    def describe(self, variant: TaggedEntry) -> dict:
        """Get display information for a variant."""
        return {
            'label': self.quality_label(variant),
            'type': self.media_type(variant),
            'details': self.details(variant),
        }

    def quality_label(self, variant: TaggedEntry) -> str:
        """Generate a quality label based on RESOLUTION, falling back to BANDWIDTH."""
        resolution = variant.get('RESOLUTION')
        if resolution:
            # Extract height from resolution like "1920x1080"
            match = re.search(r'(\d+)x(\d+)', resolution)
            if match:
                height = int(match.group(2))
                if height >= 2160:
                    return "4K"
                elif height >= 1440:
                    return "1440p"
                elif height >= 1080:
                    return "1080p"
                elif height >= 720:
                    return "720p"
                elif height >= 480:
                    return "480p"
                else:
                    return "360p"

        bandwidth = self._bandwidth(variant)
        if bandwidth:
            if bandwidth >= 1000000:
                return f"~{bandwidth // 1000000} Mbps"
            return f"~{bandwidth // 1000} kbps"

        return "Unknown"

    def media_type(self, variant: TaggedEntry) -> str:
        """Guess whether a variant carries video or only audio from its CODECS."""
        codecs = (variant.get('CODECS') or '').lower()
        if ('mp4a' in codecs or 'aac' in codecs) and 'avc' not in codecs and 'hvc' not in codecs and 'h264' not in codecs:
            return "audio"
        return "video"

    def details(self, variant: TaggedEntry) -> str:
        details = []

        codecs = variant.get('CODECS')
        if codecs:
            details.append(codecs)

        resolution = variant.get('RESOLUTION')
        if resolution:
            details.append(resolution)

        bandwidth = self._bandwidth(variant)
        if bandwidth:
            if bandwidth >= 1000000:
                details.append(f"{bandwidth // 1000000} Mbps")
            else:
                details.append(f"{bandwidth // 1000} kbps")

        return ", ".join(details) if details else "Unknown"

    @staticmethod
    def _bandwidth(variant: TaggedEntry) -> Optional[int]:
        try:
            return int(variant.get('BANDWIDTH', ''))
        except ValueError:
            return None
