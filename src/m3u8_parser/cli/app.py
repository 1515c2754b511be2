import logging
import os
import sys
from typing import List, Optional

from m3u8_parser.application.playlist_loader import PlaylistLoader
from m3u8_parser.application.variant_labels import VariantLabeler
from m3u8_parser.domain.entities.playlist import Playlist
from m3u8_parser.domain.errors import ParseError

USAGE = "Usage: m3u8-parser <uri|file> [--sort KEY] [--section media|resources|variants|all] [--debug]"
SECTIONS = ("media", "resources", "variants", "all")


def _print_section(title: str, records: List[dict]):
    print(f"{title} ({len(records)})")
    for record in records:
        print(f"  {record}")


def _print_playlist(playlist: Playlist, section: str, sort_key: Optional[str]):
    print(f"version={playlist.version} type={playlist.stream_type.value} "
          f"independent_segments={playlist.independent_segments} master={playlist.is_master}")

    if section in ("media", "all"):
        tags = playlist.get_media_tags(sort_key) if sort_key else list(playlist.media_tags)
        _print_section("Media tags", [tag.to_dict() for tag in tags])

    if section in ("resources", "all"):
        resources = playlist.get_media_resources(sort_key) if sort_key else list(playlist.media_resources)
        _print_section("Media resources", [resource.to_dict() for resource in resources])
        if resources:
            print(f"  total duration: {playlist.duration:.3f}s")

    if section in ("variants", "all"):
        labeler = VariantLabeler()
        variants = playlist.get_variant_streams(sort_key) if sort_key else list(playlist.variant_streams)
        print(f"Variant streams ({len(variants)})")
        for variant in variants:
            info = labeler.describe(variant)
            print(f"  [{info['label']}] {info['type']}: {info['details']}")
            print(f"    {variant.to_dict()}")


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    sort_key = None
    section = "all"
    debug = False
    sources = []

    while args:
        arg = args.pop(0)
        if arg == "--sort":
            if not args:
                print(USAGE)
                return 2
            sort_key = args.pop(0)
        elif arg == "--section":
            if not args or args[0] not in SECTIONS:
                print(USAGE)
                return 2
            section = args.pop(0)
        elif arg == "--debug":
            debug = True
        elif arg in ("-h", "--help"):
            print(USAGE)
            return 0
        else:
            sources.append(arg)

    if len(sources) != 1:
        print(USAGE)
        return 2

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    source = sources[0]
    loader = PlaylistLoader()
    try:
        if os.path.isfile(source):
            with open(source, 'rb') as f:
                playlist = loader.parse_bytes(f.read())
        else:
            playlist = loader.load(source)
    except ParseError as e:
        print(f"Error: {e}")
        return 1

    _print_playlist(playlist, section, sort_key)
    return 0


if __name__ == "__main__":
    sys.exit(main())
