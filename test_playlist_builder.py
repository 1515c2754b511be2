#!/usr/bin/env python3
"""
Tests for the single-pass playlist builder.
"""
import logging

from m3u8_parser.application.parsing.line_tokenizer import LineTokenizer
from m3u8_parser.application.parsing.playlist_builder import PlaylistBuilder

MASTER = """#EXTM3U
#EXT-X-VERSION:6
#EXT-X-INDEPENDENT-SEGMENTS
#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="aac-128k",NAME="English",LANGUAGE="en",DEFAULT=YES,AUTOSELECT=YES,CHANNELS="2",URI="audio/en/128k/vod.m3u8"
#EXT-X-MEDIA:TYPE=SUBTITLES,GROUP-ID="sub-main",NAME="Deutsch",LANGUAGE="de",AUTOSELECT=YES,URI="subs/de/vod.m3u8"
#EXT-X-STREAM-INF:BANDWIDTH=10429877,CODECS="hvc1.2.4.L123.B0,mp4a.40.2",RESOLUTION=1920x1080,AUDIO="aac-128k",SUBTITLES="sub-main"
hdr10/unenc/6000k/vod.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=2149280,CODECS="avc1.64001f,mp4a.40.2",RESOLUTION=1280x720,AUDIO="aac-128k"
sdr/unenc/2000k/vod.m3u8
#EXT-X-I-FRAME-STREAM-INF:BANDWIDTH=222000,CODECS="avc1.64001f",RESOLUTION=1280x720,URI="sdr/iframe/index.m3u8"
"""

MEDIA = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-TARGETDURATION:10
#EXT-X-MEDIA-SEQUENCE:0
#EXT-X-PLAYLIST-TYPE:VOD
#EXTINF:9.009,
segment0.ts
#EXTINF:9.009,Second part
segment1.ts
#EXTINF:3.003,
segment2.ts
#EXT-X-ENDLIST
"""


def _build(text):
    return PlaylistBuilder.from_text(text)


def test_variant_stream_scenario():
    """Test the two-variant playlist from the documentation."""
    print("Testing variant stream pairing...")

    playlist = _build(
        "#EXT-X-STREAM-INF:BANDWIDTH=10429877,RESOLUTION=1920x1080\n"
        "hdr10/unenc/6000k/vod.m3u8\n"
        "#EXT-X-STREAM-INF:BANDWIDTH=12156778,RESOLUTION=1920x1080\n"
        "hdr10/unenc/7700k/vod.m3u8\n"
    )

    assert len(playlist.variant_streams) == 2
    assert [v.uri for v in playlist.variant_streams] == ['hdr10/unenc/6000k/vod.m3u8', 'hdr10/unenc/7700k/vod.m3u8']
    assert playlist.variant_streams[0].to_dict() == {
        'BANDWIDTH': '10429877',
        'RESOLUTION': '1920x1080',
        'uri': 'hdr10/unenc/6000k/vod.m3u8',
    }
    assert not playlist.has_header

    print("✓ Variant stream pairing test passed")


def test_master_playlist_classification():
    print("Testing master playlist classification...")

    playlist = _build(MASTER)

    assert playlist.has_header
    assert [tag.get('NAME') for tag in playlist.media_tags] == ['English', 'Deutsch']
    assert all(tag.uri is None for tag in playlist.media_tags)
    assert playlist.media_tags[0].get('URI') == 'audio/en/128k/vod.m3u8'

    assert len(playlist.variant_streams) == 2
    assert playlist.variant_streams[0].get('CODECS') == 'hvc1.2.4.L123.B0,mp4a.40.2'
    assert playlist.variant_streams[1].uri == 'sdr/unenc/2000k/vod.m3u8'

    # I-frame streams carry their URI inline and do not consume the next line
    assert len(playlist.media_resources) == 1
    assert playlist.media_resources[0].tag_name == 'EXT-X-I-FRAME-STREAM-INF'
    assert playlist.media_resources[0].uri is None

    assert [tag.tag_name for tag in playlist.tags] == ['EXT-X-VERSION', 'EXT-X-INDEPENDENT-SEGMENTS']

    print("✓ Master playlist classification test passed")


def test_media_playlist_segments():
    print("Testing media playlist segments...")

    playlist = _build(MEDIA)

    assert [r.uri for r in playlist.media_resources] == ['segment0.ts', 'segment1.ts', 'segment2.ts']
    assert playlist.media_resources[1].to_dict() == {'DURATION': '9.009', 'TITLE': 'Second part', 'uri': 'segment1.ts'}
    assert playlist.variant_streams == ()

    print("✓ Media playlist segments test passed")


def test_directive_at_end_of_input_has_no_uri():
    print("Testing directive at end of input...")

    playlist = _build("#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=100")

    assert len(playlist.variant_streams) == 1
    assert playlist.variant_streams[0].uri is None
    assert 'uri' not in playlist.variant_streams[0].to_dict()

    print("✓ End of input test passed")


def test_consecutive_uri_directives():
    """Test that a pending directive is finalized without a URI when another directive follows."""
    print("Testing consecutive directives...")

    playlist = _build(
        "#EXTM3U\n"
        "#EXT-X-STREAM-INF:BANDWIDTH=100\n"
        "#EXT-X-STREAM-INF:BANDWIDTH=200\n"
        "low/index.m3u8\n"
    )

    assert [v.get('BANDWIDTH') for v in playlist.variant_streams] == ['100', '200']
    assert playlist.variant_streams[0].uri is None
    assert playlist.variant_streams[1].uri == 'low/index.m3u8'

    print("✓ Consecutive directives test passed")


def test_intervening_tag_finalizes_segment():
    print("Testing tags between #EXTINF and its URI...")

    playlist = _build("#EXTM3U\n#EXTINF:4.0,\n#EXT-X-BYTERANGE:1000@0\nseg.ts\n")

    assert len(playlist.media_resources) == 1
    assert playlist.media_resources[0].uri is None
    assert playlist.find_tags('EXT-X-BYTERANGE')[0].value == '1000@0'

    print("✓ Intervening tag test passed")


def test_comments_between_directive_and_uri():
    print("Testing comments before a URI line...")

    playlist = _build("#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=1\n# comment\n\nv.m3u8\n")

    assert playlist.variant_streams[0].uri == 'v.m3u8'

    print("✓ Comments before URI test passed")


def test_orphan_uri_lines_are_dropped():
    """Orphan URI lines are dropped rather than collected."""
    print("Testing orphan URI lines...")

    playlist = _build("#EXTM3U\norphan.ts\n#EXT-X-ENDLIST\nanother-orphan.ts\n")

    entries = playlist.media_tags + playlist.media_resources + playlist.variant_streams + playlist.tags
    assert [entry.tag_name for entry in entries] == ['EXT-X-ENDLIST']
    assert all(entry.uri is None for entry in entries)

    print("✓ Orphan URI lines test passed")


def test_vendor_tags_are_kept():
    print("Testing vendor tags...")

    playlist = _build("#EXTM3U\n#USP-X-MEDIA:BANDWIDTH=1,LABEL=\"a,b\"\n# just a comment\n")

    vendor = playlist.find_tags('USP-X-MEDIA')
    assert len(vendor) == 1, f"Expected the vendor tag in tags, got {playlist.tags}"
    assert dict(vendor[0].attributes) == {'BANDWIDTH': '1', 'LABEL': 'a,b'}
    assert [tag.tag_name for tag in playlist.tags] == ['USP-X-MEDIA']

    print("✓ Vendor tags test passed")


def test_header_must_be_first_line():
    print("Testing header position...")

    assert not _build("a.ts\n#EXTM3U\n").has_header
    assert not _build("#EXT-X-VERSION:3\n#EXTM3U\n").has_header
    # Comments and blank lines before the header are fine
    assert _build("# generated\n\n#EXTM3U\n").has_header

    print("✓ Header position test passed")


def test_collections_never_exceed_directive_count():
    print("Testing collection sizes...")

    for text in (MASTER, MEDIA):
        playlist = _build(text)
        directives = sum(1 for token in LineTokenizer.tokenize(text) if hasattr(token, 'tag_name'))
        classified = len(playlist.media_tags) + len(playlist.media_resources) + len(playlist.variant_streams)
        assert classified <= directives
        # Header is the only directive not stored in any collection
        assert classified + len(playlist.tags) == directives - 1

    print("✓ Collection sizes test passed")


def test_unknown_and_malformed_lines_do_not_abort():
    print("Testing malformed input...")

    playlist = _build(
        "#EXTM3U\n"
        "#EXT-X-VENDOR-THING:FOO=\"unterminated,BAR\n"
        "#EXT-X-MEDIA:TYPE=AUDIO,NAME=\"x\",,=oops,GROUP-ID=\"g\"\n"
        "#EXT-X-STREAM-INF:\n"
        "v.m3u8\n"
    )

    assert playlist.find_tags('EXT-X-VENDOR-THING')[0].get('FOO') == '"unterminated,BAR'
    assert dict(playlist.media_tags[0].attributes) == {'TYPE': 'AUDIO', 'NAME': 'x', 'GROUP-ID': 'g'}
    assert dict(playlist.variant_streams[0].attributes) == {}
    assert playlist.variant_streams[0].uri == 'v.m3u8'

    print("✓ Malformed input test passed")


def test_missing_header_logs_warning(caplog):
    """Needs the pytest caplog fixture, so it is not part of run_all_tests."""
    print("Testing missing header warning...")

    with caplog.at_level(logging.WARNING):
        playlist = _build("#EXTINF:1,\na.ts\n")

    assert not playlist.has_header
    assert any("EXTM3U" in record.getMessage() for record in caplog.records)

    print("✓ Missing header warning test passed")


def test_entries_are_immutable():
    print("Testing immutability...")

    playlist = _build(MASTER)
    entry = playlist.variant_streams[0]

    try:
        entry.uri = 'other.m3u8'
        raise AssertionError("TaggedEntry was mutable")
    except AttributeError:
        pass

    try:
        entry.attributes['BANDWIDTH'] = '1'
        raise AssertionError("Attributes were mutable")
    except TypeError:
        pass

    print("✓ Immutability test passed")


def run_all_tests():
    """Run all tests."""
    print("Running playlist builder tests...\n")

    tests = [
        test_variant_stream_scenario,
        test_master_playlist_classification,
        test_media_playlist_segments,
        test_directive_at_end_of_input_has_no_uri,
        test_consecutive_uri_directives,
        test_intervening_tag_finalizes_segment,
        test_comments_between_directive_and_uri,
        test_orphan_uri_lines_are_dropped,
        test_vendor_tags_are_kept,
        test_header_must_be_first_line,
        test_collections_never_exceed_directive_count,
        test_unknown_and_malformed_lines_do_not_abort,
        test_entries_are_immutable,
    ]

    passed = 0
    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"✗ {test.__name__} failed with exception: {e}")

    print(f"\nTest Results: {passed}/{len(tests)} tests passed")
    return passed == len(tests)


if __name__ == "__main__":
    success = run_all_tests()
    exit(0 if success else 1)
