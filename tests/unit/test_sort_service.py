"""Unit tests for the end-to-end sort run against a stub client."""

import pytest

from coversort.color import LabColor
from coversort.errors import ImageDecodeError, NetworkError, ParseError
from coversort.services.sort_service import SortResult, sort_playlist
from tests.mocks.mock_spotify import StubPathfinderClient, playlist_item, playlist_payload

WHITE = LabColor(100.0, 0.0, 0.0)


def test_sorts_brightest_first(stub_client):
    # Remote order: Dark (T0), White (T1), Grey (T2); distance to white d1 < d2 < d0
    result = sort_playlist(stub_client, "pl", 0, 10, reference=WHITE)

    assert isinstance(result, SortResult)
    assert result.tracks_found == 3
    assert result.tracks_profiled == 3
    assert result.ranked == ["White", "Grey", "Dark"]
    assert stub_client.moves == [
        (["uid-2"], "uid-1", "AFTER_UID"),
        (["uid-0"], "uid-2", "AFTER_UID"),
    ]
    assert result.moves_executed == 2


def test_fetch_then_downloads_then_moves(stub_client):
    sort_playlist(stub_client, "pl", 0, 10, reference=WHITE)
    kinds = [kind for kind, _ in stub_client.calls]
    assert kinds == ["fetch", "download", "download", "download", "move", "move"]


def test_already_sorted_window_issues_no_moves():
    client = StubPathfinderClient([
        ("a", "White", (255, 255, 255)),
        ("b", "Grey", (128, 128, 128)),
        ("c", "Black", (0, 0, 0)),
    ])
    result = sort_playlist(client, "pl", 0, 10, reference=WHITE)
    assert client.moves == []
    assert result.moves_planned == 0


@pytest.mark.parametrize("tracks", [[], [("only", "Only", (10, 20, 30))]])
def test_zero_or_one_track_issues_no_moves(tracks):
    client = StubPathfinderClient(tracks)
    result = sort_playlist(client, "pl", 0, 10)
    assert client.moves == []
    assert result.moves_executed == 0


def test_window_offset_and_limit(stub_client):
    result = sort_playlist(stub_client, "pl", 1, 2, reference=WHITE)
    assert stub_client.calls[0] == ("fetch", ("pl", 1, 2))
    assert result.ranked == ["White", "Grey"]
    assert stub_client.moves == []


def test_parse_error_stops_before_any_other_call(stub_client):
    item = playlist_item("uid-0", "Broken", ["https://img/small", "https://img/big"])
    del item["itemV2"]["data"]["albumOfTrack"]["coverArt"]["sources"]
    stub_client.payload = playlist_payload([item])

    with pytest.raises(ParseError):
        sort_playlist(stub_client, "pl", 0, 10)
    assert stub_client.calls == [("fetch", ("pl", 0, 10))]


@pytest.mark.parametrize("workers", [1, 4])
def test_decode_error_aborts_before_moves(stub_client, workers):
    stub_client.images[stub_client.cover_url("uid-2")] = b"not an image"
    with pytest.raises(ImageDecodeError):
        sort_playlist(stub_client, "pl", 0, 10, workers=workers)
    assert stub_client.moves == []


def test_skip_undecodable_excludes_track(stub_client):
    stub_client.images[stub_client.cover_url("uid-1")] = b"not an image"
    result = sort_playlist(stub_client, "pl", 0, 10, reference=WHITE, skip_undecodable=True)
    assert result.tracks_skipped == 1
    assert result.ranked == ["Grey", "Dark"]
    assert stub_client.moves == [(["uid-0"], "uid-2", "AFTER_UID")]


def test_skipped_track_keeps_remote_position():
    client = StubPathfinderClient([
        ("a", "White", (255, 255, 255)),
        ("x", "Broken", b"not an image"),
        ("b", "Grey", (128, 128, 128)),
    ])
    result = sort_playlist(client, "pl", 0, 10, reference=WHITE, skip_undecodable=True)
    assert result.ranked == ["White", "Grey"]
    assert result.moves_planned == 0
    assert client.moves == []


def test_dry_run_sends_no_moves(stub_client):
    result = sort_playlist(stub_client, "pl", 0, 10, reference=WHITE, dry_run=True)
    assert stub_client.moves == []
    assert result.moves_planned == 2
    assert result.moves_executed == 0
    assert [(m.target_uid, m.anchor_uid) for m in result.moves] == [("uid-2", "uid-1"), ("uid-0", "uid-2")]


def test_move_failure_leaves_prefix_applied(stub_client):
    stub_client.fail_move_at = 1
    with pytest.raises(NetworkError):
        sort_playlist(stub_client, "pl", 0, 10, reference=WHITE)
    assert stub_client.moves == [(["uid-2"], "uid-1", "AFTER_UID")]


def test_progress_is_logged(stub_client, caplog):
    caplog.set_level("INFO")
    sort_playlist(stub_client, "pl", 0, 10, reference=WHITE)
    text = caplog.text
    assert "Found 3 tracks" in text
    assert "'Grey' after 'White'" in text
    assert "Tracks sorted: 3" in text
