"""Unit tests for pathfinder request bodies."""

import json

import pytest
from coversort.providers.spotify.queries import (
    FETCH_PLAYLIST_HASH,
    MOVE_ITEMS_HASH,
    FetchPlaylistVariables,
    MoveType,
    build_query,
    move_items,
)


class TestBuildQuery:

    def test_fetch_playlist_envelope(self):
        body = build_query(FetchPlaylistVariables("abc123", offset=25, limit=50))
        assert body == {
            "operationName": "fetchPlaylistWithGatedEntityRelations",
            "variables": {"uri": "spotify:playlist:abc123", "offset": 25, "limit": 50},
            "extensions": {
                "persistedQuery": {
                    "sha256Hash": "19ff1327c29e99c208c86d7a9d8f1929cfdf3d3202a0ff4253c821f1901aa94d",
                    "version": 1,
                },
            },
        }

    def test_move_items_envelope(self):
        body = build_query(move_items("abc123", ["uid-b"], "uid-a"))
        assert body["operationName"] == "moveItemsInPlaylist"
        assert body["variables"] == {
            "playlistUri": "spotify:playlist:abc123",
            "newPosition": {"fromUid": "uid-a", "moveType": "AFTER_UID"},
            "uids": ["uid-b"],
        }
        assert body["extensions"]["persistedQuery"] == {
            "sha256Hash": "47c69e71df79e3c80e4af7e7a9a727d82565bb20ae20dc820d6bc6f94def482d",
            "version": 1,
        }

    def test_before_uid_move_type(self):
        body = build_query(move_items("p", ["x"], "y", MoveType.BEFORE))
        assert body["variables"]["newPosition"]["moveType"] == "BEFORE_UID"

    def test_hashes_are_64_hex_chars(self):
        for value in (FETCH_PLAYLIST_HASH, MOVE_ITEMS_HASH):
            assert len(value) == 64
            int(value, 16)

    def test_body_is_json_serializable(self):
        body = build_query(move_items("p", ("x", "z"), "y"))
        decoded = json.loads(json.dumps(body))
        assert decoded["variables"]["uids"] == ["x", "z"]
        assert decoded["variables"]["newPosition"]["moveType"] == "AFTER_UID"

    def test_unknown_operation_rejected(self):
        with pytest.raises(TypeError):
            build_query({"uri": "spotify:playlist:p"})
