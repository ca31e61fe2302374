"""Tests for the command line entrypoint."""

from __future__ import annotations

import json

import pytest

from dipgame import cli


@pytest.fixture
def documents(tmp_path, channel_map_payload, channel_game_payload):
    map_path = tmp_path / "channel.json"
    game_path = tmp_path / "game.json"
    map_path.write_text(json.dumps(channel_map_payload), encoding="utf-8")
    game_path.write_text(json.dumps(channel_game_payload), encoding="utf-8")
    return str(map_path), str(game_path)


def test_orders_lists_ids_and_text(documents, capsys):
    map_path, game_path = documents
    assert cli.main(["orders", map_path, game_path, "lon"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["move-lon-ech-\tlon -> ech", "hold-lon\tlon hold"]


def test_orders_without_unit(documents, capsys):
    map_path, game_path = documents
    assert cli.main(["orders", map_path, game_path, "ech"]) == 1
    assert "no unit at ech" in capsys.readouterr().err


def test_groups(documents, capsys):
    map_path, _ = documents
    assert cli.main(["groups", map_path, "2"]) == 0
    assert capsys.readouterr().out.splitlines() == ["eng", "fra"]


def test_groups_for_unsupported_player_count(documents, capsys):
    map_path, _ = documents
    assert cli.main(["groups", map_path, "5"]) == 1
    assert "5 players" in capsys.readouterr().err


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_relative_paths_resolve_against_configured_directories(
    tmp_path, monkeypatch, capsys, channel_map_payload, channel_game_payload
):
    maps_dir = tmp_path / "maps"
    data_dir = tmp_path / "games"
    (maps_dir / "channel").mkdir(parents=True)
    data_dir.mkdir()
    (maps_dir / "channel" / "channel.json").write_text(json.dumps(channel_map_payload), encoding="utf-8")
    (data_dir / "friday.json").write_text(json.dumps(channel_game_payload), encoding="utf-8")
    monkeypatch.setenv("MAPS_DIR", str(maps_dir))
    monkeypatch.setenv("DATA_DIR", str(data_dir))

    assert cli.main(["orders", "channel/channel.json", "friday.json", "par"]) == 0
    assert capsys.readouterr().out.splitlines() == ["move-par-pic-\tpar -> pic", "hold-par\tpar hold"]
    assert cli.main(["groups", "channel/channel.json", "2"]) == 0
    assert capsys.readouterr().out.splitlines() == ["eng", "fra"]
