from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pitchgraph.adapters.storage_local import MAX_LAST_SEARCHED, MAX_LAST_SEARCHED_PRO, PlayerStoreLocal
from pitchgraph.domain.players import LastSearchedPlayerInfo, PlayerInfo
from pitchgraph.domain.ports import EntityType

T0 = datetime(2024, 1, 14, 12, 0, tzinfo=timezone.utc)


def searched(player_id: str, minutes: int) -> LastSearchedPlayerInfo:
    return LastSearchedPlayerInfo(
        player_id=player_id,
        name=f"Player {player_id}",
        nationality="KOR",
        club="FC Test",
        last_searched=T0 + timedelta(minutes=minutes),
    )


def test_save_favourite_and_replace_by_player_id(tmp_path: Path) -> None:
    store = PlayerStoreLocal(root_dir=str(tmp_path))
    store.save_player_info(PlayerInfo(player_id="1", name="Son", nationality="KOR", club="Spurs"))
    store.save_player_info(PlayerInfo(player_id="1", name="Son", nationality="KOR", club="Tottenham"))

    favourites = store.fetch_all(EntityType.PLAYER)

    assert favourites == [PlayerInfo(player_id="1", name="Son", nationality="KOR", club="Tottenham")]
    assert store.is_player_favorited("1") is True
    assert store.is_player_favorited("2") is False
    assert store.fetch_all(EntityType.LAST_SEARCHED) == []


def test_last_searched_sorted_newest_first(tmp_path: Path) -> None:
    store = PlayerStoreLocal(root_dir=str(tmp_path))
    for player_id, minutes in (("a", 5), ("b", 30), ("c", 1)):
        store.save_player_info(searched(player_id, minutes))

    ids = [record.player_id for record in store.fetch_all(EntityType.LAST_SEARCHED)]

    assert ids == ["b", "a", "c"]
    loaded = store.load_player_info("a", EntityType.LAST_SEARCHED)
    assert loaded == searched("a", 5)


def test_entry_limits_depend_on_pro_flag(tmp_path: Path) -> None:
    store = PlayerStoreLocal(root_dir=str(tmp_path))
    for index in range(MAX_LAST_SEARCHED):
        store.save_player_info(searched(str(index), index))

    assert store.exceeded_maximum_number_of_entries(is_pro=False) is True
    assert store.exceeded_maximum_number_of_entries(is_pro=True) is False

    for index in range(MAX_LAST_SEARCHED, MAX_LAST_SEARCHED_PRO):
        store.save_player_info(searched(str(index), index))
    assert store.exceeded_maximum_number_of_entries(is_pro=True) is True


def test_delete_oldest_and_delete_by_id(tmp_path: Path) -> None:
    store = PlayerStoreLocal(root_dir=str(tmp_path))
    for player_id, minutes in (("old", 0), ("mid", 10), ("new", 20)):
        store.save_player_info(searched(player_id, minutes))

    store.delete_oldest_last_searched()
    assert [r.player_id for r in store.fetch_all(EntityType.LAST_SEARCHED)] == ["new", "mid"]

    store.delete(EntityType.LAST_SEARCHED, "new")
    assert [r.player_id for r in store.fetch_all(EntityType.LAST_SEARCHED)] == ["mid"]


def test_delete_all_only_clears_one_collection(tmp_path: Path) -> None:
    store = PlayerStoreLocal(root_dir=str(tmp_path))
    store.save_player_info(PlayerInfo(player_id="1", name="Kim"))
    store.save_player_info(searched("1", 0))

    store.delete_all(EntityType.LAST_SEARCHED)

    assert store.fetch_all(EntityType.LAST_SEARCHED) == []
    assert store.is_player_favorited("1") is True


def test_subscribers_notified_after_each_mutation(tmp_path: Path) -> None:
    store = PlayerStoreLocal(root_dir=str(tmp_path))
    events = []
    unsubscribe = store.subscribe(lambda: events.append(len(store.fetch_all(EntityType.PLAYER))))

    store.save_player_info(PlayerInfo(player_id="1"))
    store.save_player_info(PlayerInfo(player_id="2"))
    store.delete(EntityType.PLAYER, "1")
    unsubscribe()
    store.delete_all(EntityType.PLAYER)

    assert events == [1, 2, 1]


def test_unreadable_rows_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "players.json").write_text(
        '{"player": [{"playerId": 7}, {"playerId": "8", "name": "Ok"}], "last_searched": "broken"}',
        encoding="utf-8",
    )
    store = PlayerStoreLocal(root_dir=str(tmp_path))

    assert store.fetch_all(EntityType.PLAYER) == [PlayerInfo(player_id="8", name="Ok")]
    assert store.fetch_all(EntityType.LAST_SEARCHED) == []


def test_delete_oldest_skips_unreadable_rows(tmp_path: Path) -> None:
    store = PlayerStoreLocal(root_dir=str(tmp_path))
    store.save_player_info(searched("a", 0))
    store.save_player_info(searched("b", 30))
    path = tmp_path / "players.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    data["last_searched"].insert(0, {"playerId": 5})
    path.write_text(json.dumps(data), encoding="utf-8")

    store.delete_oldest_last_searched()

    assert [r.player_id for r in store.fetch_all(EntityType.LAST_SEARCHED)] == ["b"]
    assert json.loads(path.read_text(encoding="utf-8"))["last_searched"][0] == {"playerId": 5}
