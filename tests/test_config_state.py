from __future__ import annotations

import json

from frontend.state import ConfigState


def test_load_edit_and_save_round_trip(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"delivery": {"mode": "reply"}}), encoding="utf-8")
    state = ConfigState()

    state.load(path)
    assert state.status() == ("config: loaded", "status-loaded")

    state.set_section("delivery", {"mode": "repost"})
    assert state.status() == ("config: modified *", "status-modified")
    assert state.save(path)

    assert json.loads(path.read_text(encoding="utf-8")) == {"delivery": {"mode": "repost"}}
    assert not state.dirty


def test_section_returns_a_copy(tmp_path) -> None:
    state = ConfigState(data={"health": {"port": 8080}})
    state.section("health")["port"] = 1
    assert state.section("health") == {"port": 8080}
    assert state.section("missing") == {}


def test_load_reports_broken_documents(tmp_path) -> None:
    state = ConfigState()

    state.load(tmp_path / "config.json")
    assert state.error == "config.json missing"

    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    state.load(path)
    assert state.data is None
    assert state.status() == ("config: config root must be an object", "status-error")
    assert not state.save(path)
