"""Tests for the catalog updater -- merge, sort, persist, idempotence."""

from __future__ import annotations

import json
from pathlib import Path

from memey.catalog import merge_templates, update_catalog
from memey.models import Template
from memey.store import TemplateStore, load_templates


def _remote() -> list[Template]:
    return [
        Template(id=181913649, name="Drake Hotline Bling", url="https://i.imgflip.com/30b1gx.jpg"),
        Template(id=1, name="Y U No (renamed upstream)", url="https://i.imgflip.com/other.jpg"),
        Template(id=50, name="Fifty", url="https://i.imgflip.com/50.jpg"),
    ]


class TestMergeTemplates:
    def test_appends_only_unknown_ids(self, store: TemplateStore) -> None:
        added = merge_templates(store, _remote())
        assert added is True
        ids = [t.id for t in store]
        assert ids.count(1) == 1
        assert 181913649 in ids and 50 in ids

    def test_existing_entries_are_not_replaced(self, store: TemplateStore) -> None:
        merge_templates(store, _remote())
        (y_u_no,) = [t for t in store if t.id == 1]
        assert y_u_no.name == "Y U No"

    def test_sorted_after_merge(self, store: TemplateStore) -> None:
        merge_templates(store, _remote())
        ids = [t.id for t in store]
        assert ids == sorted(ids)

    def test_nothing_new(self, store: TemplateStore, templates: list[Template]) -> None:
        assert merge_templates(store, templates) is False

    def test_reports_additions(self, store: TemplateStore, capsys) -> None:
        merge_templates(store, _remote())
        err = capsys.readouterr().err
        assert "Added: Drake Hotline Bling" in err
        assert "Added: Fifty" in err
        assert "renamed upstream" not in err


class TestUpdateCatalog:
    def test_persists_sorted_pretty_json(self, store: TemplateStore) -> None:
        assert update_catalog(store, _remote()) is True

        assert store.path is not None
        data = json.loads(store.path.read_text(encoding="utf-8"))
        ids = [item["id"] for item in data]
        assert ids == sorted(ids)
        assert len(ids) == len(set(ids)) == 6
        assert store.path.read_text(encoding="utf-8").startswith("[\n    {")

    def test_idempotent(self, store: TemplateStore) -> None:
        assert update_catalog(store, _remote()) is True
        assert store.path is not None
        first = store.path.read_bytes()

        reloaded = load_templates(store.path)
        assert update_catalog(reloaded, _remote()) is False
        assert store.path.read_bytes() == first

    def test_no_additions_still_sorts_and_persists(self, tmp_path: Path) -> None:
        store = TemplateStore(
            [Template(id=9, name="Nine"), Template(id=3, name="Three")],
            path=tmp_path / "templates.json",
        )
        assert update_catalog(store, []) is False
        data = json.loads((tmp_path / "templates.json").read_text())
        assert [item["id"] for item in data] == [3, 9]

    def test_duplicate_ids_in_remote_are_added_once(self, tmp_path: Path) -> None:
        store = TemplateStore(path=tmp_path / "templates.json")
        remote = [Template(id=2, name="Two"), Template(id=2, name="Two again")]
        assert update_catalog(store, remote) is True
        assert [t.name for t in store] == ["Two"]
