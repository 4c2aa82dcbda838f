"""
Unit tests for the custom-landmark overlay store.
"""

import json

import pytest

from tour_toolkit.core.models import IconType
from tour_toolkit.ingestion.diagnostics import IssueKind
from tour_toolkit.ingestion.overlay import OverlayStore, new_custom_landmark


@pytest.fixture
def store(tmp_path):
    return OverlayStore(tmp_path / "custom_locations.json")


class TestOverlayStore:

    def test_read_when_file_missing_then_empty(self, store, diagnostics):
        assert store.read_records(diagnostics) == []
        assert len(diagnostics) == 0

    def test_read_when_corrupt_then_empty_and_reported(self, store, diagnostics):
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load(diagnostics=diagnostics) == []
        assert diagnostics.of_kind(IssueKind.PERSISTENCE_CORRUPT)

    def test_read_when_slot_not_array_then_reported(self, store, diagnostics):
        store.path.write_text(json.dumps({"locations": {"name": "x"}}), encoding="utf-8")
        assert store.read_records(diagnostics) == []
        assert diagnostics.of_kind(IssueKind.PERSISTENCE_CORRUPT)

    def test_append_when_called_twice_then_both_persisted(self, store, landmark_factory):
        assert store.append(landmark_factory(1700000000001, "Cafe"))
        assert store.append(landmark_factory(1700000000002, "Park", icon_type=IconType.NATURE))

        document = json.loads(store.path.read_text(encoding="utf-8"))
        assert [r["name"] for r in document["locations"]] == ["Cafe", "Park"]
        assert not store.path.with_suffix(".tmp").exists()

    def test_load_when_reloaded_then_ids_stable(self, store, landmark_factory):
        original = landmark_factory(1700000000001, "Cafe", aliases=("Corner",))
        store.append(original)

        first = store.load()
        second = store.load()

        assert first == second == [original]

    def test_load_when_id_written_as_float_then_stable_across_reloads(self, store, fixed_clock):
        store.path.write_text(
            json.dumps({"locations": [{"id": 1700000000001.0, "name": "Cafe", "coords": [1, 2]}]}),
            encoding="utf-8",
        )

        first = store.load(clock=fixed_clock)
        second = store.load(clock=lambda: fixed_clock() + 99)

        assert first[0].id == second[0].id == 1700000000001

    def test_read_when_not_utf8_then_empty_and_reported(self, store, diagnostics):
        store.path.write_bytes(b'{"locations": [\xff\xfe]}')
        assert store.load(diagnostics=diagnostics) == []
        assert diagnostics.of_kind(IssueKind.PERSISTENCE_CORRUPT)

    def test_append_when_store_not_utf8_then_not_overwritten(self, store, landmark_factory):
        raw = b'{"locations": [\xff\xfe]}'
        store.path.write_bytes(raw)
        assert store.append(landmark_factory(5)) is False
        assert store.path.read_bytes() == raw

    def test_append_when_store_corrupt_then_not_overwritten(self, store, landmark_factory):
        store.path.write_text("garbage", encoding="utf-8")
        assert store.append(landmark_factory(5)) is False
        assert store.path.read_text(encoding="utf-8") == "garbage"

    def test_append_when_directory_missing_then_created(self, tmp_path, landmark_factory):
        store = OverlayStore(tmp_path / "nested" / "dir" / "store.json")
        assert store.append(landmark_factory(5))
        assert store.path.exists()


class TestNewCustomLandmark:

    def test_new_when_minimal_input_then_defaults_filled(self, config, fixed_clock):
        landmark = new_custom_landmark("My Cafe", "<p>Good coffee</p>", (51.5, -0.12), config=config, clock=fixed_clock)

        assert landmark.id == fixed_clock()
        assert landmark.title == "MY CAFE"
        assert landmark.image_url == config.seeded_image(fixed_clock())
        assert landmark.video_url is None
        assert landmark.icon_type is IconType.MONUMENT

    def test_new_when_media_given_then_kept(self, fixed_clock):
        landmark = new_custom_landmark(
            "Lake", "Still water", (1.0, 2.0),
            image_url="https://img", audio_url="https://aud", icon_type=IconType.WATER, clock=fixed_clock,
        )
        assert landmark.image_url == "https://img"
        assert landmark.audio_url == "https://aud"
        assert landmark.icon_type is IconType.WATER

    @pytest.mark.parametrize("name, description", [("", "d"), ("n", "  ")])
    def test_new_when_blank_text_then_raises_error(self, name, description):
        with pytest.raises(ValueError, match="fill out"):
            new_custom_landmark(name, description, (1.0, 2.0))

    def test_new_when_coords_invalid_then_raises_error(self):
        with pytest.raises(ValueError, match="coords"):
            new_custom_landmark("n", "d", (1.0, float("inf")))
