"""
Tests for GestureTemplate and GestureStore
===========================================
"""

import json

import pytest

from gesture_rehab.core.errors import GestureNotFound
from gesture_rehab.core.types import DiscreteOrientation
from gesture_rehab.gestures.store import GestureStore
from gesture_rehab.gestures.template import GestureTemplate
from gesture_rehab.sensing.quantizer import OrientationQuantizer


class TestGestureTemplate:
    """Test suite for GestureTemplate."""

    def test_append_keeps_order(self, steps):
        template = GestureTemplate()
        for s in steps:
            template.append(s)

        assert template.num_steps == 3
        assert len(template) == 3
        assert list(template) == steps
        assert template[1] == steps[1]

    def test_steps_is_a_copy(self, steps):
        template = GestureTemplate(steps)
        template.steps.append(DiscreteOrientation(0, 0, 0))
        assert len(template) == 3

    def test_step_matches(self, steps):
        template = GestureTemplate(steps)
        assert template.step_matches(DiscreteOrientation(10, 11, 8), 1)
        assert not template.step_matches(DiscreteOrientation(10, 10, 8), 1)
        assert template.step_matches(DiscreteOrientation(10, 10, 8), 1, tolerance=3)

    def test_json_has_no_trailing_separator(self, steps):
        text = GestureTemplate(steps).to_json()

        assert "\b" not in text
        assert ", ]" not in text and ",]" not in text
        assert json.loads(text) == {
            "gesture": [
                {"roll": 9, "pitch": 9, "yaw": 9},
                {"roll": 9, "pitch": 13, "yaw": 9},
                {"roll": 9, "pitch": 17, "yaw": 9},
            ]
        }

    def test_json_round_trip(self, steps):
        template = GestureTemplate(steps)
        assert GestureTemplate.from_json(template.to_json(indent=2)) == template

    def test_empty_template_json(self):
        assert json.loads(GestureTemplate().to_json()) == {"gesture": []}

    def test_from_quaternions_deduplicates(self, steps):
        quantizer = OrientationQuantizer()
        quats = [quantizer.center_quaternion(s) for s in (steps[0], steps[0], steps[1], steps[2], steps[2])]

        assert list(GestureTemplate.from_quaternions(quats)) == steps
        assert len(GestureTemplate.from_quaternions(quats, deduplicate=False)) == 5

    def test_describe(self, steps):
        lines = GestureTemplate(steps).describe().splitlines()
        assert lines[0] == "R: 9 P: 9 Y: 9"
        assert len(lines) == 3


class TestGestureStore:
    """Test suite for GestureStore."""

    @pytest.fixture
    def store(self):
        return GestureStore()

    def test_save_and_get(self, store, steps):
        template = GestureTemplate(steps)
        store.save("raise", template)

        assert store.get("raise") is template
        assert "raise" in store
        assert len(store) == 1

    def test_get_unknown_raises(self, store):
        with pytest.raises(GestureNotFound) as exc_info:
            store.get("missing")
        assert exc_info.value.name == "missing"

    def test_not_found_is_a_key_error(self, store):
        with pytest.raises(KeyError):
            store.get("missing")

    def test_save_overwrites(self, store, steps):
        store.save("raise", GestureTemplate(steps))
        replacement = GestureTemplate(steps[:1])
        store.save("raise", replacement)

        assert store.get("raise") is replacement
        assert len(store) == 1

    def test_names_are_stable_for_menu_selection(self, store, steps):
        for name in ("wrist", "elbow", "shoulder"):
            store.save(name, GestureTemplate(steps))

        names = store.names()
        assert names == ["elbow", "shoulder", "wrist"]
        assert [store.name_at(i) for i in range(3)] == names

    def test_name_at_out_of_range(self, store, steps):
        store.save("raise", GestureTemplate(steps))
        with pytest.raises(IndexError):
            store.name_at(1)
        with pytest.raises(IndexError):
            store.name_at(-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
