"""
Tests for configuration, logging and the event bus
===================================================
"""

import logging

import pytest

from gesture_rehab.core.events import EventBus, Events
from gesture_rehab.utils.config import Config
from gesture_rehab.utils.logger import ExerciseLogger, setup_logging


class TestConfig:
    """Test suite for Config."""

    def test_singleton(self):
        assert Config() is Config()

    def test_loads_shipped_config(self):
        config = Config().load()

        assert config.get("sampling.frequency_hz") == 10
        assert config.get("quantization.scale") == 18
        assert config.matching == {"tolerance": 2, "max_strikes": 2}
        assert config.controls["confirm_pose"] == "double_tap"
        assert config.get("exercise.default_reps") == 5

    def test_shipped_config_is_valid(self):
        config = Config().load()
        assert config.problems() == []
        assert config.source_path.endswith("config.yaml")

    def test_defaults_before_load(self):
        assert Config().get("matching.max_strikes") == 2

    def test_missing_file_uses_defaults(self, tmp_path):
        config = Config().load(str(tmp_path / "nope.yaml"))
        assert config.source_path is None
        assert config.get("matching.tolerance") == 2
        assert config.sampling == {"frequency_hz": 10}

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("matching:\n  tolerance: 4\n")

        config = Config().load(str(path))

        assert config.get("matching.tolerance") == 4
        assert config.get("matching.max_strikes") == 2
        assert config.get("device.connect_timeout_ms") == 10000

    def test_get_missing_key(self):
        config = Config().load()
        assert config.get("matching.nope") is None
        assert config.get("a.b.c", "x") == "x"
        assert config.get_section("nope") == {}

    def test_overrides_merge(self):
        config = Config().load(overrides={"matching": {"tolerance": 3}})
        assert config.get("matching.tolerance") == 3
        assert config.get("matching.max_strikes") == 2

    def test_type_problems_are_logged(self, tmp_path, caplog):
        path = tmp_path / "bad.yaml"
        path.write_text("matching:\n  tolerance: two\nsampling: 5\n")

        with caplog.at_level(logging.WARNING):
            problems = Config().load(str(path)).problems()

        assert any(p.startswith("matching.tolerance") for p in problems)
        assert any("'sampling' must be a mapping" in p for p in problems)
        assert "Config: " in caplog.text

    def test_non_mapping_file_uses_defaults(self, tmp_path, caplog):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with caplog.at_level(logging.WARNING):
            config = Config().load(str(path))

        assert config.get("matching.tolerance") == 2
        assert "not a mapping" in caplog.text

    @pytest.mark.parametrize("frequency", [0, -1])
    def test_non_positive_frequency_is_a_problem(self, frequency):
        config = Config().load(overrides={"sampling": {"frequency_hz": frequency}})
        assert any("frequency_hz must be positive" in p for p in config.problems())

    def test_bool_is_not_an_int(self):
        config = Config().load(overrides={"matching": {"max_strikes": True}})
        assert any("matching.max_strikes" in p for p in config.problems())

    def test_optional_values_accept_any_type(self):
        config = Config().load(overrides={"device": {"sdk_path": "/opt/myo"}})
        assert config.problems() == []

    def test_reset(self):
        config = Config().load(overrides={"matching": {"tolerance": 9}})
        Config.reset()
        assert Config() is not config
        assert Config().get("matching.tolerance") == 2


class TestLogging:
    """setup_logging and ExerciseLogger."""

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "rehab.log"
        root = setup_logging(level="DEBUG", log_file=str(log_file))
        try:
            logging.getLogger("gesture_rehab.test").info("hello")
            for handler in root.handlers:
                handler.flush()
            assert root.level == logging.DEBUG
            assert "hello" in log_file.read_text()
        finally:
            for handler in list(root.handlers):
                handler.close()
                root.removeHandler(handler)

    def test_unknown_level_falls_back_to_info(self):
        root = setup_logging(level="chatty")
        try:
            assert root.level == logging.INFO
        finally:
            root.handlers.clear()

    def test_exercise_history(self):
        exercise = ExerciseLogger()
        exercise.log_recording("raise", 3)
        exercise.log_recording(None, 2, saved=False)
        exercise.log_rep("raise", 1, 2, strikes=1, resets=0, duration_s=1.5)
        exercise.log_rep("raise", 2, 2)

        history = exercise.get_history()
        assert [e["kind"] for e in history] == ["recording", "recording", "rep", "rep"]
        assert history[1]["saved"] is False
        assert exercise.total_reps == 2
        assert exercise.get_history(last_n=1)[0]["rep"] == 2


class TestEventBus:
    """Test suite for EventBus."""

    def test_singleton(self, bus):
        assert EventBus() is bus

    def test_priority_order(self, bus):
        calls = []
        bus.subscribe(Events.STRIKE, lambda **kw: calls.append("low"), priority=0)
        bus.subscribe(Events.STRIKE, lambda **kw: calls.append("high"), priority=10)

        bus.emit(Events.STRIKE, step=1, strikes=1)

        assert calls == ["high", "low"]

    def test_handler_errors_do_not_propagate(self, bus):
        calls = []

        def broken(**kwargs):
            raise RuntimeError("display gone")

        bus.subscribe(Events.STEP_MATCHED, broken, priority=5)
        bus.subscribe(Events.STEP_MATCHED, lambda **kw: calls.append(kw["step"]))

        bus.emit(Events.STEP_MATCHED, step=2, num_steps=3)

        assert calls == [2]

    def test_unsubscribe_and_clear(self, bus):
        handler = lambda **kw: None
        bus.subscribe(Events.STRIKE, handler)
        bus.subscribe(Events.MATCH_RESET, handler)
        assert bus.listener_count == 2

        bus.unsubscribe(Events.STRIKE, handler)
        assert bus.listener_count == 1
        bus.clear()
        assert bus.listener_count == 0

    def test_history(self, bus):
        bus.emit(Events.MATCH_STARTED, num_steps=3)
        bus.emit(Events.STRIKE, step=1, strikes=1)
        bus.emit(Events.STRIKE, step=1, strikes=2)

        assert [e["event"] for e in bus.get_history()] == [
            Events.MATCH_STARTED, Events.STRIKE, Events.STRIKE]
        assert bus.events_named(Events.STRIKE) == [
            {"step": 1, "strikes": 1}, {"step": 1, "strikes": 2}]

    def test_history_is_capped(self, bus):
        for i in range(150):
            bus.emit(Events.SAMPLE_ACCEPTED, step=i)
        assert len(bus.get_history(last_n=1000)) == 100
        assert bus.events_named(Events.SAMPLE_ACCEPTED)[0]["step"] == 50


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
