#!/usr/bin/env python3
"""
Myo Gesture Rehab - console application.

A therapist records a reference arm motion with the armband, names it and
saves it for the session. A patient then picks a saved gesture and performs
a number of reps; each rep is checked step by step against the recording.

Controls on the armband:
    double tap   - finish a recording
    wave out     - abort the current exercise set

Usage:
    python main.py                                # Myo armband
    python main.py --source demo                  # scripted feed, no hardware
    python main.py --source demo --feed my.yaml   # custom scripted feed
    python main.py --log-level DEBUG --log-file logs/rehab.log
"""

import sys
import os
import argparse
import logging

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from gesture_rehab.core.errors import GestureError, SourceLost, SourceUnavailable
from gesture_rehab.core.events import EventBus, Events
from gesture_rehab.control.rep_counter import RepCounter
from gesture_rehab.gestures.matcher import GestureMatcher
from gesture_rehab.gestures.recorder import GestureRecorder
from gesture_rehab.gestures.store import GestureStore
from gesture_rehab.sensing.myo_source import MyoSource
from gesture_rehab.sensing.quantizer import OrientationQuantizer
from gesture_rehab.sensing.scripted_source import ScriptedSource
from gesture_rehab.utils.config import Config
from gesture_rehab.utils.logger import setup_logging, ExerciseLogger

logger = logging.getLogger(__name__)

MENU = (
    "\n1. Therapist - Record a gesture"
    "\n2. Patient - Perform reps of a gesture"
    "\n3. Show a recorded gesture"
    "\nq. Quit"
)


class GestureRehabApp:
    """Console menu around the recorder, the store and the rep counter."""

    def __init__(self, config: Config, source, input_fn=input, output_fn=print):
        self._config = config
        self._source = source
        self._input = input_fn
        self._output = output_fn
        self._running = False

        self._bus = EventBus()
        quantizer = OrientationQuantizer(config.quantization)

        self._store = GestureStore()
        self._recorder = GestureRecorder(source, config.sampling, quantizer, self._bus)
        self._matcher = GestureMatcher(source, config.matching, config.sampling,
                                       quantizer, self._bus)
        self._rep_counter = RepCounter(self._matcher, self._bus)
        self._exercise_logger = ExerciseLogger()
        self._default_reps = config.get("exercise.default_reps", 5)

        self._bus.subscribe(Events.REP_COMPLETED, self._on_rep_completed)
        self._bus.subscribe(Events.SAMPLE_ACCEPTED, self._on_sample_accepted)
        self._bus.subscribe(Events.GESTURE_SAVED, self._on_gesture_saved)

        logger.info("GestureRehabApp initialized (source=%s)", source.__class__.__name__)

    @property
    def store(self) -> GestureStore:
        return self._store

    @property
    def exercise_logger(self) -> ExerciseLogger:
        return self._exercise_logger

    def _on_rep_completed(self, **kwargs):
        result = kwargs.get("result")
        self._exercise_logger.log_rep(
            kwargs.get("gesture"), kwargs.get("rep"), kwargs.get("target"),
            strikes=result.strike_count if result else 0,
            resets=result.resets if result else 0,
            duration_s=kwargs.get("duration_s"),
        )

    def _on_sample_accepted(self, **kwargs):
        self._output(str(kwargs.get("sample")))

    def _on_gesture_saved(self, **kwargs):
        self._exercise_logger.log_recording(kwargs.get("name"), kwargs.get("steps", 0))

    def _ask(self, prompt: str) -> str:
        """Read one line; end of input stops the menu."""
        try:
            return self._input(prompt).strip()
        except EOFError:
            self._running = False
            raise

    def run(self) -> int:
        """Menu loop. Returns the process exit status."""
        self._running = True
        while self._running:
            self._output(MENU)
            try:
                choice = self._ask("> ").lower()
                if choice == "1":
                    self._record()
                elif choice == "2":
                    self._perform()
                elif choice == "3":
                    self._show()
                elif choice in ("q", "quit", "exit"):
                    self._running = False
                else:
                    self._output("Incorrect input!")
            except EOFError:
                break
            except SourceLost as e:
                logger.error("%s", e)
                return 1
            except GestureError as e:
                logger.error("%s", e)
        return 0

    def _record(self):
        self._output("Recording... double tap to finish.")
        try:
            template = self._recorder.record()
        except SourceLost as e:
            if e.partial is not None and len(e.partial) > 0:
                self._output(f"Sensor lost. {len(e.partial)} steps were recorded.")
                try:
                    self._offer_save(e.partial)
                except EOFError:
                    pass
            raise

        if len(template) == 0:
            self._output("Nothing was recorded - gesture discarded!")
            self._exercise_logger.log_recording(None, 0, saved=False)
            return
        self._output(template.describe())
        self._offer_save(template)

    def _offer_save(self, template):
        answer = self._ask("Do you want to save (Y/N)? ").lower()
        while answer not in ("y", "n"):
            self._output("Invalid!")
            answer = self._ask("Do you want to save (Y/N)? ").lower()

        if answer == "n":
            self._output("Gesture discarded!")
            self._exercise_logger.log_recording(None, len(template), saved=False)
            return

        name = self._ask("Enter a name for the gesture: ")
        while not name:
            name = self._ask("Enter a name for the gesture: ")
        self._store.save(name, template)
        self._bus.emit(Events.GESTURE_SAVED, name=name, steps=len(template))
        self._output(f"Gesture {name} saved!")

    def _choose_gesture(self):
        names = self._store.names()
        if not names:
            self._output("No gestures recorded yet.")
            return None
        for i, name in enumerate(names, start=1):
            self._output(f"{i}. {name}")

        while True:
            answer = self._ask("Gesture number: ")
            try:
                return self._store.name_at(int(answer) - 1)
            except (ValueError, IndexError):
                self._output("Incorrect input!")

    def _perform(self):
        name = self._choose_gesture()
        if name is None:
            return

        while True:
            answer = self._ask(f"How many reps would you like to perform? [{self._default_reps}] ")
            try:
                reps = int(answer) if answer else self._default_reps
            except ValueError:
                reps = 0
            if reps > 0:
                break
            self._output("Incorrect input!")

        self._output("Perform the gesture. Wave out to stop.")
        report = self._rep_counter.perform(name, self._store.get(name), reps)
        self._output(f"Reps: {report.completed_reps} / {report.target_reps}"
                     + (" (stopped)" if report.aborted else ""))

    def _show(self):
        name = self._choose_gesture()
        if name is not None:
            self._output(self._store.get(name).to_json(indent=2))


def build_source(args, config: Config):
    """Create and connect the orientation source selected on the command line."""
    if args.source == "demo":
        feed = args.feed or os.path.join(config.base_dir, "config", "demo_feed.yaml")
        source = ScriptedSource.from_file(feed, OrientationQuantizer(config.quantization),
                                          realtime=args.realtime)
    else:
        source = MyoSource(config.device, config.controls)
    source.connect(config.get("device.connect_timeout_ms", 10000))
    return source


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Myo Gesture Rehab - record a gesture, count its reps"
    )
    parser.add_argument(
        "--source", choices=["myo", "demo"], default="myo",
        help="Orientation source"
    )
    parser.add_argument(
        "--feed", type=str, default=None,
        help="YAML feed for --source demo"
    )
    parser.add_argument(
        "--realtime", action="store_true",
        help="Replay the demo feed at the sampling rate"
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to config.yaml"
    )
    parser.add_argument(
        "--log-level", type=str, default=None,
        help="Override logging.level"
    )
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Override logging.file"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    config = Config()
    config.load(config_path=args.config)

    log_cfg = config.get_section("logging")
    setup_logging(
        level=args.log_level or log_cfg.get("level", "INFO"),
        log_file=args.log_file or log_cfg.get("file"),
        max_size_mb=log_cfg.get("max_size_mb", 10),
        backup_count=log_cfg.get("backup_count", 3),
    )

    logger.info("=" * 60)
    logger.info("  MYO GESTURE REHAB")
    logger.info("  Source: %s", args.source)
    logger.info("=" * 60)

    try:
        source = build_source(args, config)
    except SourceUnavailable as e:
        logger.error("Error: %s", e)
        return 1

    with source:
        try:
            app = GestureRehabApp(config, source)
        except ValueError as e:
            logger.error("Invalid configuration: %s", e)
            return 1
        try:
            return app.run()
        except KeyboardInterrupt:
            logger.info("Interrupted.")
            return 0


if __name__ == "__main__":
    sys.exit(main())
