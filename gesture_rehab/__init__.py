"""
Myo Gesture Rehab
=================

Record an arm-orientation gesture once, then count how many times a
performer replays it.

Packages:
    - core: shared types, errors and the event bus
    - sensing: orientation sources, quantization and noise filtering
    - gestures: templates, the in-memory store, recorder and matcher
    - control: exercise sets (rep counting)
    - utils: configuration and logging
"""

__version__ = "1.0.0"
__author__ = "Rehab Team"
