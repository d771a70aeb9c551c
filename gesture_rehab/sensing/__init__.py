"""Orientation sources, quantization and noise filtering."""
from .quantizer import OrientationQuantizer, quaternion_to_euler, euler_to_quaternion
from .sample_filter import SampleFilter
from .collector import StateCollector
from .source import OrientationSource
from .scripted_source import ScriptedSource, FeedFrame
from .myo_source import MyoSource
from .pipeline import SamplingPipeline

__all__ = [
    "OrientationQuantizer",
    "quaternion_to_euler",
    "euler_to_quaternion",
    "SampleFilter",
    "StateCollector",
    "OrientationSource",
    "ScriptedSource",
    "FeedFrame",
    "MyoSource",
    "SamplingPipeline",
]
