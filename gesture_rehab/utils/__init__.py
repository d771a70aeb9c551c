"""Configuration and logging utilities."""
from .config import Config
from .logger import setup_logging, ExerciseLogger

__all__ = ["Config", "setup_logging", "ExerciseLogger"]
