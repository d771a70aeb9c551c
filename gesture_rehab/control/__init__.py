"""Exercise set control."""
from .rep_counter import RepCounter, SetReport

__all__ = ["RepCounter", "SetReport"]
