"""Testing utilities for cdwalk consumers."""

from .fixtures import build_tree, RecordingCallback, FaultInjectingAdapter

__all__ = ['build_tree', 'RecordingCallback', 'FaultInjectingAdapter']
