"""Detect a Python project's stack and resolve its deployment descriptor."""

from .models import DeploymentDescriptor, DetectionError, StackConfig
from .stack_detector import StackDetector, detect_stack

__all__ = [
    "DeploymentDescriptor",
    "DetectionError",
    "StackConfig",
    "StackDetector",
    "detect_stack",
]
