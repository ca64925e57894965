from letsyolo.detection.locator import BinaryLocator
from letsyolo.detection.probe import VersionProbe, run_command
from letsyolo.detection.service import DetectionService

__all__ = [
    "BinaryLocator",
    "DetectionService",
    "VersionProbe",
    "run_command",
]
