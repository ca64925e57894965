import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from letsyolo.detection.probe import VersionProbe
from letsyolo.models import AgentDefinition, AgentStatus, DetectionResult


logger = logging.getLogger(__name__)

MAX_WORKERS = 8


class DetectionService:
    def __init__(self, probe: VersionProbe) -> None:
        self._probe = probe

    def detect(self, definition: AgentDefinition) -> DetectionResult:
        return self._probe.probe(definition.binaries, definition.version_flag)

    def detect_all(self, definitions: Iterable[AgentDefinition]) -> list[AgentStatus]:
        items = list(definitions)
        if not items:
            return []

        with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(items))) as executor:
            futures = [executor.submit(self.detect, item) for item in items]
            statuses: list[AgentStatus] = []
            for definition, future in zip(items, futures):
                try:
                    detection = future.result()
                except Exception:
                    logger.warning(
                        "Detection failed for %s", definition.display_name, exc_info=True
                    )
                    detection = DetectionResult.missing()
                statuses.append(AgentStatus(definition=definition, detection=detection))
        return statuses
