import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Mapping, Optional

from letsyolo.detection.service import DetectionService
from letsyolo.errors import LetsYoloError, NotInstalledError
from letsyolo.models import (
    AgentDefinition,
    AgentStatus,
    AgentType,
    DetectionResult,
    ToggleResult,
    ToggleState,
)
from letsyolo.toggles.strategies import TOGGLE_STRATEGIES, ToggleStrategy


logger = logging.getLogger(__name__)


class ToggleEngine:
    def __init__(
        self,
        catalog: Mapping[AgentType, AgentDefinition],
        detection: DetectionService,
        strategies: Optional[Mapping[AgentType, ToggleStrategy]] = None,
    ) -> None:
        self._catalog = catalog
        self._detection = detection
        self._strategies = strategies or TOGGLE_STRATEGIES

    def definition(self, agent: AgentType) -> AgentDefinition:
        return self._catalog[agent]

    def strategy(self, agent: AgentType) -> ToggleStrategy:
        return self._strategies[agent]

    def read(self, agent: AgentType) -> ToggleState:
        definition = self.definition(agent)
        return self.strategy(agent).read(definition)

    def enable(self, agent: AgentType) -> ToggleResult:
        definition = self.definition(agent)
        detection = self._detection.detect(definition)
        return self._enable_detected(definition, detection)

    def disable(self, agent: AgentType) -> ToggleResult:
        definition = self.definition(agent)
        return self._run(definition, lambda: self.strategy(agent).disable(definition))

    def enable_all(self) -> list[ToggleResult]:
        statuses = self._detection.detect_all(self._catalog.values())
        return [
            self._enable_detected(status.definition, status.detection)
            for status in statuses
        ]

    def disable_all(self) -> list[ToggleResult]:
        return self._map_agents(self.disable)

    def status(self, agent: AgentType) -> ToggleResult:
        definition = self.definition(agent)
        detection = self._detection.detect(definition)
        return self._status_detected(definition, detection)

    def status_all(
        self, statuses: Optional[list[AgentStatus]] = None
    ) -> list[ToggleResult]:
        if statuses is None:
            statuses = self._detection.detect_all(self._catalog.values())
        return [
            self._status_detected(status.definition, status.detection)
            for status in statuses
        ]

    def _enable_detected(
        self, definition: AgentDefinition, detection: DetectionResult
    ) -> ToggleResult:
        if not detection.installed:
            error = NotInstalledError(definition.display_name, definition.install_command)
            return ToggleResult(
                type=definition.type,
                display_name=definition.display_name,
                success=False,
                error=str(error),
            )
        return self._run(
            definition, lambda: self.strategy(definition.type).enable(definition)
        )

    def _status_detected(
        self, definition: AgentDefinition, detection: DetectionResult
    ) -> ToggleResult:
        session_only = not definition.persistent_toggle
        if not detection.installed:
            state = ToggleState(
                enabled=False,
                session_only=session_only,
                cli_flag=definition.cli_flag,
                details="Not installed",
                config_path=definition.config_path,
            )
        else:
            try:
                state = self.read(definition.type)
            except LetsYoloError as exc:
                state = ToggleState(
                    enabled=False,
                    session_only=session_only,
                    cli_flag=definition.cli_flag,
                    details=f"Could not read config ({exc})",
                    config_path=definition.config_path,
                )
        return ToggleResult(
            type=definition.type,
            display_name=definition.display_name,
            success=True,
            state=state,
        )

    def _run(
        self, definition: AgentDefinition, operation: Callable[[], ToggleState]
    ) -> ToggleResult:
        try:
            state = operation()
        except LetsYoloError as exc:
            logger.debug("%s: %s", definition.display_name, exc)
            return ToggleResult(
                type=definition.type,
                display_name=definition.display_name,
                success=False,
                error=str(exc),
            )
        return ToggleResult(
            type=definition.type,
            display_name=definition.display_name,
            success=True,
            state=state,
        )

    def _map_agents(
        self, operation: Callable[[AgentType], ToggleResult]
    ) -> list[ToggleResult]:
        agents = list(self._catalog)
        with ThreadPoolExecutor(max_workers=len(agents) or 1) as executor:
            return list(executor.map(operation, agents))
