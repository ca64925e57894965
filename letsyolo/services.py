from dataclasses import dataclass

from letsyolo.agents.catalog import build_agent_catalog
from letsyolo.detection import probe as probe_module
from letsyolo.detection.locator import BinaryLocator
from letsyolo.detection.probe import VersionProbe
from letsyolo.detection.service import DetectionService
from letsyolo.keys.profiles import ShellProfileHook
from letsyolo.keys.scanner import SecretScanner
from letsyolo.keys.store import SecretStore
from letsyolo.models import AgentDefinition, AgentType
from letsyolo.settings import RuntimeContext, Settings, SettingsRepository
from letsyolo.toggles.engine import ToggleEngine


@dataclass
class AppServices:
    context: RuntimeContext
    settings: Settings
    catalog: dict[AgentType, AgentDefinition]
    detection: DetectionService
    toggles: ToggleEngine
    store: SecretStore
    scanner: SecretScanner
    profiles: ShellProfileHook


def build_services(context: RuntimeContext) -> AppServices:
    settings = SettingsRepository(context).load()
    catalog = build_agent_catalog(context.home)
    locator = BinaryLocator(context, extra_bin_dirs=settings.extra_bin_dirs)
    probe = VersionProbe(
        locator,
        timeout=settings.probe_timeout,
        runner=probe_module.run_command,
        environ=context.environ,
    )
    detection = DetectionService(probe)
    store = SecretStore(context)
    return AppServices(
        context=context,
        settings=settings,
        catalog=catalog,
        detection=detection,
        toggles=ToggleEngine(catalog, detection),
        store=store,
        scanner=SecretScanner(context, store, extra_paths=settings.extra_secret_paths),
        profiles=ShellProfileHook(context),
    )
