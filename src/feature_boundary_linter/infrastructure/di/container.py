from typing import TYPE_CHECKING, Any, Optional, cast

from feature_boundary_linter.domain.config import ConfigurationLoader
from feature_boundary_linter.domain.registry import RegistryBuilder
from feature_boundary_linter.infrastructure.config_file_loader import ConfigFileLoader
from feature_boundary_linter.infrastructure.gateways.dart_directive_scanner import (
    DartDirectiveScanner,
)
from feature_boundary_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from feature_boundary_linter.infrastructure.gateways.text_edit_gateway import TextEditGateway
from feature_boundary_linter.infrastructure.reporters import (
    JsonAuditReporter,
    TerminalAuditReporter,
)
from feature_boundary_linter.infrastructure.services.guidance_service import GuidanceService
from feature_boundary_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from feature_boundary_linter.domain.protocols import (
        DirectiveScannerProtocol,
        FileSystemProtocol,
        GuidanceServiceProtocol,
        TelemetryPort,
        TextEditProtocol,
    )
    from feature_boundary_linter.domain.registry import RuleRegistry
    from feature_boundary_linter.interface.reporters import AuditReporter


class BoundaryContainer:
    """Dependency Injection Container for the feature boundary linter."""

    _instance: Optional["BoundaryContainer"] = None

    def __init__(self, config_loader: ConfigurationLoader | None = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_loader)

    def _register_defaults(self, config_loader: ConfigurationLoader | None) -> None:
        """Register default implementations for protocols."""
        if config_loader is None:
            config_loader = ConfigurationLoader(ConfigFileLoader.load_config_from_fs())
        self.register_singleton("ConfigurationLoader", config_loader)

        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("FEATURE-BOUNDARY", "cyan", "Boundary scan online")
        )
        guidance_service = GuidanceService()
        self.register_singleton("GuidanceService", guidance_service)
        self.register_singleton("DirectiveScanner", DartDirectiveScanner())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("TextEditGateway", TextEditGateway())
        self.register_singleton("TerminalReporter", TerminalAuditReporter(guidance_service))
        self.register_singleton("JsonReporter", JsonAuditReporter(guidance_service))

    def register_singleton(self, key: str, instance: object) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> object:
        """Resolve a dependency."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_guidance_service(self) -> "GuidanceServiceProtocol":
        return cast("GuidanceServiceProtocol", self.get("GuidanceService"))

    def get_scanner(self) -> "DirectiveScannerProtocol":
        return cast("DirectiveScannerProtocol", self.get("DirectiveScanner"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_text_edit_gateway(self) -> "TextEditProtocol":
        return cast("TextEditProtocol", self.get("TextEditGateway"))

    def get_reporter(self, output_format: str = "text") -> "AuditReporter":
        key = "JsonReporter" if output_format == "json" else "TerminalReporter"
        return cast("AuditReporter", self.get(key))

    def get_rule_registry(self) -> "RuleRegistry":
        """Build the registration table on first use. Raises RegistrationError if malformed."""
        if "RuleRegistry" not in self._singletons:
            registry = RegistryBuilder.defaults(
                self.get_guidance_service().get_registry(),
                self.get_config_loader(),
            ).build()
            self.register_singleton("RuleRegistry", registry)
        return cast("RuleRegistry", self.get("RuleRegistry"))

    @classmethod
    def get_instance(cls) -> "BoundaryContainer":
        """Get the singleton instance of the container."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for tests)."""
        cls._instance = None
