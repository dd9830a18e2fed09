"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import typer

from feature_boundary_linter.domain.registry import RegistrationError
from feature_boundary_linter.infrastructure.di.container import BoundaryContainer
from feature_boundary_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = BoundaryContainer.get_instance()
    try:
        registry = container.get_rule_registry()
    except RegistrationError as exc:
        typer.secho(f"Rule registration failed: {exc}", fg=typer.colors.RED, err=True)
        raise SystemExit(2) from exc

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        registry=registry,
        guidance_service=container.get_guidance_service(),
        scanner=container.get_scanner(),
        filesystem=container.get_filesystem_gateway(),
        text_edit=container.get_text_edit_gateway(),
        terminal_reporter=container.get_reporter("text"),
        json_reporter=container.get_reporter("json"),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
