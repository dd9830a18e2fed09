"""CLI entry points for feature-boundary - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from feature_boundary_linter.domain.config import ConfigurationLoader
from feature_boundary_linter.domain.patterns import FeaturePathClassifier
from feature_boundary_linter.domain.protocols import (
    DirectiveScannerProtocol,
    FileSystemProtocol,
    GuidanceServiceProtocol,
    TelemetryPort,
    TextEditProtocol,
)
from feature_boundary_linter.domain.registry import RuleRegistry
from feature_boundary_linter.interface.reporters import AuditReporter
from feature_boundary_linter.use_cases.apply_fixes import ApplyFixesUseCase
from feature_boundary_linter.use_cases.check_boundaries import CheckBoundariesUseCase

OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    registry: RuleRegistry
    guidance_service: GuidanceServiceProtocol
    scanner: DirectiveScannerProtocol
    filesystem: FileSystemProtocol
    text_edit: TextEditProtocol
    terminal_reporter: AuditReporter
    json_reporter: AuditReporter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
            force=True,
        )

    @staticmethod
    def resolve_target_path(path: Optional[Path]) -> str:
        """Resolve target path: explicit path, else lib/ if it exists, else '.'."""
        if path and str(path) != ".":
            return str(path)
        lib_dir = Path.cwd() / "lib"
        if lib_dir.is_dir():
            return "lib"
        return "."

    @staticmethod
    def validate_format(output_format: str) -> str:
        if output_format not in OUTPUT_FORMATS:
            raise typer.BadParameter(
                f"must be one of: {', '.join(OUTPUT_FORMATS)}", param_hint="--format"
            )
        return output_format

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="feature-boundary",
            help="Feature boundary linter for feature-oriented Dart/Flutter projects.",
            add_completion=False,
        )

        def build_check_use_case(telemetry: Optional[TelemetryPort]) -> CheckBoundariesUseCase:
            return CheckBoundariesUseCase(
                registry=deps.registry,
                scanner=deps.scanner,
                filesystem=deps.filesystem,
                config_loader=deps.config_loader,
                telemetry=telemetry,
            )

        def reporter_for(output_format: str) -> AuditReporter:
            return deps.json_reporter if output_format == "json" else deps.terminal_reporter

        @app.callback()
        def main(
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
        ) -> None:
            """Check and fix module-boundary rules between features."""
            CLIAppFactory.configure_logging(verbose)

        @app.command()
        def check(
            path: Optional[Path] = typer.Argument(None, help="File or directory to check (default: lib/ or .)"),  # noqa: B008, RUF100
            output_format: str = typer.Option("text", "--format", "-f", help="Output format: text or json."),
        ) -> None:
            """Report boundary violations. Exits 1 when any are found."""
            output_format = CLIAppFactory.validate_format(output_format)
            telemetry = deps.telemetry if output_format == "text" else None
            if telemetry:
                telemetry.handshake()
            target_path = CLIAppFactory.resolve_target_path(path)
            report = build_check_use_case(telemetry).execute(target_path)
            reporter_for(output_format).report_audit(report)
            if report.has_violations:
                raise typer.Exit(code=1)

        @app.command()
        def fix(
            path: Optional[Path] = typer.Argument(None, help="File or directory to fix (default: lib/ or .)"),  # noqa: B008, RUF100
            rule: Optional[list[str]] = typer.Option(  # noqa: B008, RUF100
                None, "--rule", "-r", help="Only fix this rule (code or symbol). Repeatable."
            ),
            no_backup: bool = typer.Option(False, "--no-backup", help="Do not write .bak files."),
            dry_run: bool = typer.Option(False, "--dry-run", help="Compute fixes without writing."),
            output_format: str = typer.Option("text", "--format", "-f", help="Output format: text or json."),
        ) -> None:
            """Apply the first applicable fix for each violation."""
            output_format = CLIAppFactory.validate_format(output_format)
            telemetry = deps.telemetry if output_format == "text" else None
            if telemetry:
                telemetry.handshake()
            use_case = ApplyFixesUseCase(
                check_use_case=build_check_use_case(telemetry),
                registry=deps.registry,
                text_edit=deps.text_edit,
                filesystem=deps.filesystem,
                telemetry=telemetry,
                create_backups=not no_backup,
                dry_run=dry_run,
            )
            try:
                summary = use_case.execute(CLIAppFactory.resolve_target_path(path), rule)
            except ValueError as exc:
                typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
                raise typer.Exit(code=2) from exc
            reporter_for(output_format).report_fixes(summary)

        @app.command()
        def rules() -> None:
            """List registered rules, their fixes and message templates."""
            for code in deps.registry.rule_codes():
                entry = deps.registry.entry(code)
                fixes = [fix.fix_id for fix in deps.registry.fixes_for(code)]
                name = deps.guidance_service.get_display_name(code)
                typer.secho(f"{code}  {entry.get('symbol', code)}  ({name})", bold=True)
                typer.echo(f"    {entry.get('short_description', '')}")
                typer.echo(f"    message: {deps.registry.message_template(code)}")
                listed = ", ".join(fixes) if fixes else "(none)"
                if entry.get("comment_only"):
                    listed += " [comment only]"
                typer.echo(f"    fixes:   {listed}")

        @app.command()
        def classify(
            value: str = typer.Argument(..., help="Import URI or file path to classify."),
        ) -> None:
            """Show how a path or URI is classified."""
            identity = FeaturePathClassifier.classify(value)
            extra = deps.config_loader.extra_internal_directories
            if identity is None:
                typer.echo("feature:        (none)")
            else:
                typer.echo(f"feature:        {identity.feature_dir} (name={identity.feature_name}, style={identity.style.value})")
                typer.echo(f"barrel:         {identity.barrel_path}")
                typer.echo(f"barrel type:    {FeaturePathClassifier.barrel_type(value, identity).value}")
            typer.echo(f"layer:          {FeaturePathClassifier.layer_of(value).value}")
            typer.echo(f"internal layer: {FeaturePathClassifier.is_internal_layer(value, extra)}")
            typer.echo(f"test file:      {FeaturePathClassifier.is_test_file(value)}")
            typer.echo(f"core module:    {FeaturePathClassifier.is_core_module(value)}")
            typer.echo(f"relative:       {FeaturePathClassifier.is_relative_uri(value)}")

        return app
