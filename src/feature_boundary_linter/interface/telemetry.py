"""Console telemetry: progress lines on stderr so stdout stays clean for reports."""

import typer

from feature_boundary_linter.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """TelemetryPort printing styled lines with typer.secho."""

    def __init__(self, project_name: str, color: str = "cyan", welcome_message: str = "") -> None:
        self.project_name = project_name
        self.color = color
        self.welcome_message = welcome_message

    def handshake(self) -> None:
        banner = f"[{self.project_name}]"
        if self.welcome_message:
            banner = f"{banner} {self.welcome_message}"
        typer.secho(banner, fg=self.color, bold=True, err=True)

    def step(self, message: str) -> None:
        typer.secho(f"[{self.project_name}] {message}", fg=self.color, err=True)

    def warning(self, message: str) -> None:
        typer.secho(f"[{self.project_name}] WARNING: {message}", fg=typer.colors.YELLOW, err=True)

    def error(self, message: str) -> None:
        typer.secho(f"[{self.project_name}] ERROR: {message}", fg=typer.colors.RED, err=True)
