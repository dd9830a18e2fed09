"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import fnmatch
import logging
import shutil
from pathlib import Path

import yaml

from feature_boundary_linter.domain.constants import DART_EXTENSION, SKIPPED_DIRECTORIES
from feature_boundary_linter.domain.protocols import FileSystemProtocol

logger = logging.getLogger(__name__)

PUBSPEC_FILE_NAME = "pubspec.yaml"


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def find_project_root(self, path: str) -> str | None:
        """Nearest directory at or above path holding a pubspec.yaml."""
        start = Path(path).resolve()
        if not start.is_dir():
            start = start.parent
        for directory in (start, *start.parents):
            if (directory / PUBSPEC_FILE_NAME).is_file():
                return str(directory)
        return None

    def glob_dart_files(self, path: str, exclude_patterns: list[str] | None = None) -> list[str]:
        """Get all Dart files in path (recursive if directory), skipping build output and excludes."""
        patterns = exclude_patterns or []
        path_obj = Path(path).resolve()
        if not path_obj.is_dir():
            if path_obj.suffix == DART_EXTENSION and not self._is_excluded(path_obj, patterns):
                return [str(path_obj)]
            return []
        files: list[str] = []
        for candidate in path_obj.rglob(f"*{DART_EXTENSION}"):
            relative_parts = candidate.relative_to(path_obj).parts
            if any(part in SKIPPED_DIRECTORIES for part in relative_parts[:-1]):
                continue
            if not candidate.is_file() or self._is_excluded(candidate, patterns):
                continue
            files.append(str(candidate))
        return sorted(files)

    @staticmethod
    def _is_excluded(path: Path, patterns: list[str]) -> bool:
        posix = path.as_posix()
        return any(
            fnmatch.fnmatch(path.name, pattern) or fnmatch.fnmatch(posix, pattern)
            for pattern in patterns
        )

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file, line endings untranslated so offsets match the bytes on disk."""
        with open(path, encoding=encoding, newline="") as f:
            return f.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)

    def create_backup(self, path: str) -> str:
        """Create a .bak backup of the file. Returns backup path string."""
        file_path = Path(path)
        backup_path = file_path.with_suffix(file_path.suffix + ".bak")
        shutil.copy2(file_path, backup_path)
        return str(backup_path)

    def read_package_name(self, project_root: str) -> str | None:
        pubspec = Path(project_root) / PUBSPEC_FILE_NAME
        try:
            with pubspec.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Could not read %s: %s", pubspec, exc)
            return None
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            return str(data["name"])
        return None

    def canonical_uri(
        self, path: str, project_root: str | None, package_name: str | None, lib_dir: str = "lib"
    ) -> str:
        """
        Map a file to the URI the rules see.

        Files under <root>/<lib_dir> become package:<name>/<rest>. Other files in the
        project (test/, bin/, tool/) become /<path from root>, so directory names above
        the project never reach the rules. Files outside any project keep their absolute
        posix path.
        """
        file_path = Path(path).resolve()
        if not project_root:
            return file_path.as_posix()
        root = Path(project_root).resolve()
        if package_name:
            try:
                relative = file_path.relative_to(root / lib_dir)
            except ValueError:
                pass
            else:
                return f"package:{package_name}/{relative.as_posix()}"
        try:
            return f"/{file_path.relative_to(root).as_posix()}"
        except ValueError:
            return file_path.as_posix()
