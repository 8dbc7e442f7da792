"""
tokencraft.toml project configuration.

Example:

    [project]
    name = "ambient"

    [inputs]
    files = ["exportedVariables.json", "design-tokens.tokens.json"]

    [output]
    dir = "build"
    stylesheet = "ambient.css"
    constants = "ambient_tokens.py"
    root_selector = ":root"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from tokencraft.core.errors import ManifestError
from tokencraft.core.token_loader import DEFAULT_DOCUMENT_NAME

MANIFEST_FILE = "tokencraft.toml"
OUT_DIR_ENV = "TOKENCRAFT_OUT_DIR"


@dataclass
class OutputConfig:
    """Where generated artifacts go."""

    dir: Path = Path("build")
    stylesheet: str = "tokens.css"
    constants: str = "tokens.py"
    root_selector: str | None = None  # None scopes to ".<document name>"

    @property
    def stylesheet_path(self) -> Path:
        return self.dir / self.stylesheet

    @property
    def constants_path(self) -> Path:
        return self.dir / self.constants


@dataclass
class ProjectManifest:
    """Parsed tokencraft.toml."""

    project_root: Path
    name: str = DEFAULT_DOCUMENT_NAME
    input_files: list[Path] = field(default_factory=list)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_manifest(path: Path) -> ProjectManifest:
    """Read a tokencraft.toml file.

    Relative paths are resolved against the manifest's directory. The
    TOKENCRAFT_OUT_DIR environment variable overrides output.dir.

    Raises:
        ManifestError: If the file is missing, unparseable, or lists no inputs.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    root = path.resolve().parent
    project = data.get("project", {})
    inputs = data.get("inputs", {})
    output_data = data.get("output", {})

    files = inputs.get("files", [])
    if not isinstance(files, list) or not files or not all(isinstance(f, str) for f in files):
        raise ManifestError(f"{path}: [inputs] files must be a non-empty list of paths")

    out_dir = Path(os.environ.get(OUT_DIR_ENV) or output_data.get("dir", "build"))
    output = OutputConfig(
        dir=out_dir if out_dir.is_absolute() else root / out_dir,
        stylesheet=output_data.get("stylesheet", "tokens.css"),
        constants=output_data.get("constants", "tokens.py"),
        root_selector=output_data.get("root_selector") or None,
    )

    return ProjectManifest(
        project_root=root,
        name=project.get("name", DEFAULT_DOCUMENT_NAME),
        input_files=[root / f for f in files],
        output=output,
    )
