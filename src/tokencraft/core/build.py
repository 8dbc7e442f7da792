"""
Build pipeline: load inputs, render both artifacts, write them.

Both artifacts are rendered in memory before anything is written, and
written together, so a failing token or a failed write leaves no partial
output behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from tokencraft.core.constants_export import generate_constants_module
from tokencraft.core.css_export import generate_stylesheets
from tokencraft.core.errors import BuildError
from tokencraft.core.ir.tokens import Document
from tokencraft.core.manifest import ProjectManifest
from tokencraft.core.token_loader import load_documents

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of a build."""

    documents: list[Document] = field(default_factory=list)
    stylesheet_path: Path | None = None
    constants_path: Path | None = None

    @property
    def token_count(self) -> int:
        return sum(1 for doc in self.documents for _ in doc.tokens())


def render_artifacts(
    documents: list[Document], root_selector: str | None = None
) -> tuple[str, str]:
    """Render (stylesheet, constants module) text for the documents."""
    stylesheet = generate_stylesheets(documents, root_selector)
    constants = generate_constants_module(documents)
    return stylesheet, constants


def write_artifacts(artifacts: list[tuple[Path, str]]) -> None:
    """Write several files so that either all of them land or none do.

    Each file is staged next to its target and renamed into place once
    every file has been staged. On failure, staged files and targets
    already renamed by this call are removed.

    Raises:
        BuildError: If any file cannot be written.
    """
    staged: list[tuple[Path, Path]] = []
    placed: list[Path] = []
    try:
        for path, text in artifacts:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp = path.with_name(f".{path.name}.tmp")
            staged.append((temp, path))
            temp.write_text(text, encoding="utf-8")
        for temp, path in staged:
            temp.replace(path)
            placed.append(path)
    except OSError as e:
        for temp, _ in staged:
            temp.unlink(missing_ok=True)
        for path in placed:
            path.unlink(missing_ok=True)
        raise BuildError(f"Cannot write build output: {e}") from e


def build_project(manifest: ProjectManifest, out_dir: Path | None = None) -> BuildResult:
    """Run the full pipeline for a manifest.

    Args:
        manifest: Parsed tokencraft.toml.
        out_dir: Overrides the manifest's output directory.

    Returns:
        BuildResult describing what was written.

    Raises:
        TokenError: On any load, parse, resolution, or write failure.
    """
    documents = load_documents(manifest.input_files, manifest.name)
    stylesheet, constants = render_artifacts(documents, manifest.output.root_selector)

    output = manifest.output if out_dir is None else replace(manifest.output, dir=out_dir)
    write_artifacts(
        [
            (output.stylesheet_path, stylesheet + "\n"),
            (output.constants_path, constants),
        ]
    )
    logger.info("Built %d document(s) into %s", len(documents), output.dir)

    return BuildResult(
        documents=documents,
        stylesheet_path=output.stylesheet_path,
        constants_path=output.constants_path,
    )
