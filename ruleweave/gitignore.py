"""Keep generated tool files out of version control."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from ruleweave.core.documents import DocumentLocation, SettablePaths
from ruleweave.core.processor import AdapterEntry, FeatureProcessor
from ruleweave.errors import DocumentParseError
from ruleweave.filesystem import read_file_content_safe, write_file_content
from ruleweave.rules.models import RuleSettablePaths
from ruleweave.sync.generate import PROCESSORS
from ruleweave.targets import Feature, ToolTarget

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"
BLOCK_START = "# >>> ruleweave generated files"
BLOCK_END = "# <<< ruleweave generated files"


def _path_entries(paths: SettablePaths | RuleSettablePaths) -> list[SettablePaths]:
    if isinstance(paths, RuleSettablePaths):
        return [item for item in (paths.root, paths.non_root) if item is not None]
    return [paths]


def _pattern(paths: SettablePaths) -> str:
    directory = paths.relative_dir_path.strip("/")
    if paths.relative_file_path:
        if directory in ("", "."):
            return f"**/{paths.relative_file_path}"
        return f"**/{directory}/{paths.relative_file_path}"
    return f"**/{directory}/"


class GitignoreService:
    """Computes and writes the block of generated paths in ``.gitignore``.

    Files ruleweave shares with the user, such as ``.claude/settings.local.json``,
    are left out: generate never deletes them, so they stay the user's to track.
    """

    def __init__(
        self,
        base_dir: Path,
        processors: Mapping[Feature, type[FeatureProcessor]] | None = None,
    ) -> None:
        self.base_dir = Path(base_dir)
        self.processors = PROCESSORS if processors is None else processors

    @property
    def path(self) -> Path:
        return self.base_dir / GITIGNORE_FILENAME

    def _owned_patterns(self, entry: AdapterEntry) -> list[str]:
        patterns: list[str] = []
        for paths in _path_entries(entry.adapter.get_settable_paths()):
            if paths.relative_file_path:
                location = DocumentLocation(
                    self.base_dir, paths.relative_dir_path, paths.relative_file_path
                )
                if not entry.adapter.for_deletion(location).deletable:
                    continue
            patterns.append(_pattern(paths))
        return patterns

    def compute_entries(self, targets: Iterable[ToolTarget]) -> list[str]:
        selected = set(targets)
        entries: set[str] = set()
        for processor_cls in self.processors.values():
            for target, entry in processor_cls.REGISTRY.items():
                if target not in selected or not entry.meta.supports_project:
                    continue
                entries.update(self._owned_patterns(entry))
        return sorted(entries)

    def render_block(self, entries: list[str]) -> list[str]:
        return [BLOCK_START, *entries, BLOCK_END]

    def update(self, entries: list[str]) -> bool:
        """Write ``entries`` into the marked block; return False when nothing changed."""
        existing = read_file_content_safe(self.path) or ""
        lines = existing.splitlines()
        block = self.render_block(entries)

        if BLOCK_START in lines:
            start = lines.index(BLOCK_START)
            try:
                end = lines.index(BLOCK_END, start)
            except ValueError:
                raise DocumentParseError(
                    self.path, f"'{BLOCK_START}' has no closing '{BLOCK_END}'"
                ) from None
            updated = lines[:start] + block + lines[end + 1 :]
        else:
            separator = [""] if lines and lines[-1].strip() else []
            updated = lines + separator + block

        content = "\n".join(updated) + "\n"
        if content == existing:
            logger.debug("%s already up to date", self.path)
            return False
        write_file_content(self.path, content)
        logger.info("Updated %s with %d entries", self.path, len(entries))
        return True
