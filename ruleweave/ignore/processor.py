from __future__ import annotations

import logging

from ruleweave.constants import (
    IGNORE_FILENAME,
    IGNORE_RELATIVE_DIR,
    LEGACY_IGNORE_FILENAME,
    LEGACY_IGNORE_RELATIVE_DIR,
)
from ruleweave.core.documents import CanonicalDocument, DocumentLocation
from ruleweave.core.processor import AdapterEntry, FeatureProcessor
from ruleweave.errors import RuleweaveError
from ruleweave.filesystem import file_exists, read_file_content
from ruleweave.ignore.adapters import (
    AmazonqcliIgnoreAdapter,
    AugmentcodeIgnoreAdapter,
    ClaudecodeIgnoreAdapter,
    ClineIgnoreAdapter,
    CursorIgnoreAdapter,
    GeminicliIgnoreAdapter,
    JunieIgnoreAdapter,
    RooIgnoreAdapter,
    WindsurfIgnoreAdapter,
    ZedIgnoreAdapter,
)
from ruleweave.ignore.models import CanonicalIgnore
from ruleweave.targets import Feature, ToolTarget

logger = logging.getLogger(__name__)

IGNORE_ADAPTERS: dict[ToolTarget, AdapterEntry] = {
    ToolTarget.AMAZONQCLI: AdapterEntry(AmazonqcliIgnoreAdapter()),
    ToolTarget.AUGMENTCODE: AdapterEntry(AugmentcodeIgnoreAdapter()),
    ToolTarget.CLAUDECODE: AdapterEntry(ClaudecodeIgnoreAdapter()),
    ToolTarget.CLINE: AdapterEntry(ClineIgnoreAdapter()),
    ToolTarget.CURSOR: AdapterEntry(CursorIgnoreAdapter()),
    ToolTarget.GEMINICLI: AdapterEntry(GeminicliIgnoreAdapter()),
    ToolTarget.JUNIE: AdapterEntry(JunieIgnoreAdapter()),
    ToolTarget.ROO: AdapterEntry(RooIgnoreAdapter()),
    ToolTarget.WINDSURF: AdapterEntry(WindsurfIgnoreAdapter()),
    ToolTarget.ZED: AdapterEntry(ZedIgnoreAdapter()),
}


def load_canonical_ignore(location: DocumentLocation) -> CanonicalIgnore:
    return CanonicalIgnore(
        location=location, body=read_file_content(location.file_path).strip()
    )


class IgnoreProcessor(FeatureProcessor):
    FEATURE = Feature.IGNORE
    REGISTRY = IGNORE_ADAPTERS

    def canonical_location(self) -> DocumentLocation | None:
        current = DocumentLocation(self.source_dir, IGNORE_RELATIVE_DIR, IGNORE_FILENAME)
        if file_exists(current.file_path):
            return current
        legacy = DocumentLocation(
            self.source_dir, LEGACY_IGNORE_RELATIVE_DIR, LEGACY_IGNORE_FILENAME
        )
        if file_exists(legacy.file_path):
            logger.warning(
                "%s is deprecated; move it to %s",
                legacy.relative_path,
                current.relative_path,
            )
            return legacy
        return None

    def load_canonical_documents(self) -> list[CanonicalDocument]:
        location = self.canonical_location()
        if location is None:
            logger.debug("No ignore file under %s", self.source_dir)
            return []
        try:
            return [load_canonical_ignore(location)]
        except RuleweaveError as exc:
            logger.warning("Skipping %s: %s", location.relative_path, exc)
            return []
