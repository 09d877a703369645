from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar, NoReturn, TypeVar

from ruleweave.core.documents import (
    CanonicalDocument,
    DocumentLocation,
    ToolDocument,
)
from ruleweave.errors import PathTraversalError, UnsupportedOperationError
from ruleweave.schema import ValidationResult
from ruleweave.targets import ToolTarget, tool_dir

CanonicalT = TypeVar("CanonicalT", bound=CanonicalDocument)


class IToolAdapter(ABC):
    """Conversion contract between a canonical document and one tool's format.

    Adapters hold no state; one instance per tool sits in each domain's
    registry.
    """

    TARGET: ClassVar[ToolTarget]
    SIMULATED: ClassVar[bool] = False

    @property
    def target(self) -> ToolTarget:
        return self.TARGET

    @property
    def tool_dir(self) -> str | None:
        return tool_dir(self.TARGET)

    @abstractmethod
    def get_settable_paths(
        self, global_mode: bool = False, exclude_tool_dir: bool = False
    ) -> Any:
        raise NotImplementedError

    @abstractmethod
    def from_canonical(
        self, canonical: CanonicalDocument, base_dir: Path, global_mode: bool = False
    ) -> ToolDocument | None:
        raise NotImplementedError

    @abstractmethod
    def to_canonical(self, document: ToolDocument) -> CanonicalDocument:
        raise NotImplementedError

    @abstractmethod
    def for_deletion(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolDocument:
        raise NotImplementedError

    @abstractmethod
    def from_file(
        self, location: DocumentLocation, global_mode: bool = False
    ) -> ToolDocument:
        raise NotImplementedError

    def is_targeted_by(self, canonical: CanonicalDocument) -> bool:
        return canonical.is_targeting(self.TARGET)

    def validate(self, document: ToolDocument) -> ValidationResult:
        try:
            document.location.file_path
        except PathTraversalError as exc:
            return ValidationResult.failed(str(exc))
        return self.validate_content(document)

    def validate_content(self, document: ToolDocument) -> ValidationResult:
        return ValidationResult.ok()

    def merge_with_existing(self, document: ToolDocument, existing: str) -> str:
        """Content to write when ``existing`` already sits at the document's path."""
        return document.file_content

    def expect_document(
        self, canonical: CanonicalDocument, kind: type[CanonicalT]
    ) -> CanonicalT:
        if not isinstance(canonical, kind):
            raise UnsupportedOperationError(
                f"{self.TARGET.value} adapter expected {kind.__name__}, "
                f"got {type(canonical).__name__}"
            )
        return canonical

    def reject_reverse_conversion(self) -> NoReturn:
        raise UnsupportedOperationError(
            f"Simulated {self.TARGET.value} files cannot be converted back to "
            "canonical form"
        )
