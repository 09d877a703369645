from pathlib import Path
from typing import Iterable


class RuleweaveError(Exception):
    """Base user-facing application error."""


class DocumentFileError(RuleweaveError):
    def __init__(self, path: Path | str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingFileError(DocumentFileError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(path=path, message="Missing file")


class DocumentParseError(DocumentFileError):
    def __init__(self, path: Path | str, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid document format ({detail})")


class PathTraversalError(DocumentFileError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(path=path, message="Path traversal detected")


class MultipleRootRulesError(RuleweaveError):
    def __init__(self, paths: Iterable[str]) -> None:
        self.paths = list(paths)
        super().__init__(
            "Multiple root rules found (only one rule may set root: true): "
            + ", ".join(self.paths)
        )


class MissingToolPathError(RuleweaveError):
    def __init__(self, target: str, what: str) -> None:
        self.target = target
        super().__init__(f"{target} has no location for {what}")


class ConfigError(RuleweaveError):
    """Invalid configuration; raised eagerly when a Config is built."""


class ConflictingTargetsError(ConfigError):
    def __init__(self, first: str, second: str) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Conflicting targets: '{first}' and '{second}' cannot be used together. "
            "Please choose one."
        )


class IncompatibleOptionsError(ConfigError):
    def __init__(self, first: str, second: str) -> None:
        self.first = first
        self.second = second
        super().__init__(f"Options '{first}' and '{second}' cannot be combined.")


class InvalidConfigError(ConfigError):
    pass


class UnsupportedOperationError(RuleweaveError):
    pass


class UnsupportedTargetError(RuleweaveError):
    def __init__(self, target: str, feature: str | None = None) -> None:
        self.target = target
        self.feature = feature
        scope = f" for {feature}" if feature else ""
        super().__init__(f"Unsupported tool target{scope}: {target}")
