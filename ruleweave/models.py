from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class ActionKind(str, Enum):
    WRITE_TEXT = "write_text"
    REMOVE_FILE = "remove_file"


class ActionStatus(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"


@dataclass
class Action:
    kind: ActionKind
    path: Path
    status: ActionStatus
    detail: str
    payload: Optional[str] = None
    target: Optional[str] = None
    feature: Optional[str] = None


@dataclass
class SyncPlan:
    actions: list[Action]
    errors: list[Exception]
    skipped: list[str]

    def is_valid(self) -> bool:
        return not self.errors

    def changes(self) -> list[Action]:
        return [action for action in self.actions if action.status != ActionStatus.NOOP]

    def has_changes(self) -> bool:
        return bool(self.changes())

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ActionStatus}
        for action in self.actions:
            counts[action.status.value] += 1
        counts["actions"] = len(self.actions)
        counts["errors"] = len(self.errors)
        counts["skipped"] = len(self.skipped)
        return counts


class ConflictPolicy(str, Enum):
    SKIP = "skip"
    OVERWRITE = "overwrite"
    FAIL = "fail"


class ImportActionStatus(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    CONFLICT = "conflict"
    SKIP = "skip"


@dataclass
class ImportAction:
    feature: str
    status: ImportActionStatus
    detail: str
    path: Path
    payload: Optional[str] = None


@dataclass
class ImportPlan:
    source_tool: str
    features: list[str]
    actions: list[ImportAction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def writable(self) -> list[ImportAction]:
        return [
            action
            for action in self.actions
            if action.status in (ImportActionStatus.CREATE, ImportActionStatus.UPDATE)
        ]


@dataclass(frozen=True)
class ImportApplyResult:
    applied: int
    failed: int
    failures: list[str]
