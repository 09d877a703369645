from pathlib import Path
from typing import Optional, Protocol

from ruleweave.filesystem import remove_file, write_file_content
from ruleweave.models import Action, ActionKind, ActionStatus, SyncPlan


class ActionHandler(Protocol):
    def handle(self, action: Action) -> tuple[bool, Optional[str]]: ...


class WriteTextHandler:
    def handle(self, action: Action) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if not isinstance(action.payload, str):
            return False, f"Missing text payload for write action: {action.path}"
        write_file_content(action.path, action.payload)
        return True, None


class RemoveFileHandler:
    def handle(self, action: Action) -> tuple[bool, Optional[str]]:
        if action.status != ActionStatus.REMOVE:
            return False, None
        return remove_file(Path(action.path)), None


class SyncExecutor:
    """Apply a plan's actions; preview mode applies nothing."""

    def __init__(self, preview: bool = False) -> None:
        self.preview = preview
        self.handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.WRITE_TEXT: WriteTextHandler(),
            ActionKind.REMOVE_FILE: RemoveFileHandler(),
        }

    def execute(self, plan: SyncPlan) -> tuple[int, int, list[str]]:
        applied = 0
        failed = 0
        failures: list[str] = []
        if self.preview:
            return applied, failed, failures

        for action in plan.actions:
            handler = self.handlers.get(action.kind)
            if handler is None:
                failed += 1
                failures.append(f"Unknown action kind: {action.kind.value}")
                continue
            try:
                changed, failure = handler.handle(action)
            except OSError as exc:
                failed += 1
                failures.append(f"{action.kind.value} failed for {action.path}: {exc}")
                continue
            if failure is not None:
                failed += 1
                failures.append(failure)
                continue
            if changed:
                applied += 1
        return applied, failed, failures
