from ruleweave.tui.renderers import SyncConsoleUI
from ruleweave.tui.sections import UISection

__all__ = ["SyncConsoleUI", "UISection"]
