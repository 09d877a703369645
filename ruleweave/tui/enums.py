from enum import Enum

from ruleweave.catalog import SupportLevel
from ruleweave.models import ActionStatus, ImportActionStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


ACTION_STATUS_STYLE = {
    ActionStatus.CREATE: UIStyle.GREEN.value,
    ActionStatus.UPDATE: UIStyle.CYAN.value,
    ActionStatus.REMOVE: UIStyle.MAGENTA.value,
    ActionStatus.NOOP: UIStyle.DIM.value,
}

IMPORT_STATUS_STYLE = {
    ImportActionStatus.CREATE: UIStyle.GREEN.value,
    ImportActionStatus.UPDATE: UIStyle.CYAN.value,
    ImportActionStatus.NOOP: UIStyle.DIM.value,
    ImportActionStatus.SKIP: UIStyle.YELLOW.value,
    ImportActionStatus.CONFLICT: UIStyle.RED.value,
}

SUPPORT_STYLE = {
    SupportLevel.NATIVE: UIStyle.GREEN.value,
    SupportLevel.GLOBAL_ONLY: UIStyle.CYAN.value,
    SupportLevel.SIMULATED: UIStyle.YELLOW.value,
    SupportLevel.NONE: UIStyle.DIM.value,
}
