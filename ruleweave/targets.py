from dataclasses import dataclass
from enum import Enum
from typing import Final


WILDCARD: Final[str] = "*"


class ToolTarget(str, Enum):
    AGENTSMD = "agentsmd"
    AMAZONQCLI = "amazonqcli"
    ANTIGRAVITY = "antigravity"
    AUGMENTCODE = "augmentcode"
    AUGMENTCODE_LEGACY = "augmentcode-legacy"
    CLAUDECODE = "claudecode"
    CLAUDECODE_LEGACY = "claudecode-legacy"
    CLINE = "cline"
    CODEXCLI = "codexcli"
    COPILOT = "copilot"
    CURSOR = "cursor"
    GEMINICLI = "geminicli"
    JUNIE = "junie"
    KIRO = "kiro"
    OPENCODE = "opencode"
    QWENCODE = "qwencode"
    ROO = "roo"
    WARP = "warp"
    WINDSURF = "windsurf"
    ZED = "zed"


class Feature(str, Enum):
    RULES = "rules"
    IGNORE = "ignore"
    MCP = "mcp"
    COMMANDS = "commands"
    SUBAGENTS = "subagents"
    SKILLS = "skills"
    HOOKS = "hooks"


LEGACY_TARGETS: Final[frozenset[ToolTarget]] = frozenset(
    {ToolTarget.AUGMENTCODE_LEGACY, ToolTarget.CLAUDECODE_LEGACY}
)

CONFLICTING_TARGET_PAIRS: Final[tuple[tuple[ToolTarget, ToolTarget], ...]] = (
    (ToolTarget.AUGMENTCODE, ToolTarget.AUGMENTCODE_LEGACY),
    (ToolTarget.CLAUDECODE, ToolTarget.CLAUDECODE_LEGACY),
)


@dataclass(frozen=True)
class ToolMetadata:
    target: ToolTarget
    label: str
    tool_dir: str | None = None

    @property
    def legacy(self) -> bool:
        return self.target in LEGACY_TARGETS


TOOL_CATALOG: dict[ToolTarget, ToolMetadata] = {
    ToolTarget.AGENTSMD: ToolMetadata(ToolTarget.AGENTSMD, "AGENTS.md", ".agents"),
    ToolTarget.AMAZONQCLI: ToolMetadata(
        ToolTarget.AMAZONQCLI, "Amazon Q Developer CLI", ".amazonq"
    ),
    ToolTarget.ANTIGRAVITY: ToolMetadata(
        ToolTarget.ANTIGRAVITY, "Google Antigravity", ".agent"
    ),
    ToolTarget.AUGMENTCODE: ToolMetadata(
        ToolTarget.AUGMENTCODE, "Augment Code", ".augment"
    ),
    ToolTarget.AUGMENTCODE_LEGACY: ToolMetadata(
        ToolTarget.AUGMENTCODE_LEGACY, "Augment Code (legacy)", ".augment"
    ),
    ToolTarget.CLAUDECODE: ToolMetadata(ToolTarget.CLAUDECODE, "Claude Code", ".claude"),
    ToolTarget.CLAUDECODE_LEGACY: ToolMetadata(
        ToolTarget.CLAUDECODE_LEGACY, "Claude Code (legacy)", ".claude"
    ),
    ToolTarget.CLINE: ToolMetadata(ToolTarget.CLINE, "Cline", ".clinerules"),
    ToolTarget.CODEXCLI: ToolMetadata(ToolTarget.CODEXCLI, "Codex CLI", ".codex"),
    ToolTarget.COPILOT: ToolMetadata(ToolTarget.COPILOT, "GitHub Copilot", ".github"),
    ToolTarget.CURSOR: ToolMetadata(ToolTarget.CURSOR, "Cursor", ".cursor"),
    ToolTarget.GEMINICLI: ToolMetadata(ToolTarget.GEMINICLI, "Gemini CLI", ".gemini"),
    ToolTarget.JUNIE: ToolMetadata(ToolTarget.JUNIE, "JetBrains Junie", ".junie"),
    ToolTarget.KIRO: ToolMetadata(ToolTarget.KIRO, "Kiro", ".kiro"),
    ToolTarget.OPENCODE: ToolMetadata(ToolTarget.OPENCODE, "OpenCode", ".opencode"),
    ToolTarget.QWENCODE: ToolMetadata(ToolTarget.QWENCODE, "Qwen Code", ".qwen"),
    ToolTarget.ROO: ToolMetadata(ToolTarget.ROO, "Roo Code", ".roo"),
    ToolTarget.WARP: ToolMetadata(ToolTarget.WARP, "Warp", ".warp"),
    ToolTarget.WINDSURF: ToolMetadata(ToolTarget.WINDSURF, "Windsurf", ".windsurf"),
    ToolTarget.ZED: ToolMetadata(ToolTarget.ZED, "Zed", ".zed"),
}


def tool_metadata(target: ToolTarget | str) -> ToolMetadata:
    tool = target if isinstance(target, ToolTarget) else ToolTarget(target)
    return TOOL_CATALOG[tool]


def tool_dir(target: ToolTarget | str) -> str | None:
    return tool_metadata(target).tool_dir


def non_legacy_targets() -> list[ToolTarget]:
    return [target for target in ToolTarget if target not in LEGACY_TARGETS]


def all_features() -> list[Feature]:
    return list(Feature)
