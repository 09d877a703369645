import json
from pathlib import Path
from typing import Any, Iterable

from ruleweave.errors import DocumentParseError, MissingFileError


def _decode(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentParseError(path, "not valid UTF-8") from exc


def read_file_content(path: Path) -> str:
    if not path.is_file():
        raise MissingFileError(path)
    return _decode(path)


def read_file_content_safe(path: Path) -> str | None:
    if not path.is_file():
        return None
    return _decode(path)


def file_exists(path: Path) -> bool:
    return path.is_file()


def directory_exists(path: Path) -> bool:
    return path.is_dir()


def find_files_by_globs(directory: Path, patterns: Iterable[str]) -> list[Path]:
    if not directory.is_dir():
        return []
    found: set[Path] = set()
    for pattern in patterns:
        found.update(path for path in directory.glob(pattern) if path.is_file())
    return sorted(found)


def ensure_trailing_newline(content: str) -> str:
    if not content or content.endswith("\n"):
        return content
    return f"{content}\n"


def write_file_content(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(ensure_trailing_newline(content), encoding="utf-8")


def remove_file(path: Path) -> bool:
    if not path.is_file():
        return False
    path.unlink()
    return True


def dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, sort_keys=False, ensure_ascii=False) + "\n"


def is_under(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False


def parse_json(text: str, path: Path | str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(path, f"invalid JSON: {exc.msg}") from exc


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text


def compact_home_paths_in_text(text: str) -> str:
    home = str(Path.home())
    if text == home:
        return "~"
    return text.replace(f"{home}/", "~/")
