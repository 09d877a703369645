from ruleweave.commands.models import CanonicalCommand, with_command_defaults
from ruleweave.core.documents import DocumentLocation
from ruleweave.errors import DocumentParseError
from ruleweave.filesystem import read_file_content
from ruleweave.frontmatter import parse_frontmatter


def parse_canonical_command(location: DocumentLocation) -> CanonicalCommand:
    path = location.file_path
    frontmatter, body = parse_frontmatter(read_file_content(path), path)
    command = CanonicalCommand(
        location=location,
        frontmatter=with_command_defaults(frontmatter),
        body=body.strip(),
    )
    result = command.validate()
    if not result.success:
        raise DocumentParseError(path, result.error or "invalid frontmatter")
    return command
