from ruleweave.core.documents import DocumentLocation
from ruleweave.errors import DocumentParseError
from ruleweave.filesystem import read_file_content
from ruleweave.frontmatter import parse_frontmatter
from ruleweave.subagents.models import CanonicalSubagent, with_subagent_defaults


def parse_canonical_subagent(location: DocumentLocation) -> CanonicalSubagent:
    path = location.file_path
    frontmatter, body = parse_frontmatter(read_file_content(path), path)
    subagent = CanonicalSubagent(
        location=location,
        frontmatter=with_subagent_defaults(frontmatter, location.relative_file_path),
        body=body.strip(),
    )
    result = subagent.validate()
    if not result.success:
        raise DocumentParseError(path, result.error or "invalid frontmatter")
    return subagent
