"""Parse canonical rule files."""

from __future__ import annotations

from ruleweave.core.documents import DocumentLocation
from ruleweave.errors import DocumentParseError
from ruleweave.filesystem import read_file_content
from ruleweave.frontmatter import parse_frontmatter
from ruleweave.rules.models import CanonicalRule, with_rule_defaults


def parse_canonical_rule(location: DocumentLocation) -> CanonicalRule:
    path = location.file_path
    frontmatter, body = parse_frontmatter(read_file_content(path), path)
    rule = CanonicalRule(
        location=location,
        frontmatter=with_rule_defaults(frontmatter),
        body=body.strip(),
    )
    result = rule.validate()
    if not result.success:
        raise DocumentParseError(path, result.error or "invalid frontmatter")
    return rule
