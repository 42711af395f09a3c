"""Validation rules for parsed documents.

Violations are non-fatal: :func:`validate_document` returns them as a
list and never raises or mutates its input. Unbalanced fences never get
this far, because the parser refuses to build a Document from them.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import asdict, dataclass

from lessonctl.domain.blocks import Document, FencedBlock
from lessonctl.domain.links import document_links, is_internal, resolve_target

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

CODE_MISSING_KEY = "missing_key"
CODE_EMPTY_KEY = "empty_key"
CODE_BROKEN_LINK = "broken_link"
CODE_UNTAGGED_FENCE = "untagged_fence"
CODE_EMPTY_FENCE = "empty_fence"
CODE_MALFORMED = "malformed_document"
CODE_NOT_FOUND = "not_found"

DEFAULT_REQUIRED_KEYS: tuple[str, ...] = ("layout", "title")


@dataclass(frozen=True)
class Violation:
    """A single validation finding for one document."""

    doc_id: str
    code: str
    severity: str
    message: str
    line: int | None = None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def severity_at_least(severity: str, minimum: str) -> bool:
    """Whether *severity* is at or above *minimum*."""
    return _SEVERITY_RANK.get(severity, 0) >= _SEVERITY_RANK.get(minimum, 0)


def check_required_keys(document: Document, required_keys: Sequence[str]) -> list[Violation]:
    violations: list[Violation] = []
    for key in required_keys:
        if key not in document.front_matter:
            violations.append(
                Violation(
                    document.doc_id,
                    CODE_MISSING_KEY,
                    SEVERITY_ERROR,
                    f"Front-matter is missing required key {key!r}",
                    line=1,
                )
            )
        elif not document.front_matter[key].strip():
            violations.append(
                Violation(
                    document.doc_id,
                    CODE_EMPTY_KEY,
                    SEVERITY_ERROR,
                    f"Front-matter key {key!r} is empty",
                    line=1,
                )
            )
    return violations


def check_links(document: Document, known_ids: Collection[str]) -> list[Violation]:
    violations: list[Violation] = []
    for link in document_links(document):
        if not is_internal(link.target):
            continue
        resolved = resolve_target(link.target, document.doc_id)
        if resolved in known_ids:
            continue
        violations.append(
            Violation(
                document.doc_id,
                CODE_BROKEN_LINK,
                SEVERITY_ERROR,
                f"Link target {link.target!r} does not resolve to a known document"
                f" (looked for {resolved!r})",
                line=link.line,
            )
        )
    return violations


def check_fences(document: Document, *, warn_untagged: bool = True) -> list[Violation]:
    violations: list[Violation] = []
    for block in document.body:
        if not isinstance(block, FencedBlock):
            continue
        if warn_untagged and not block.tagged:
            violations.append(
                Violation(
                    document.doc_id,
                    CODE_UNTAGGED_FENCE,
                    SEVERITY_WARNING,
                    "Fenced block has no language tag",
                    line=block.line,
                )
            )
        if not block.content.strip():
            violations.append(
                Violation(
                    document.doc_id,
                    CODE_EMPTY_FENCE,
                    SEVERITY_WARNING,
                    "Fenced block is empty",
                    line=block.line,
                )
            )
    return violations


def validate_document(
    document: Document,
    known_ids: Collection[str],
    *,
    required_keys: Sequence[str] = DEFAULT_REQUIRED_KEYS,
    check_link_targets: bool = True,
    warn_untagged: bool = True,
) -> list[Violation]:
    """Run every rule against *document* and return the violations found.

    Args:
        document: The parsed document.
        known_ids: Identifiers internal links may resolve to.
        required_keys: Front-matter keys that must be present and non-empty.
        check_link_targets: Resolve internal links against *known_ids*.
        warn_untagged: Report fences opened without a language tag.
    """
    violations = check_required_keys(document, required_keys)
    if check_link_targets:
        violations.extend(check_links(document, known_ids))
    violations.extend(check_fences(document, warn_untagged=warn_untagged))
    return violations
