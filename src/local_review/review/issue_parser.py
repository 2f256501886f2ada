# src/local_review/review/issue_parser.py
import re

from local_review.models.review import ParsedReview, ReviewIssue, Severity


ISSUE_MARKER = "ISSUE:"
LGTM_MARKER = "LGTM:"

SEVERITY_RE = re.compile(r"\[severity:\s*([^\]]*)\]", re.IGNORECASE)
LOCATION_RE = re.compile(r"\[([^\]]+):(\d+)\]")
KEYWORD_RE = re.compile(r"^(bug|error|warning|note|fix|consider|avoid):", re.IGNORECASE)


def _parse_severity(content: str) -> Severity:
    match = SEVERITY_RE.search(content)
    if not match:
        return Severity.MEDIUM
    try:
        return Severity(match.group(1).strip().lower())
    except ValueError:
        return Severity.MEDIUM


def _parse_issue_line(line: str) -> ReviewIssue:
    content = line[len(ISSUE_MARKER):].strip()
    severity = _parse_severity(content)

    # Drop the severity tag first so it can never be read as a location
    remainder = SEVERITY_RE.sub("", content, count=1)

    file = None
    line_number = None
    location = LOCATION_RE.search(remainder)
    if location:
        file = location.group(1)
        line_number = int(location.group(2))
        remainder = remainder[:location.start()] + remainder[location.end():]

    return ReviewIssue(
        severity=severity,
        file=file,
        line=line_number,
        description=remainder.strip(),
        raw=line,
    )


def parse_review(response: str) -> ParsedReview:
    """Parse free-text model output into issues and LGTM notes.

    Recognised lines follow the prompt convention::

        ISSUE: [severity: high] [src/app.py:42] description
        LGTM: what looks good

    Lines starting with a known keyword (``bug:``, ``warning:`` ...) are kept
    as medium issues without a location. Anything else is dropped.
    """
    issues: list[ReviewIssue] = []
    lgtm: list[str] = []

    for line in (raw_line.strip() for raw_line in response.split("\n")):
        if not line:
            continue

        if line.startswith(LGTM_MARKER):
            lgtm.append(line[len(LGTM_MARKER):].strip())
        elif line.startswith(ISSUE_MARKER):
            issues.append(_parse_issue_line(line))
        elif KEYWORD_RE.match(line):
            issues.append(ReviewIssue(severity=Severity.MEDIUM, description=line, raw=line))

    return ParsedReview(issues=tuple(issues), lgtm=tuple(lgtm), raw=response)


class IssueParser:
    def parse(self, response: str) -> ParsedReview:
        return parse_review(response)
