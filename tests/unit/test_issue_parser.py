# tests/unit/test_issue_parser.py
import pytest
from local_review.models.review import Severity
from local_review.review.issue_parser import IssueParser, parse_review


SAMPLE_RESPONSE = """Here is my review of the changes.

ISSUE: [severity: high] [src/a.ts:42] null deref risk
ISSUE: [severity: CRITICAL] [db/query.py:7] SQL built with string formatting
  ISSUE: [severity: low] missing docstring
LGTM: error handling in the client looks solid
Warning: the retry loop has no upper bound
Overall this is a reasonable change.
"""


def test_parse_review_structured_issue():
    review = parse_review("ISSUE: [severity: high] [src/a.ts:42] null deref risk")

    assert len(review.issues) == 1
    issue = review.issues[0]
    assert issue.severity == Severity.HIGH
    assert issue.file == "src/a.ts"
    assert issue.line == 42
    assert issue.description == "null deref risk"
    assert issue.raw == "ISSUE: [severity: high] [src/a.ts:42] null deref risk"


def test_parse_review_unstructured_text():
    review = parse_review("nothing structured here")

    assert review.issues == ()
    assert review.lgtm == ()
    assert review.raw == "nothing structured here"


def test_parse_review_mixed_response():
    review = parse_review(SAMPLE_RESPONSE)

    assert [i.severity for i in review.issues] == [
        Severity.HIGH,
        Severity.CRITICAL,
        Severity.LOW,
        Severity.MEDIUM,
    ]
    assert review.lgtm == ("error handling in the client looks solid",)
    assert review.raw == SAMPLE_RESPONSE


def test_parse_review_issue_without_location():
    review = parse_review("  ISSUE: [severity: low] missing docstring  ")

    issue = review.issues[0]
    assert issue.file is None
    assert issue.line is None
    assert issue.description == "missing docstring"
    assert issue.raw == "ISSUE: [severity: low] missing docstring"


@pytest.mark.parametrize("line", [
    "ISSUE: [src/app.py:3] no severity given",
    "ISSUE: [severity: urgent] [src/app.py:3] no severity given",
    "ISSUE: [severity: ] [src/app.py:3] no severity given",
])
def test_parse_review_defaults_to_medium(line):
    issue = parse_review(line).issues[0]

    assert issue.severity == Severity.MEDIUM
    assert issue.file == "src/app.py"
    assert issue.line == 3
    assert issue.description == "no severity given"


def test_parse_review_first_location_wins():
    issue = parse_review("ISSUE: [severity: info] [a.py:1] compare with [b.py:2]").issues[0]

    assert issue.file == "a.py"
    assert issue.line == 1
    assert issue.description == "compare with [b.py:2]"


def test_parse_review_location_before_severity():
    issue = parse_review("ISSUE: [lib/x.go:10] [Severity: High] goroutine leak").issues[0]

    assert issue.severity == Severity.HIGH
    assert issue.file == "lib/x.go"
    assert issue.line == 10
    assert issue.description == "goroutine leak"


@pytest.mark.parametrize("line", [
    "bug: off by one in pagination",
    "Error: unhandled exception path",
    "WARNING: deprecated API",
    "note: consider caching",
    "fix: close the file handle",
    "Consider: using a context manager",
    "avoid: global state",
])
def test_parse_review_keyword_fallback(line):
    issue = parse_review(line).issues[0]

    assert issue.severity == Severity.MEDIUM
    assert issue.file is None
    assert issue.line is None
    assert issue.description == line
    assert issue.raw == line


def test_parse_review_keyword_needs_colon():
    assert parse_review("bug in the parser maybe").issues == ()


def test_parse_review_lgtm_lines():
    review = parse_review("LGTM: tests cover the edge cases\nLGTM:   naming is clear  ")

    assert review.lgtm == ("tests cover the edge cases", "naming is clear")
    assert review.issues == ()


def test_parse_review_empty_input():
    review = parse_review("")

    assert review.issues == ()
    assert review.lgtm == ()


def test_parse_review_is_repeatable():
    assert parse_review(SAMPLE_RESPONSE) == parse_review(SAMPLE_RESPONSE)
    assert IssueParser().parse(SAMPLE_RESPONSE) == parse_review(SAMPLE_RESPONSE)
