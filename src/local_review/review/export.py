# src/local_review/review/export.py
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

from local_review.errors import ExportFormatError
from local_review.models.review import ParsedReview, Severity


logger = logging.getLogger(__name__)

TOOL_NAME = "local-review"
TOOL_VERSION = "0.1.0"
FOOTER = f"*Powered by {TOOL_NAME}*"

SARIF_SCHEMA = "https://schemastore.azurewebsites.net/schemas/json/sarif-2.1.0.json"
SARIF_LEVELS = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "note",
    Severity.INFO: "note",
}


class ExportFormat(str, Enum):
    GITHUB = "github"
    MARKDOWN = "markdown"
    SARIF = "sarif"


def to_github_comments(review: ParsedReview) -> list[dict[str, Any]]:
    """PR review comments; issues without a file are left out."""
    return [
        {
            "path": issue.file,
            "line": issue.line,
            "body": f"**[{issue.severity.value.upper()}]** {issue.description}\n\n{FOOTER}",
        }
        for issue in review.issues
        if issue.file
    ]


def to_markdown(review: ParsedReview) -> str:
    lines = ["# Code Review Results", ""]

    if not review.issues:
        lines.append("✅ No issues found.")
    else:
        lines += [f"Found **{len(review.issues)}** issue(s):", ""]
        for issue in review.issues:
            if issue.file:
                location = f"`{issue.file}:{issue.line}`" if issue.line else f"`{issue.file}`"
            else:
                location = "_no location_"
            lines.append(f"- **[{issue.severity.value.upper()}]** {location}: {issue.description}")

    if review.lgtm:
        lines += ["", "## ✅ Looks Good", ""]
        lines += [f"- {item}" for item in review.lgtm]

    lines += ["", "---", FOOTER]
    return "\n".join(lines)


def to_sarif(review: ParsedReview) -> dict[str, Any]:
    results = []
    for issue in review.issues:
        locations = []
        if issue.file:
            physical: dict[str, Any] = {"artifactLocation": {"uri": issue.file}}
            if issue.line:
                physical["region"] = {"startLine": issue.line}
            locations.append({"physicalLocation": physical})

        results.append({
            "ruleId": f"LCR-{issue.severity.value.upper()}",
            "level": SARIF_LEVELS[issue.severity],
            "message": {"text": issue.description},
            "locations": locations,
        })

    return {
        "version": "2.1.0",
        "$schema": SARIF_SCHEMA,
        "runs": [{
            "tool": {"driver": {"name": TOOL_NAME, "version": TOOL_VERSION, "rules": []}},
            "results": results,
        }],
    }


def export_review(review: ParsedReview, fmt: str | ExportFormat) -> str:
    """Render a review in one of the export formats."""
    try:
        fmt = ExportFormat(fmt)
    except ValueError:
        raise ExportFormatError(f"Unknown export format: {fmt}") from None

    if fmt is ExportFormat.GITHUB:
        return json.dumps(to_github_comments(review), indent=2)
    if fmt is ExportFormat.MARKDOWN:
        return to_markdown(review)
    return json.dumps(to_sarif(review), indent=2)


def write_export(review: ParsedReview, fmt: str | ExportFormat, output: str | Path) -> Path:
    """Render a review and write it to output, creating parent directories."""
    content = export_review(review, fmt)
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    logger.info(f"Exported {ExportFormat(fmt).value} review to {output}")
    return output
