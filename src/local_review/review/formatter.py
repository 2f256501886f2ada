# src/local_review/review/formatter.py
import io

from rich.console import Console
from rich.markup import escape

from local_review.models.review import ParsedReview, ReviewDelta, ReviewIssue, Severity


SEVERITY_STYLES = {
    Severity.CRITICAL: "red",
    Severity.HIGH: "bright_red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
    Severity.INFO: "bright_black",
}

SEVERITY_ICONS = {
    Severity.CRITICAL: "🔴",
    Severity.HIGH: "🟠",
    Severity.MEDIUM: "🟡",
    Severity.LOW: "🔵",
    Severity.INFO: "ℹ️ ",
}

RULE = "─" * 50


def _render(lines: list[str], use_color: bool) -> str:
    console = Console(
        file=io.StringIO(),
        force_terminal=use_color,
        color_system="standard" if use_color else None,
        emoji=False,
        highlight=False,
    )
    for line in lines:
        console.print(line, soft_wrap=True)
    return console.file.getvalue()


def _location(issue: ReviewIssue) -> str:
    if not issue.file:
        return ""
    suffix = f":{issue.line}" if issue.line else ""
    return f" {escape(issue.file + suffix)}"


def has_blocking_issues(review: ParsedReview) -> bool:
    return any(i.severity in (Severity.CRITICAL, Severity.HIGH) for i in review.issues)


def format_review(review: ParsedReview, use_color: bool = True) -> str:
    """Render a parsed review for the terminal, grouped by severity."""
    lines = ["", "[bold]🔍 Code Review Results[/]", f"[bright_black]{RULE}[/]"]

    if not review.issues and not review.lgtm:
        lines += ["[green]✅ No issues found. Clean diff![/]", ""]
        return _render(lines, use_color)

    for severity in Severity:
        group = [i for i in review.issues if i.severity is severity]
        if not group:
            continue
        style = SEVERITY_STYLES[severity]
        lines.append("")
        lines.append(f"[bold {style}]{SEVERITY_ICONS[severity]} {severity.value.upper()} ({len(group)})[/]")
        for issue in group:
            location = f"[bright_black]{_location(issue)}[/]" if issue.file else ""
            lines.append(f"  [{style}]▸[/]{location} {escape(issue.description)}")

    if review.lgtm:
        lines += ["", "[bold green]✅ Looks Good[/]"]
        lines += [f"  [green]▸[/] {escape(item)}" for item in review.lgtm]

    lines += ["", f"[bright_black]{RULE}[/]"]
    blocking = sum(1 for i in review.issues if i.severity in (Severity.CRITICAL, Severity.HIGH))
    if blocking:
        lines.append(f"[red]❌ {blocking} critical/high issue(s) found, review before merging[/]")
    elif review.issues:
        lines.append(f"[yellow]⚠️  {len(review.issues)} issue(s) found, consider addressing[/]")
    else:
        lines.append("[green]✅ All clear![/]")
    lines.append("")

    return _render(lines, use_color)


def format_delta(delta: ReviewDelta, use_color: bool = True) -> str:
    """Render the change between the last stored review and this one."""
    lines = ["", "[bold]📊 Review Diff (vs last run)[/]", f"[bright_black]{RULE}[/]"]

    if delta.unchanged:
        lines.append("[bright_black]No change from last review.[/]")
    else:
        if delta.resolved_issues:
            lines += ["", f"[bold green]✅ Resolved ({len(delta.resolved_issues)})[/]"]
            for i in delta.resolved_issues:
                lines.append(f"[green]  ✔{_location(i)} {escape(i.description)}[/]")
        if delta.new_issues:
            lines += ["", f"[bold red]🆕 New issues ({len(delta.new_issues)})[/]"]
            for i in delta.new_issues:
                lines.append(f"[red]  ▸{_location(i)} \\[{i.severity.value}] {escape(i.description)}[/]")
        if delta.persisting_issues:
            lines += ["", f"[bold yellow]⏳ Still open ({len(delta.persisting_issues)})[/]"]
            for i in delta.persisting_issues:
                lines.append(f"[yellow]  ·{_location(i)} \\[{i.severity.value}] {escape(i.description)}[/]")

    lines.append("")
    return _render(lines, use_color)
