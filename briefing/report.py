"""
Assembles the Slack standup message.

*Did* lists yesterday's meetings plus issues submitted for review and/or merged.
*Doing* lists today's meetings plus issues currently in progress.
"""

from sources.linear import IssueBuckets


def _did_issue_lines(issues: IssueBuckets) -> list[str]:
    # An issue both submitted and merged is reported once, as "Submitted/merged".
    merged = set(issues.merged)
    reported = set()
    lines = []

    for issue in issues.submitted:
        if issue not in merged:
            lines.append(f"• Submitted {issue}")
            reported.add(issue)

    for issue in issues.submitted:
        if issue in merged:
            lines.append(f"• Submitted/merged {issue}")
            reported.add(issue)

    for issue in issues.merged:
        if issue not in reported:
            lines.append(f"• Merged {issue}")

    return lines


def build_standup_message(
    greeting: str,
    yesterday_events: list[str],
    yesterday_issues: IssueBuckets,
    today_events: list[str],
    today_issues: IssueBuckets,
) -> str:
    lines = [greeting, "", "*Did*"]
    lines += [f"• {event}" for event in yesterday_events]
    lines += _did_issue_lines(yesterday_issues)
    lines += ["", "*Doing*"]
    lines += [f"• {event}" for event in today_events]
    lines += [f"• {issue}" for issue in today_issues.in_progress]
    return "\n".join(lines) + "\n"
