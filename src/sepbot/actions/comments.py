"""Comment templates for bot actions.

Every template starts with the bot marker so later runs can find the most
recent bot comment for cooldown tracking.
"""

from sepbot.sep.models import BOT_COMMENT_MARKER, SEPItem, SEPState

FOOTER = "---\n*This is an automated message from the SEP lifecycle bot.*"


def _render(*sections: str) -> str:
    return "\n\n".join([BOT_COMMENT_MARKER, *sections, FOOTER])


def create_transition_comment(
    item: SEPItem,
    from_state: str,
    to_state: str,
    sponsor: str,
) -> str:
    sections = [
        f"## State Transition: {from_state} → {to_state}",
        f"This SEP has been transitioned from **{from_state}** to **{to_state}**.",
    ]
    if to_state == SEPState.DRAFT.value:
        sections.append(f"@{sponsor} has been assigned as the sponsor for this SEP.")
    return _render(*sections)


def create_author_ping_comment(item: SEPItem, days_since_activity: int) -> str:
    return _render(
        "## Friendly Reminder",
        f"Hi @{item.author}!",
        f"This SEP proposal has been inactive for **{days_since_activity} days**.",
        "We wanted to check in:\n"
        "- Are you still working on this proposal?\n"
        "- Is there anything blocking progress?\n"
        "- Do you need help finding a sponsor?",
        "If this proposal is no longer being pursued, please let us know and we can "
        "close it. Otherwise, any update on the current status would be appreciated!",
    )


def create_sponsor_ping_comment(item: SEPItem, sponsor: str, days_since_activity: int) -> str:
    return _render(
        "## Sponsor Check-in",
        f"Hi @{sponsor}!",
        f"This SEP draft has been inactive for **{days_since_activity} days**.",
        "As the sponsor for this SEP, we wanted to check:\n"
        "- Is there ongoing work on this draft?\n"
        "- Are there any blockers we can help with?\n"
        "- Should this SEP be moved to a different state?",
        "Please provide an update when you have a chance.",
    )


def create_maintainer_ping_comment(
    item: SEPItem, maintainer: str, days_since_activity: int
) -> str:
    return _render(
        "## Maintainer Activity Check",
        f"Hi @{maintainer}!",
        "You're assigned to this SEP but there hasn't been any activity from you "
        f"in **{days_since_activity} days**.",
        "Please provide an update on:\n"
        "- Current status of your review/work\n"
        "- Any blockers or concerns\n"
        "- Expected timeline for next steps",
        "If you're no longer able to sponsor this SEP, please let us know so we can "
        "find another maintainer.",
    )


def create_dormant_comment(item: SEPItem, days_since_activity: int) -> str:
    return _render(
        "## Marking as Dormant",
        f"This SEP proposal has been inactive for **{days_since_activity} days** "
        "and is being marked as **dormant**.",
        "This SEP is being closed, but it can be reopened if work resumes. To reactivate:\n"
        "1. Comment on this issue/PR with an update\n"
        "2. A maintainer can remove the `dormant` label and reopen",
        "Thank you for your contribution!",
    )


def create_needs_sponsor_comment(item: SEPItem, days_since_activity: int) -> str:
    if item.assignees:
        assignees = ", ".join(f"@{a}" for a in item.assignees)
    else:
        assignees = "None"
    return _render(
        "## Core Maintainer Sponsor Needed",
        f"This SEP draft has been inactive for **{days_since_activity} days** and "
        "doesn't have a core maintainer sponsor assigned.",
        "For a SEP to progress from draft, it needs a sponsor from the core "
        "maintainers team who can:\n"
        "- Guide the proposal through the review process\n"
        "- Help address feedback and blockers\n"
        "- Champion the SEP in maintainer discussions",
        f"**Current assignees**: {assignees}",
        "If you're a core maintainer interested in sponsoring this SEP, please assign "
        "yourself. If you're the author, consider reaching out to the maintainers team "
        "to find a sponsor.",
    )


def create_accepted_reminder_comment(item: SEPItem, days_since_activity: int) -> str:
    return _render(
        "## Reference Implementation Reminder",
        f"Hi @{item.author}!",
        f"This SEP was accepted **{days_since_activity} days ago**.",
        "A reminder that accepted SEPs should have a reference implementation to "
        "move to **final** status.",
        "- Is there a reference implementation in progress?\n"
        "- Do you need help or guidance with the implementation?",
        "Let us know the current status!",
    )
