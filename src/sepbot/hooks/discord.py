"""Discord webhook integration."""

from typing import Any, Optional

import httpx

from sepbot.hooks.types import SummaryEvent
from sepbot.observability import log_event

# Seconds before the webhook POST is abandoned
DISCORD_TIMEOUT = 10.0

COLOR_DRY_RUN = 0x9B59B6
COLOR_FAILED = 0xFFA500
COLOR_OK = 0x00FF00
COLOR_TRANSITIONS = 0x3498DB
COLOR_PINGS = 0xF39C12
COLOR_NEEDS_SPONSOR = 0xE74C3C
COLOR_DORMANT = 0x95A5A6


def _plural(count: int, word: str) -> str:
    return f"**{count}** {word}{'' if count == 1 else 's'}"


def _state(item: Any) -> str:
    return item.state.value if item.state else "unknown"


def build_summary_description(event: SummaryEvent) -> str:
    summary = event.summary
    parts = []
    if summary.transitions:
        parts.append(_plural(len(summary.transitions), "transition"))
    if summary.pings:
        parts.append(_plural(len(summary.pings), "ping"))
    if summary.needs_sponsor:
        count = len(summary.needs_sponsor)
        parts.append(f"**{count}** need{'s' if count == 1 else ''} sponsor")
    if summary.dormant:
        parts.append(f"**{len(summary.dormant)}** marked dormant")
    if event.failed > 0:
        parts.append(f"**{event.failed}** failed")

    description = " • ".join(parts) + f"\n\nProcessed {event.total_processed} SEPs"
    if event.dry_run:
        description += "\n\n⚠️ **DRY RUN** - No comments were posted or labels changed"
    return description


def build_summary_embeds(event: SummaryEvent) -> list[dict[str, Any]]:
    """Build the embeds for a run summary; empty when nothing happened."""
    summary = event.summary
    if not summary.has_activity:
        return []

    if event.dry_run:
        color = COLOR_DRY_RUN
    elif event.failed > 0:
        color = COLOR_FAILED
    else:
        color = COLOR_OK

    embeds: list[dict[str, Any]] = [
        {
            "title": (
                "🧪 SEP Lifecycle Summary (DRY RUN)" if event.dry_run else "📋 SEP Lifecycle Summary"
            ),
            "color": color,
            "description": build_summary_description(event),
            "timestamp": event.timestamp.isoformat(),
            "footer": {
                "text": (
                    "SEP Lifecycle Bot • No actions were taken"
                    if event.dry_run
                    else "SEP Lifecycle Bot"
                )
            },
        }
    ]

    if summary.transitions:
        lines = [
            f"• [#{t.item.number}]({t.item.url}): "
            f"**{t.from_state.value if t.from_state else 'none'}** → **{t.to_state.value}** "
            f"(sponsor: @{t.sponsor})"
            for t in summary.transitions
        ]
        embeds.append(
            {"title": "🔄 State Transitions", "description": "\n".join(lines), "color": COLOR_TRANSITIONS}
        )

    # Remaining sections list the longest-inactive items first
    if summary.pings:
        pings = sorted(summary.pings, key=lambda p: p.days_since_activity, reverse=True)
        lines = [
            f"• [#{p.item.number}]({p.item.url}) `{_state(p.item)}`: pinged "
            f"{p.ping_target.value} @{p.target_user} (**{p.days_since_activity}d** inactive)"
            for p in pings
        ]
        embeds.append({"title": "🔔 Stale Pings", "description": "\n".join(lines), "color": COLOR_PINGS})

    if summary.needs_sponsor:
        entries = sorted(summary.needs_sponsor, key=lambda n: n.days_since_activity, reverse=True)
        lines = [
            f"• [#{n.item.number}]({n.item.url}) `{_state(n.item)}`: needs core maintainer "
            f"sponsor (**{n.days_since_activity}d** inactive)"
            for n in entries
        ]
        embeds.append(
            {"title": "🆘 Needs Sponsor", "description": "\n".join(lines), "color": COLOR_NEEDS_SPONSOR}
        )

    if summary.dormant:
        entries = sorted(summary.dormant, key=lambda d: d.days_since_activity, reverse=True)
        lines = [
            f"• [#{d.item.number}]({d.item.url}) `{_state(d.item)}` → `dormant`: after "
            f"**{d.days_since_activity}d**{' (closed)' if d.was_closed else ''}"
            for d in entries
        ]
        embeds.append(
            {"title": "💤 Marked Dormant", "description": "\n".join(lines), "color": COLOR_DORMANT}
        )

    return embeds


class DiscordHook:
    """Posts the run summary to a Discord webhook."""

    name = "discord"

    def __init__(
        self,
        webhook_url: Optional[str],
        timeout: float = DISCORD_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = webhook_url
        self.enabled = bool(webhook_url)
        self._timeout = timeout
        self._transport = transport

    async def on_event(self, event: SummaryEvent) -> None:
        if not self.enabled or event.type != "summary":
            return

        embeds = build_summary_embeds(event)
        if not embeds:
            return

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self.webhook_url, json={"embeds": embeds})
        except httpx.TimeoutException as e:
            log_event("discord", "Discord notification timed out", "error", error=e, timeout=True)
            return
        except httpx.HTTPError as e:
            log_event("discord", "Error sending Discord notification", "error", error=e)
            return

        if response.is_success:
            log_event("discord", "Sent Discord summary", "success", embeds=len(embeds))
        else:
            log_event("discord", "Failed to send Discord summary", "error", status=response.status_code)
