"""Hook dispatch registry."""

import asyncio

from sepbot.hooks.types import SEPHook, SummaryEvent
from sepbot.observability import log_event


class HookRegistry:
    def __init__(self) -> None:
        self._hooks: list[SEPHook] = []

    def register(self, hook: SEPHook) -> None:
        """Register a hook; disabled hooks are ignored."""
        if hook.enabled:
            self._hooks.append(hook)
            log_event("hooks", "Registered hook", "debug", hook=hook.name)

    async def dispatch(self, event: SummaryEvent) -> None:
        """Send an event to every hook concurrently.

        A failing hook is logged and does not affect the others.
        """

        async def _notify(hook: SEPHook) -> None:
            try:
                await hook.on_event(event)
            except Exception as e:
                log_event(
                    "hooks",
                    "Hook failed to process event",
                    "error",
                    hook=hook.name,
                    event_type=event.type,
                    error=e,
                )

        await asyncio.gather(*(_notify(hook) for hook in self._hooks))

    def registered_hooks(self) -> list[str]:
        return [hook.name for hook in self._hooks]
