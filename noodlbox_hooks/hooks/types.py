"""Hook output envelope."""

import json
from dataclasses import dataclass
from typing import Any

# Blue "[noodlbox]" prefix for messages shown to the user
BRAND = "\x1b[38;5;39m[noodlbox]\x1b[0m"


@dataclass
class HookOutput:
    """Decision object written to stdout.

    A hook that has nothing to add writes no output at all, which the host
    treats as "allow". This object is only produced when there is context
    to attach.
    """

    hook_event_name: str
    additional_context: str
    system_message: str | None = None
    permission_decision: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's JSON shape."""
        specific: dict[str, Any] = {"hookEventName": self.hook_event_name}
        if self.permission_decision:
            specific["permissionDecision"] = self.permission_decision
        specific["additionalContext"] = self.additional_context

        output: dict[str, Any] = {}
        if self.system_message:
            output["systemMessage"] = self.system_message
        output["hookSpecificOutput"] = specific
        return output

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
