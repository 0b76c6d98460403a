#!/usr/bin/env python3
"""
noodlbox Claude Code hook.

Single entry point for the SessionStart, PreToolUse (Glob/Grep/Bash) and
PostToolUse (noodlbox query_with_context) events. Reads the event JSON on
stdin and prints at most one JSON decision on stdout.

Install via Claude Code settings:
{
  "hooks": {
    "SessionStart": [
      {"hooks": [{"type": "command", "command": "python3 /path/to/hooks/noodlbox.py"}]}
    ],
    "PreToolUse": [
      {
        "matcher": "Glob|Grep|Bash",
        "hooks": [{"type": "command", "command": "python3 /path/to/hooks/noodlbox.py", "timeout": 10}]
      }
    ],
    "PostToolUse": [
      {
        "matcher": "mcp__.*__query_with_context",
        "hooks": [{"type": "command", "command": "python3 /path/to/hooks/noodlbox.py"}]
      }
    ]
  }
}

Set NOODLBOX_HOOK_DEBUG=true to see decisions on stderr.
"""

import sys

from noodlbox_hooks.hooks.dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
