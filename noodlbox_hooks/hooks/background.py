"""Fire-and-forget side tasks started by hooks.

These run detached from the hook process: nothing waits for them and their
failures are only logged. They must never influence a hook decision.
"""

import subprocess

from ..hook_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.DISPATCHER)


def spawn_marketplace_update(plugin_name: str = "noodlbox") -> bool:
    """Start ``claude plugin marketplace update <plugin>`` in the background.

    Returns:
        True if the process was started.
    """
    try:
        subprocess.Popen(
            ["claude", "plugin", "marketplace", "update", plugin_name],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except (OSError, ValueError) as e:
        logger.debug(f"Marketplace update not started: {e}")
        return False

    logger.debug("Triggered marketplace update in background")
    return True
