"""Fixed Netgear CLI command set, prompts and terminators."""

from __future__ import annotations

# Login / escalation
LOGIN_PROMPT = "User:"
PASSWORD_PROMPT = "Password:"
LOGIN_SUCCESS = (">",)
ENABLE_COMMAND = "en"
PRIVILEGED_PROMPT = "#"

# Monitoring
SHOW_IP_MANAGEMENT = "show ip management"
SHOW_POE = "show poe"
SHOW_INTERFACE_SWITCHPORT = "show interface switchport"
SHOW_ENVIRONMENT = "show environment"
SHOW_INTERFACE_ETHERNET = "show interface ethernet all | exclude lag"
SHOW_PORT_STATUS = "show port status all | exclude lag"
PAGE_ADVANCE = "-"
MORE_PROMPT = "--More-- or (q)uit"

# Control
CONFIG_COMMAND = "config"
RELOAD_COMMAND = "reload"
CONFIRM = "y"
UNSAVED_CHANGES_PROMPT = "Would you like to save them now? (y/n) "
STACK_RELOAD_PROMPT = "Are you sure you want to reload the stack? (y/n) "

INVALID_INPUT = "% Invalid input detected at '^' marker."

SUCCESS_TERMINATORS = (
    "\n",
    PRIVILEGED_PROMPT,
    MORE_PROMPT,
    "Config file 'startup-config' created successfully .",
    "Configuration Saved!",
    UNSAVED_CHANGES_PROMPT,
    STACK_RELOAD_PROMPT,
    PASSWORD_PROMPT,
)
ERROR_TERMINATORS = (INVALID_INPUT,)


def port_command(port_id: str, enabled: bool) -> str:
    """Build the config-mode block that brings a port up or shuts it down."""
    action = "no shutdown" if enabled else "shutdown"
    return f"{CONFIG_COMMAND}\ninterface {port_id}\n{action}"


def reload_after_save() -> str:
    """Answer the unsaved-changes prompt, then re-issue and confirm the reload."""
    return f"{CONFIRM}\n{RELOAD_COMMAND}\n{CONFIRM}"
