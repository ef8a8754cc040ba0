"""Constants module for ccinit.

All default paths, timeouts and shared constants are defined here (SSOT).
"""

from __future__ import annotations

# === Host identity defaults ===
DEFAULT_UID = 1000
DEFAULT_GID = 1000
DEFAULT_WORKDIR = "/workspace"

# === Container paths ===
HOME_ROOT = "/home"  # Parent of provisioned home directories
LOGIN_SHELL = "/bin/bash"
DEFAULT_CLAUDE_CONFIG = "/opt/claude.json"  # Packaged default claude.json
PROJECT_CONFIG_NAME = "claude.json"  # Project override, relative to workdir
CLAUDE_DIR_NAME = ".claude"
CLAUDE_JSON_NAME = ".claude.json"
CLAUDE_SUBDIRS = ("session-env", "projects", "file-history")
WORKDIR_PROBE_NAME = ".container_test"

# PATH handed to the child process (never inherited)
CHILD_PATH = "/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"

# Variables replaced in the child environment
IDENTITY_ENV_KEYS = frozenset({"USER", "LOGNAME", "HOME", "SHELL", "PATH"})

BASHRC_TEMPLATE = """\
# ~/.bashrc: executed by bash(1) for non-login shells.

export PS1='\\u@\\h:\\w\\$ '
[ -z "$PS1" ] && return
"""

# === Plugin installer ===
PLUGIN_WRAPPER = "ccinit-plugins"  # Console script exec'd before the command
CLAUDE_COMMAND = "claude"
DEFAULT_MARKETPLACE = "/opt/claude-plugins/superpowers"
DEFAULT_PLUGIN = "superpowers"
NO_MARKETPLACES_MARKER = "No marketplaces configured"

# === Timeouts (seconds) ===
ACCOUNT_COMMAND_TIMEOUT = 30  # useradd/groupadd/userdel/groupdel
CHOWN_TIMEOUT = 120  # Recursive chown over bind mounts
PLUGIN_COMMAND_TIMEOUT = 300  # claude plugin marketplace/install
DOCKER_COMMAND_TIMEOUT = 30  # Quick docker commands (info, inspect)

# === Host launcher ===
DEFAULT_IMAGE = "claude-code:tailor"
CONTAINER_NAME_PREFIX = "claude-code"
CONTAINER_WORKDIR = "/workspace"
DOT_ENV_NAME = ".env"
