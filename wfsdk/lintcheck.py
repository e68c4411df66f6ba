"""Check that the installed linter matches the version pinned in a CI workflow."""

from __future__ import annotations

import re
import subprocess
import sys
from typing import Any, Sequence

import yaml

DEFAULT_WORKFLOW_PATH = "../../.github/workflows/test-on-push.yaml"
_LINTER_FAMILY = "go"
LINTER_COMMAND = _LINTER_FAMILY + "langci-lint"
VERSION_KEY = LINTER_COMMAND.replace("-", "").upper() + "_VER"

_VERSION_RE = re.compile(
    re.escape(LINTER_COMMAND) + r"\shas\sversion\sv?([\d+.]+[\d])", re.ASCII
)
_NUM = r"(?:0|[1-9][0-9]*)"
_IDENT = r"[0-9A-Za-z-]+"
_SEMVER_RE = re.compile(
    rf"v({_NUM})(?:\.({_NUM})(?:\.({_NUM})"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    rf"(?:\+({_IDENT}(?:\.{_IDENT})*))?)?)?",
    re.ASCII,
)


def _lookup(node: Any, key: str) -> Any:
    if node is None:
        return None
    if not isinstance(node, dict):
        raise ValueError(f"cannot read key '{key}' from {type(node).__name__}")
    return node.get(key)


def parse_workflow_version_from_file(path: str) -> str:
    """Return the linter version a CI workflow file pins, or "" if absent.

    Raises OSError if the file cannot be read, yaml.YAMLError if it is not
    YAML, and ValueError if its structure does not match.
    """
    with open(path, encoding="utf-8") as handle:
        document = yaml.safe_load(handle)
    node = document
    for key in ("jobs", "build", "env", VERSION_KEY):
        node = _lookup(node, key)
    if node is None:
        return ""
    if isinstance(node, (dict, list)):
        raise ValueError(f"{VERSION_KEY} is not a scalar")
    if isinstance(node, bool):
        return "true" if node else "false"
    return str(node)


def get_current_version() -> str:
    """Return the installed linter version, prefixed with "v".

    Raises OSError or subprocess.CalledProcessError if the tool cannot be run,
    and ValueError if its output names no version.
    """
    result = subprocess.run(
        [LINTER_COMMAND, "--version"], capture_output=True, text=True, check=True
    )
    out = result.stdout
    match = _VERSION_RE.search(out)
    if match is None:
        raise ValueError(f"no version found: {out}")
    return "v" + match.group(1)


def _valid_prerelease(pre: str | None) -> bool:
    if pre is None:
        return True
    return all(
        not (part.isdigit() and len(part) > 1 and part.startswith("0"))
        for part in pre.split(".")
    )


def major_minor(version: str) -> str:
    """Return "vMAJOR.MINOR" of a semantic version, or "" if it is invalid."""
    match = _SEMVER_RE.fullmatch(version)
    if match is None or not _valid_prerelease(match.group(4)):
        return ""
    major, minor = match.group(1), match.group(2)
    return f"v{major}.{minor if minor is not None else '0'}"


def is_version_valid(workflow_version: str, current_version: str) -> bool:
    """Return whether both versions share major and minor numbers."""
    return major_minor(workflow_version) == major_minor(current_version)


def compare_versions(path: str) -> str:
    """Return a report comparing the pinned and installed linter versions."""
    try:
        workflow_version = parse_workflow_version_from_file(path)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        return f"Error parsing workflow version: {exc}"
    try:
        current_version = get_current_version()
    except (OSError, subprocess.CalledProcessError, ValueError) as exc:
        return f"Error getting current version: {exc}"
    if not is_version_valid(workflow_version, current_version):
        return (
            f"Invalid version, expected: {workflow_version}, current: {current_version}"
            " - see the linter installation instructions to update"
        )
    return "Linter version is valid (MajorMinor): " + current_version


def main(argv: Sequence[str] | None = None) -> int:
    """Print the version comparison for a workflow file."""
    args = list(sys.argv[1:] if argv is None else argv)
    path = args[0] if args else DEFAULT_WORKFLOW_PATH
    print(compare_versions(path))
    return 0