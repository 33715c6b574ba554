"""Version and system information for mutator.

Usage:
    from mutator import __version__, get_version_info, print_version_info

    print(__version__)  # "0.1.0"
    print_version_info()

CLI Usage:
    python -m mutator --version
    python -m mutator info
"""

from __future__ import annotations

import importlib.metadata
import platform
import sys
from typing import Any, Dict, Optional

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0
VERSION_SUFFIX = ""  # e.g., "alpha", "beta", "rc1"

__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}{'-' + VERSION_SUFFIX if VERSION_SUFFIX else ''}"

_DEPENDENCIES = ("pydantic", "typeguard", "typing_extensions", "PyYAML")


def get_python_info() -> Dict[str, str]:
    """Get Python interpreter information."""
    return {
        "version": platform.python_version(),
        "implementation": platform.python_implementation(),
        "executable": sys.executable,
    }


def get_platform_info() -> Dict[str, str]:
    """Get platform/OS information."""
    return {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
    }


def _get_package_version(distribution: str) -> Optional[str]:
    try:
        return importlib.metadata.version(distribution)
    except importlib.metadata.PackageNotFoundError:
        return None


def get_dependency_versions() -> Dict[str, Optional[str]]:
    """Map each runtime dependency to its installed version, or None."""
    return {name: _get_package_version(name) for name in _DEPENDENCIES}


def get_version_info() -> Dict[str, Any]:
    """Get version, python, platform, and dependency info.

    Example:
        >>> info = get_version_info()
        >>> info["mutator"]
        '0.1.0'
    """
    return {
        "mutator": __version__,
        "python": get_python_info(),
        "platform": get_platform_info(),
        "dependencies": get_dependency_versions(),
    }


def format_version_info(info: Optional[Dict[str, Any]] = None) -> str:
    """Format version info as a human-readable string with aligned colons."""
    if info is None:
        info = get_version_info()

    py_fields = [
        ("Version", info["python"]["version"]),
        ("Implementation", info["python"]["implementation"]),
        ("Executable", info["python"]["executable"]),
    ]
    plat_fields = [
        ("System", info["platform"]["system"]),
        ("Release", info["platform"]["release"]),
        ("Machine", info["platform"]["machine"]),
    ]
    dep_items = [
        (pkg, ver if ver else "not installed")
        for pkg, ver in info["dependencies"].items()
    ]

    width = max(len(label) for label, _ in py_fields + plat_fields + dep_items)

    lines = [f"mutator: {info['mutator']}", "", "Python:"]
    for label, value in py_fields:
        lines.append(f"  {label:>{width}} : {value}")

    lines.append("")
    lines.append("Platform:")
    for label, value in plat_fields:
        lines.append(f"  {label:>{width}} : {value}")

    lines.append("")
    lines.append("Dependencies:")
    for pkg, ver in dep_items:
        lines.append(f"  {pkg:>{width}} : {ver}")

    return "\n".join(lines)


def print_version_info() -> None:
    """Print version and system information to stdout."""
    print(format_version_info())
