"""Required version lookup inside a parsed description file."""

from collections.abc import Mapping
from typing import Any, Optional

from depversion.versioning import normalize_version

# Checked in this order; the first field listing the package wins
DEPENDENCY_FIELDS = (
    "optionalDependencies",
    "dependencies",
    "peerDependencies",
    "devDependencies",
)


def get_required_version_from_description_file(
    data: Mapping[str, Any], package_name: str
) -> Optional[str]:
    """Return the normalized version a manifest requires for a package.

    Args:
        data: Parsed description file
        package_name: Dependency name to look up

    Returns:
        Normalized version (possibly an empty string when the specifier is not
        recognized), or None when no dependency field lists the package
    """
    for field in DEPENDENCY_FIELDS:
        dependencies = data.get(field)
        if isinstance(dependencies, Mapping) and package_name in dependencies:
            return normalize_version(dependencies[package_name])

    return None
