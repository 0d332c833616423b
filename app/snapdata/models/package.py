"""Package identity models.

A package is identified by its name, an optional instance key (for
parallel installs of the same package) and the revision being handled.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PackageInfo:
    """An installed (or about to be installed) revision of a package.

    Attributes:
        name: Package name (e.g., "hello").
        revision: Revision identifier (e.g., "42" or "x1"). Only equality
            between revisions is ever needed.
        instance_key: Optional instance key for parallel installs.
    """

    name: str
    revision: str
    instance_key: str = ""

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if not self.revision:
            msg = "Package revision cannot be empty"
            raise ValueError(msg)
        if "/" in self.name or "/" in self.revision or "/" in self.instance_key:
            msg = f"Package identifiers cannot contain '/': {self.instance_name}@{self.revision}"
            raise ValueError(msg)

    @property
    def instance_name(self) -> str:
        """Name including the instance key, e.g. ``hello_foo``."""
        if self.instance_key:
            return f"{self.name}_{self.instance_key}"
        return self.name

    def same_revision(self, other: "PackageInfo | None") -> bool:
        """Check whether ``other`` is the same revision of this package."""
        return other is not None and other.revision == self.revision
