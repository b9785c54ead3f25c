"""Options structure consumed by the transform."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from globals_transform.errors import ConfigurationError
from globals_transform.naming_policy import (
    NamingPolicy,
    load_naming_function,
    naming_policy_from_option,
)

EXPORT_ALL_COPY = "copy"
EXPORT_ALL_DROP = "drop"
EXPORT_ALL_POLICIES = (EXPORT_ALL_COPY, EXPORT_ALL_DROP)


@dataclass(frozen=True)
class TransformOptions:
    """Validated options for one or more file transforms."""

    naming_policy: NamingPolicy
    externals: dict[str, str] = field(default_factory=dict)
    transform_only_modules: bool = False
    export_all: str = EXPORT_ALL_COPY

    def __post_init__(self) -> None:
        """Validate the export-all policy."""
        if self.export_all not in EXPORT_ALL_POLICIES:
            msg = (
                f"export_all must be one of {', '.join(EXPORT_ALL_POLICIES)}, "
                f"got {self.export_all!r}"
            )
            raise ConfigurationError(msg)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "TransformOptions":
        """Build options from a merged configuration mapping.

        ``naming_policy`` (an import string) takes precedence over
        ``namespace_root``; one of the two is required.
        """
        policy_path = config.get("naming_policy")
        if policy_path:
            naming_policy = naming_policy_from_option(load_naming_function(policy_path))
        elif config.get("namespace_root"):
            naming_policy = naming_policy_from_option(config["namespace_root"])
        else:
            msg = "namespace_root is required (or naming_policy)"
            raise ConfigurationError(msg)

        externals = config.get("externals") or {}
        if not isinstance(externals, Mapping):
            msg = "externals must map import sources to global names"
            raise ConfigurationError(msg)

        return cls(
            naming_policy=naming_policy,
            externals={str(k): str(v) for k, v in externals.items()},
            transform_only_modules=bool(config.get("transform_only_modules", False)),
            export_all=config.get("export_all") or EXPORT_ALL_COPY,
        )
