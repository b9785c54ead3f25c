"""Logic for fingerprinting the options that shape transformed output."""

import hashlib
import json
from typing import Any

from globals_transform.naming_policy import FixedRoot
from globals_transform.transform_options import TransformOptions


def describe_options(options: TransformOptions) -> dict[str, Any]:
    """Reduce options to JSON data; naming functions are named by import path."""
    policy = options.naming_policy
    if isinstance(policy, FixedRoot):
        naming: dict[str, str] = {"namespace_root": policy.root}
    else:
        function = policy.function
        naming = {"naming_policy": f"{function.__module__}:{function.__qualname__}"}
    return {
        **naming,
        "externals": dict(options.externals),
        "transform_only_modules": options.transform_only_modules,
        "export_all": options.export_all,
    }


def compute_options_hash(options: TransformOptions) -> str:
    """Compute a stable hash of the validated options.

    Two runs with equal hashes produce the same output for the same sources.
    """
    options_json = json.dumps(describe_options(options), sort_keys=True)
    return hashlib.sha256(options_json.encode("utf-8")).hexdigest()
