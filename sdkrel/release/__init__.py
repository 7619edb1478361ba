"""Release domain.

- model: library units, selections, release sets and plans
- resolver: release-set resolution (pure)
- catalog / release_config: reading and writing the input files
- checks / workflow / bundle / generator: release steps built on a resolved set
- service: reads inputs and calls the resolver for the CLI
"""

from __future__ import annotations

from sdkrel.release.model import LibraryUnit, ReleaseConfig, ReleaseSelection, ReleaseSet
from sdkrel.release.resolver import expand_co_releases, resolve

__all__ = [
    "LibraryUnit",
    "ReleaseConfig",
    "ReleaseSelection",
    "ReleaseSet",
    "expand_co_releases",
    "resolve",
]
