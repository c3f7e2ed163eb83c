from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]


class ClassNamesConfig(BaseModel):
    """Well-known runtime class and field names the navigator looks up."""

    weak_reference: str = "java.lang.ref.Reference"
    legacy_weak_reference: str = "sun.misc.Ref"
    referent_field: str = "referent"
    finalizer: str = "java.lang.ref.Finalizer"
    string: str = "java.lang.String"
    char_array: str = "char[]"
    class_mirror: str = "java.lang.Class"


class NavigatorConfig(BaseModel):
    """Top-level heapwalk configuration."""

    classes: ClassNamesConfig = ClassNamesConfig()
    reachable_excludes_file: Optional[str] = None
    verbose: bool = False


def load_config(path: Optional[str] = None) -> NavigatorConfig:
    """Load configuration from a heapwalk.toml file, falling back to defaults.

    A missing file yields the defaults.
    """
    config_path = Path(path) if path else Path("heapwalk.toml")
    if not config_path.exists():
        return NavigatorConfig()

    with open(config_path, "rb") as f:
        raw = tomllib.load(f)

    return NavigatorConfig(**raw)
