"""Filesystem helpers for the standard OfferFlow workspace structure."""

# Module responsibilities:
# - Define the default ~/OfferFlow directory layout and create folders on demand.
# - Offer small helpers to resolve output paths for generated documents.

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

HOME_ENV = "OFFERFLOW_HOME"


def default_base() -> Path:
    """Return the workspace base, honouring ``OFFERFLOW_HOME`` when set."""

    env = os.getenv(HOME_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / "OfferFlow"


def ensure_default_structure(base: Optional[Path] = None) -> Dict[str, Path]:
    """Ensure the default OfferFlow directory structure exists.

    Args:
        base: Optional override for the OfferFlow base directory.

    Returns:
        Mapping with keys ``base``, ``out``, ``logs``.
    """

    target_base = base or default_base()
    paths = {
        "base": target_base,
        "out": target_base / "out",
        "logs": target_base / "logs",
    }
    for path in paths.values():
        path.mkdir(parents=True, exist_ok=True)
    return paths


def prepare_output_dir(out_dir: Optional[Path] = None, base: Optional[Path] = None) -> Path:
    """Return the directory generated documents are written to.

    Args:
        out_dir: Explicit destination chosen by the caller.
        base: Optional override for the OfferFlow base directory.

    Returns:
        ``out_dir`` when given (created if needed), else the workspace ``out`` folder.
    """

    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)
        return out_dir
    return ensure_default_structure(base)["out"]
