from __future__ import annotations

from pathlib import Path
from typing import Any


def safe_filename(name: str) -> str:
    keep = []
    for ch in name:
        if ch.isalnum() or ch in {"-", "_", "."}:
            keep.append(ch)
        elif ch in {" ", "/", "\\", ":"}:
            keep.append("_")
    out = "".join(keep).strip("_")
    return out or "plot"


def save_matplotlib(fig: Any, path: Path) -> None:
    import matplotlib.pyplot as plt

    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)
