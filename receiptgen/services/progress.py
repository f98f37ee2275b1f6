from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display for batch runs (tqdm, TTY only).

In non-TTY environments (CI, redirected output) no bar is created, so log
output stays free of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Single progress bar over the spreadsheets of a run.

    Usage::

        with ProgressTracker(len(paths)) as progress:
            for p in paths:
                progress.start(p.name)
                ...
                progress.advance(receipts=n)
    """

    def __init__(self, total: int, *, description: str = "Generating receipts", unit: str = "file") -> None:
        self.total = total
        self.description = description
        self.done = 0
        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=total,
                desc=description,
                unit=unit,
                leave=True,
                ncols=80,
                ascii=True,
            )

    def start(self, label: str) -> None:
        """Show the item currently being processed."""
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({label})")

    def advance(self, **postfix: Any) -> None:
        """Mark one item done and optionally refresh the stats postfix."""
        self.done += 1
        if self.pbar is not None:
            if postfix:
                self.pbar.set_postfix(**postfix)
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
