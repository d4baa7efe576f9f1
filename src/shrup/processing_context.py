"""Processing configuration and include-chain tracking.

This module provides the ProcessingConfig dataclass (the policy for one run)
and the ProcessingContext class, which tracks the files currently being
expanded for cycle detection and depth limiting.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from shrup.errors import CircularDependency, MaxDepthExceeded

logger = logging.getLogger(__name__)

DEFAULT_MAX_INCLUDE_DEPTH = 100


@dataclass(frozen=True)
class ProcessingConfig:
    """Preprocessor configuration, constant for one run.

    Attributes:
        debug_mode: Bracket every inlined block with marker comments
        max_include_depth: Maximum length of the include chain, counting the
            top-level input file as depth 1
        base_directory: Sandbox root; absolute include paths are resolved
            against it and no include may escape it. None means the
            directory of the input file
    """

    debug_mode: bool = False
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH
    base_directory: Path | None = None

    def __post_init__(self) -> None:
        if isinstance(self.max_include_depth, bool) or not isinstance(self.max_include_depth, int):
            raise ValueError(f"max_include_depth must be an integer, got {self.max_include_depth!r}")
        if self.max_include_depth < 1:
            raise ValueError(f"max_include_depth must be positive, got {self.max_include_depth}")
        # Accept plain strings from callers
        if self.base_directory is not None:
            object.__setattr__(self, "base_directory", Path(self.base_directory))


class ProcessingContext:
    """Mutable ledger of the include chain for a single top-level run.

    The context keeps two views of the chain:
    - An ordered stack of canonical paths (outermost first), whose length is
      the current depth
    - A set of the same paths for constant-time cycle checks

    A path is in the set exactly when it is on the stack. Use including() so
    that every successful enter() is matched by a leave().
    """

    def __init__(self, config: ProcessingConfig) -> None:
        self._config = config
        self._include_stack: list[Path] = []
        self._active_files: set[Path] = set()

    @property
    def config(self) -> ProcessingConfig:
        return self._config

    @property
    def depth(self) -> int:
        """Current nesting depth (length of the include stack)."""
        return len(self._include_stack)

    @property
    def stack(self) -> tuple[Path, ...]:
        """Snapshot of the include stack, outermost file first."""
        return tuple(self._include_stack)

    def is_active(self, path: Path) -> bool:
        return path in self._active_files

    def enter(self, path: Path) -> None:
        """Push a canonical path onto the include chain.

        Args:
            path: Canonical path of the file about to be expanded.

        Raises:
            CircularDependency: If the path is already on the chain.
            MaxDepthExceeded: If the push would exceed max_include_depth.
        """
        if path in self._active_files:
            chain = (*self._include_stack, path)
            logger.warning(f"Circular include detected: {' -> '.join(str(p) for p in chain)}")
            raise CircularDependency(path, chain)

        if len(self._include_stack) >= self._config.max_include_depth:
            logger.warning(f"Include depth limit {self._config.max_include_depth} reached at {path}")
            raise MaxDepthExceeded(path, self._config.max_include_depth)

        self._include_stack.append(path)
        self._active_files.add(path)
        logger.debug(f"Entered {path} (depth {len(self._include_stack)})")

    def leave(self) -> None:
        """Pop the innermost file from the include chain."""
        path = self._include_stack.pop()
        self._active_files.discard(path)
        logger.debug(f"Left {path} (depth {len(self._include_stack)})")

    @contextmanager
    def including(self, path: Path) -> Iterator[None]:
        """Hold ``path`` on the include chain for the duration of the block.

        leave() runs on every exit path, including a propagated exception.
        """
        self.enter(path)
        try:
            yield
        finally:
            self.leave()
