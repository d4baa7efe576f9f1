"""Shell script preprocessor.

This module provides the ShellPreprocessor class, which recursively inlines
``#include`` directives into a single script, and PreprocessorBuilder for
assembling its configuration.

Expansion is depth-first and follows line order. The content of an included
file replaces its directive line completely before any later line of the
including file is emitted. The first error anywhere in the include tree
aborts the whole run.

In debug mode every marker sits on its own line. When a directive is the
last line of its file with no line terminator and the included block has none
either, the block gains a "\n" before the end marker, so that one case differs
by a single newline from the non-debug output with the markers removed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from shrup.errors import FileNotFound, IoError, PermissionDenied, PreprocessorError
from shrup.include_directive import IncludeDirective
from shrup.include_directive_parser import IncludeDirectiveParser
from shrup.path_resolver import PathResolver
from shrup.processing_context import DEFAULT_MAX_INCLUDE_DEPTH, ProcessingConfig, ProcessingContext

logger = logging.getLogger(__name__)

# Bytes that are not valid UTF-8 survive a read/write round trip unchanged
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

BEGIN_MARKER = "# --- Included from {path} ---"
END_MARKER = "# --- End of {path} ---"


class ShellPreprocessor:
    """Resolves include directives in shell scripts.

    A preprocessor holds only immutable configuration, so one instance can
    process any number of files. Each call to process() uses a fresh
    ProcessingContext.
    """

    def __init__(self, config: ProcessingConfig | None = None) -> None:
        self._config = config if config is not None else ProcessingConfig()
        self._parser = IncludeDirectiveParser()

    @property
    def config(self) -> ProcessingConfig:
        return self._config

    def process(self, input_path: Path) -> str:
        """Expand all includes of a file and return the combined text.

        Args:
            input_path: The top-level script.

        Returns:
            The fully expanded script.

        Raises:
            PreprocessorError: On the first failure anywhere in the include tree.
        """
        # Relative includes of the input resolve against the path as given, even
        # when it is a symlink; the canonical path is only its cycle identity
        source_file = Path(os.path.abspath(input_path))
        base_directory = self._config.base_directory
        if base_directory is None:
            base_directory = source_file.parent

        resolver = PathResolver(base_directory)
        context = ProcessingContext(self._config)
        canonical = resolver.resolve_input(source_file)

        logger.debug(f"Processing {canonical} (base directory {resolver.base_directory})")
        with context.including(canonical):
            lines = self._expand(canonical, context, resolver, source_file)

        logger.debug(f"Expanded {canonical} into {len(lines)} lines")
        return "".join(lines)

    def process_file(self, input_path: Path, output_path: Path) -> None:
        """Expand ``input_path`` and write the result to ``output_path``.

        Nothing is written if expansion fails.

        Raises:
            PreprocessorError: If expansion fails, or IoError if writing fails.
        """
        content = self.process(input_path)
        output_path = Path(output_path)
        try:
            output_path.write_text(content, encoding=ENCODING, errors=ENCODING_ERRORS, newline="")
        except OSError as e:
            raise IoError(output_path, f"failed to write output file: {e}") from e
        logger.info(f"Wrote {output_path}")

    def expand(self, path: Path, context: ProcessingContext) -> list[str]:
        """Expand one file whose canonical path is already on the include chain.

        When the configuration has no base directory, the directory of ``path``
        is used.

        Args:
            path: Canonical path of the file to expand.
            context: The include chain for the current run.

        Returns:
            The output lines, each keeping its original line terminator.
        """
        base_directory = context.config.base_directory
        if base_directory is None:
            base_directory = Path(path).parent
        return self._expand(path, context, PathResolver(base_directory))

    def _expand(
        self,
        path: Path,
        context: ProcessingContext,
        resolver: PathResolver,
        source_file: Path | None = None,
    ) -> list[str]:
        if source_file is None:
            source_file = path
        try:
            lines = self._read_lines(path)
            output: list[str] = []
            for line_number, line in enumerate(lines, start=1):
                directive = self._parser.parse_line(line, line_number, source_file)
                if directive is None:
                    output.append(line)
                else:
                    output.extend(self._include(directive, line, context, resolver))
            return output
        except PreprocessorError as e:
            if e.include_stack is None:
                e.include_stack = context.stack
            raise

    def _include(
        self,
        directive: IncludeDirective,
        line: str,
        context: ProcessingContext,
        resolver: PathResolver,
    ) -> list[str]:
        """Expand a single directive into the lines that replace it."""
        target = resolver.resolve(directive)
        with context.including(target):
            block = self._expand(target, context, resolver)

        terminator = line[len(line.rstrip("\r\n")) :]
        if not self._config.debug_mode:
            if block and not block[-1].endswith(("\n", "\r")):
                block[-1] += terminator
            return block

        # Markers always sit on their own lines
        newline = terminator or "\n"
        if block and not block[-1].endswith(("\n", "\r")):
            block[-1] += newline
        return [
            BEGIN_MARKER.format(path=directive.raw_path) + newline,
            *block,
            END_MARKER.format(path=directive.raw_path) + terminator,
        ]

    def _read_lines(self, path: Path) -> list[str]:
        """Read a whole file, keeping line terminators untranslated."""
        try:
            with path.open(encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as handle:
                return handle.readlines()
        except FileNotFoundError as e:
            raise FileNotFound(path) from e
        except PermissionError as e:
            raise PermissionDenied(path) from e
        except OSError as e:
            raise IoError(path, f"failed to read file: {e}") from e


class PreprocessorBuilder:
    """Fluent builder for ShellPreprocessor.

    Example:
        preprocessor = PreprocessorBuilder().debug_mode(True).base_directory("scripts").build()
    """

    def __init__(self) -> None:
        self._debug_mode = False
        self._max_include_depth = DEFAULT_MAX_INCLUDE_DEPTH
        self._base_directory: Path | None = None

    def debug_mode(self, enabled: bool) -> PreprocessorBuilder:
        self._debug_mode = enabled
        return self

    def max_include_depth(self, depth: int) -> PreprocessorBuilder:
        self._max_include_depth = depth
        return self

    def base_directory(self, path: str | Path) -> PreprocessorBuilder:
        self._base_directory = Path(path)
        return self

    def build(self) -> ShellPreprocessor:
        """Build the preprocessor.

        Raises:
            ValueError: If max_include_depth is not a positive integer.
        """
        config = ProcessingConfig(
            debug_mode=self._debug_mode,
            max_include_depth=self._max_include_depth,
            base_directory=self._base_directory,
        )
        return ShellPreprocessor(config)
