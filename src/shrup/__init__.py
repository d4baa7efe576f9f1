"""Shell script preprocessor.

This package inlines C-preprocessor-style ``#include`` directives in
shell scripts into a single output script.
"""

from shrup.errors import (
    CircularDependency,
    FileNotFound,
    InvalidIncludeDirective,
    IoError,
    MaxDepthExceeded,
    PermissionDenied,
    PreprocessorError,
)
from shrup.include_directive import IncludeDirective, IncludeQuoteType
from shrup.include_directive_parser import IncludeDirectiveParser
from shrup.path_resolver import PathResolver
from shrup.preprocessor import PreprocessorBuilder, ShellPreprocessor
from shrup.processing_context import ProcessingConfig, ProcessingContext

__version__ = "0.1.0"

__all__ = [
    "CircularDependency",
    "FileNotFound",
    "IncludeDirective",
    "IncludeDirectiveParser",
    "IncludeQuoteType",
    "InvalidIncludeDirective",
    "IoError",
    "MaxDepthExceeded",
    "PathResolver",
    "PermissionDenied",
    "PreprocessorBuilder",
    "PreprocessorError",
    "ProcessingConfig",
    "ProcessingContext",
    "ShellPreprocessor",
]
