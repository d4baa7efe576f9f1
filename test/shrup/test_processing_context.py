"""
Unit tests for ProcessingConfig and ProcessingContext.

Tests configuration validation and the include-chain bookkeeping used for
cycle detection and depth limiting.
"""

from pathlib import Path

import pytest

from shrup.errors import CircularDependency, MaxDepthExceeded
from shrup.processing_context import ProcessingConfig, ProcessingContext

A = Path("/project/a.sh")
B = Path("/project/b.sh")
C = Path("/project/c.sh")


@pytest.mark.preprocessor
class TestProcessingConfig:
    """Test ProcessingConfig defaults and validation."""

    def test_defaults(self) -> None:
        """Test default configuration values."""
        config = ProcessingConfig()

        assert config.debug_mode is False
        assert config.max_include_depth == 100
        assert config.base_directory is None

    def test_string_base_directory_is_converted(self) -> None:
        """Test base_directory given as a string becomes a Path."""
        config = ProcessingConfig(base_directory="scripts")  # type: ignore[arg-type]

        assert config.base_directory == Path("scripts")

    @pytest.mark.parametrize("depth", [0, -1])
    def test_non_positive_depth_rejected(self, depth: int) -> None:
        """Test max_include_depth must be positive."""
        with pytest.raises(ValueError):
            ProcessingConfig(max_include_depth=depth)

    def test_non_integer_depth_rejected(self) -> None:
        """Test max_include_depth must be an integer."""
        with pytest.raises(ValueError):
            ProcessingConfig(max_include_depth=2.5)  # type: ignore[arg-type]


@pytest.mark.preprocessor
class TestProcessingContextStack:
    """Test enter/leave bookkeeping."""

    def test_starts_empty(self) -> None:
        """Test a new context has depth 0."""
        context = ProcessingContext(ProcessingConfig())

        assert context.depth == 0
        assert context.stack == ()

    def test_enter_and_leave(self) -> None:
        """Test enter pushes and leave pops in order."""
        context = ProcessingContext(ProcessingConfig())

        context.enter(A)
        context.enter(B)
        assert context.depth == 2
        assert context.stack == (A, B)
        assert context.is_active(B)

        context.leave()
        assert context.stack == (A,)
        assert not context.is_active(B)
        assert context.is_active(A)

        context.leave()
        assert context.depth == 0
        assert not context.is_active(A)

    def test_reenter_after_leave(self) -> None:
        """Test a file may be entered again once it has been left."""
        context = ProcessingContext(ProcessingConfig())

        context.enter(A)
        context.enter(B)
        context.leave()
        context.enter(B)

        assert context.stack == (A, B)


@pytest.mark.preprocessor
class TestProcessingContextCycles:
    """Test circular dependency detection."""

    def test_self_include(self) -> None:
        """Test entering the same file twice."""
        context = ProcessingContext(ProcessingConfig())
        context.enter(A)

        with pytest.raises(CircularDependency) as exc_info:
            context.enter(A)

        assert exc_info.value.path == A
        assert exc_info.value.chain == (A, A)

    def test_chain_reported(self) -> None:
        """Test the error carries the full chain plus the repeated path."""
        context = ProcessingContext(ProcessingConfig())
        context.enter(A)
        context.enter(B)
        context.enter(C)

        with pytest.raises(CircularDependency) as exc_info:
            context.enter(B)

        assert exc_info.value.chain == (A, B, C, B)
        assert f"{A} -> {B} -> {C} -> {B}" in str(exc_info.value)

    def test_failed_enter_leaves_stack_untouched(self) -> None:
        """Test a rejected enter does not modify the chain."""
        context = ProcessingContext(ProcessingConfig())
        context.enter(A)

        with pytest.raises(CircularDependency):
            context.enter(A)

        assert context.stack == (A,)


@pytest.mark.preprocessor
class TestProcessingContextDepth:
    """Test maximum depth enforcement."""

    def test_depth_limit(self) -> None:
        """Test the stack may reach but not exceed max_include_depth."""
        context = ProcessingContext(ProcessingConfig(max_include_depth=2))
        context.enter(A)
        context.enter(B)

        with pytest.raises(MaxDepthExceeded) as exc_info:
            context.enter(C)

        assert exc_info.value.max_depth == 2
        assert exc_info.value.path == C
        assert context.stack == (A, B)

    def test_cycle_reported_before_depth(self) -> None:
        """Test a repeated path at the depth limit is reported as a cycle."""
        context = ProcessingContext(ProcessingConfig(max_include_depth=1))
        context.enter(A)

        with pytest.raises(CircularDependency):
            context.enter(A)


@pytest.mark.preprocessor
class TestProcessingContextIncluding:
    """Test the including() context manager."""

    def test_including_pushes_and_pops(self) -> None:
        """Test the path is active only inside the block."""
        context = ProcessingContext(ProcessingConfig())

        with context.including(A):
            assert context.stack == (A,)

        assert context.stack == ()

    def test_including_pops_on_error(self) -> None:
        """Test leave() runs when the block raises."""
        context = ProcessingContext(ProcessingConfig())

        with pytest.raises(RuntimeError):
            with context.including(A):
                raise RuntimeError("boom")

        assert context.stack == ()
        assert not context.is_active(A)

    def test_including_does_not_pop_when_enter_fails(self) -> None:
        """Test a rejected enter does not pop the outer entry."""
        context = ProcessingContext(ProcessingConfig())
        context.enter(A)

        with pytest.raises(CircularDependency):
            with context.including(A):
                pass

        assert context.stack == (A,)
