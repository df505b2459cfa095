"""Tests for routedoc.generator.state -- the compilation flag."""

from __future__ import annotations

import threading

import pytest

from routedoc.generator.state import compilation, finished, is_compiling, start_compilation


class TestCompilationFlag:
    def test_default_is_false(self) -> None:
        assert is_compiling() is False

    def test_start_and_finish(self) -> None:
        token = start_compilation()
        assert is_compiling() is True
        finished(token)
        assert is_compiling() is False

    def test_finish_without_token(self) -> None:
        start_compilation()
        finished()
        assert is_compiling() is False

    def test_context_manager(self) -> None:
        with compilation():
            assert is_compiling()
        assert not is_compiling()

    def test_reset_after_error(self) -> None:
        with pytest.raises(RuntimeError):
            with compilation():
                raise RuntimeError("boom")
        assert not is_compiling()

    def test_nested_scopes_unwind(self) -> None:
        with compilation():
            with compilation():
                assert is_compiling()
            assert is_compiling()
        assert not is_compiling()

    def test_flag_is_not_shared_across_threads(self) -> None:
        seen: list[bool] = []
        with compilation():
            worker = threading.Thread(target=lambda: seen.append(is_compiling()))
            worker.start()
            worker.join()
        assert seen == [False]
