"""Tests for routedoc.output -- stream discipline, formats, tree rendering."""

from __future__ import annotations

import json

import pytest

from routedoc.generator import build_tree, initialize_document, make_request
from routedoc.models import ExportConfig
from routedoc.output import (
    OutputFormat,
    OutputManager,
    error,
    get_output,
    info,
    reset_output,
    set_output,
)


@pytest.fixture
def document(make_route):
    doc = initialize_document(ExportConfig(collection_name="Shop"))
    build_tree(doc, ["users", "orders"], make_request(make_route("o", name="users.orders.show"), "GET", {}))
    build_tree(doc, ["users"], make_request(make_route("u", name="users.store"), "POST", {}))
    return doc


class TestFormatResolution:
    def test_auto_is_plain_when_not_a_tty(self) -> None:
        assert OutputManager().format == OutputFormat.PLAIN

    def test_explicit_format(self) -> None:
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        OutputManager().error("bad")
        assert capsys.readouterr().err == "Error: bad\n"


class TestStreams:
    def test_diagnostics_go_to_stderr(self, plain_output: OutputManager, capsys) -> None:
        plain_output.info("hello")
        plain_output.warning("careful")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "hello\nWarning: careful\n"

    def test_quiet_suppresses_info_not_errors(self, capsys) -> None:
        output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        output.info("hidden")
        output.success("hidden")
        output.suggest("hidden")
        output.error("shown")
        assert capsys.readouterr().err == "Error: shown\n"

    def test_debug_only_when_verbose(self, capsys) -> None:
        OutputManager(no_color=True).debug("nope")
        OutputManager(no_color=True, verbose=True).debug("yes")
        assert capsys.readouterr().err == "[debug] yes\n"


class TestData:
    def test_plain_table(self, plain_output: OutputManager, capsys) -> None:
        plain_output.print_table(["Method", "URI"], [["GET", "/users"]])
        assert capsys.readouterr().out == "Method\tURI\nGET\t/users\n"

    def test_json_table(self, json_output: OutputManager, capsys) -> None:
        json_output.print_table(["Method", "URI"], [["GET", "/users"]])
        assert json.loads(capsys.readouterr().out) == [{"Method": "GET", "URI": "/users"}]

    def test_print_json_plain(self, plain_output: OutputManager, capsys) -> None:
        plain_output.print_json({"a": 1})
        assert json.loads(capsys.readouterr().out) == {"a": 1}


class TestTree:
    def test_plain_tree(self, plain_output: OutputManager, document, capsys) -> None:
        plain_output.print_tree(document)
        assert capsys.readouterr().out.splitlines() == [
            "Shop",
            "  users/",
            "    orders/",
            "      GET users.orders.show",
            "    POST users.store",
        ]

    def test_json_tree(self, json_output: OutputManager, document, capsys) -> None:
        json_output.print_tree(document)
        items = json.loads(capsys.readouterr().out)
        assert items[0]["name"] == "users"
        assert items[0]["item"][1]["request"]["method"] == "POST"

    def test_rich_tree(self, document, capsys) -> None:
        output = OutputManager(format=OutputFormat.RICH, no_color=True)
        output.print_tree(document)
        out = capsys.readouterr().out
        assert "users/" in out
        assert "users.orders.show" in out


class TestGlobalInstance:
    def test_lazy_default(self) -> None:
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_module_helpers_use_installed_manager(self, capsys) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        info("from helper")
        error("failed")
        assert capsys.readouterr().err == "from helper\nError: failed\n"
