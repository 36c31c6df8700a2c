#!/usr/bin/env python3

import json
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from regenerate_visitor.pipeline import AntlrGenerator
from regenerate_visitor.regenerate_visitor import merge_visitor, regenerate_visitor

TEST_DATA = Path(__file__).parent / "test_data"
VISITORS = TEST_DATA / "visitors"


def read_visitor(name):
    return (VISITORS / name).read_text(encoding="utf-8")


def fake_generate(content):
    def generate(self, grammar_path):
        (grammar_path.parent / f"{grammar_path.stem}Visitor.js").write_text(content)

    return generate


class TestRegenerateVisitorCommand:
    """Test cases for the regenerate_visitor command"""

    def test_missing_argument(self):
        result = CliRunner().invoke(regenerate_visitor, [])
        assert result.exit_code == 1
        assert "ArgumentError: Not enough arguments" in result.output

    def test_wrong_extension(self, tmp_path):
        grammar = tmp_path / "Expr.txt"
        grammar.write_text("grammar Expr;\n")

        result = CliRunner().invoke(regenerate_visitor, [str(grammar)])

        assert result.exit_code == 1
        assert "ExtensionError: Expected extension .g4 but got .txt" in result.output

    def test_regenerate_and_merge(self, tmp_path, monkeypatch):
        monkeypatch.setattr(AntlrGenerator, "generate", fake_generate(read_visitor("ExprVisitor.regenerated.js")))
        shutil.copy(TEST_DATA / "Expr.g4", tmp_path / "Expr.g4")
        visitor = tmp_path / "ExprVisitor.js"
        visitor.write_text(read_visitor("ExprVisitor.edited.js"))

        result = CliRunner().invoke(regenerate_visitor, [str(tmp_path / "Expr.g4")])

        assert result.exit_code == 0, result.output
        assert "added:   ExprVisitor.prototype.visitBlock" in result.output
        assert "dropped: ExprVisitor.prototype.visitStmt" in result.output
        assert result.output.rstrip().endswith(": merged")
        assert visitor.read_text() == read_visitor("ExprVisitor.merged.js")

    def test_generation_failure_exits_non_zero(self, tmp_path):
        shutil.copy(TEST_DATA / "Expr.g4", tmp_path / "Expr.g4")
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"java": str(tmp_path / "no-java")}))

        result = CliRunner().invoke(regenerate_visitor, ["--config", str(config), str(tmp_path / "Expr.g4")])

        assert result.exit_code == 1
        assert "GenerationError:" in result.output

    def test_invalid_config(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text("{not json")

        result = CliRunner().invoke(regenerate_visitor, ["-c", str(config), "Expr.g4"])

        assert result.exit_code == 1
        assert "ArgumentError: Invalid config file" in result.output

    def test_null_output_section(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"output": None}))

        result = CliRunner().invoke(regenerate_visitor, ["-c", str(config), "Expr.g4"])

        assert result.exit_code == 1
        assert "ArgumentError: Config 'output' must be a JSON object" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_config_that_is_not_an_object(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text("[]")

        result = CliRunner().invoke(regenerate_visitor, ["-c", str(config), "Expr.g4"])

        assert result.exit_code == 1
        assert "ArgumentError: Invalid config file" in result.output
        assert "expected a JSON object, got list" in result.output


class TestMergeVisitorCommand:
    """Test cases for the merge_visitor command"""

    def test_merge_in_place(self, tmp_path):
        old = tmp_path / "ExprVisitor.js.old"
        new = tmp_path / "ExprVisitor.js"
        old.write_text(read_visitor("ExprVisitor.edited.js"))
        new.write_text(read_visitor("ExprVisitor.regenerated.js"))

        result = CliRunner().invoke(merge_visitor, [str(old), str(new)])

        assert result.exit_code == 0, result.output
        assert "Kept 2 existing stub bodies" in result.output
        assert "import:  var scope = require('./scope');" in result.output
        assert new.read_text() == read_visitor("ExprVisitor.merged.js")

    def test_merge_to_output(self, tmp_path):
        old = tmp_path / "ExprVisitor.js.old"
        new = tmp_path / "ExprVisitor.js"
        output = tmp_path / "merged" / "ExprVisitor.js"
        old.write_text(read_visitor("ExprVisitor.edited.js"))
        new.write_text(read_visitor("ExprVisitor.regenerated.js"))

        result = CliRunner().invoke(merge_visitor, [str(old), str(new), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.read_text() == read_visitor("ExprVisitor.merged.js")
        assert new.read_text() == read_visitor("ExprVisitor.regenerated.js")

    def test_nothing_to_merge(self, tmp_path):
        old = tmp_path / "ExprVisitor.js.old"
        new = tmp_path / "ExprVisitor.js"
        old.write_text(read_visitor("ExprVisitor.generated.js"))
        new.write_text(read_visitor("ExprVisitor.generated.js"))

        result = CliRunner().invoke(merge_visitor, [str(old), str(new)])

        assert result.exit_code == 0
        assert "merge skipped" in result.output

    def test_invalid_stub_pattern(self, tmp_path):
        old = tmp_path / "ExprVisitor.js.old"
        new = tmp_path / "ExprVisitor.js"
        old.write_text(read_visitor("ExprVisitor.edited.js"))
        new.write_text(read_visitor("ExprVisitor.regenerated.js"))
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"stub_pattern": "("}))

        result = CliRunner().invoke(merge_visitor, ["-c", str(config), str(old), str(new)])

        assert result.exit_code == 1
        assert "ArgumentError: Invalid stub_pattern" in result.output
        assert new.read_text() == read_visitor("ExprVisitor.regenerated.js")

    def test_missing_file_is_a_usage_error(self, tmp_path):
        result = CliRunner().invoke(merge_visitor, [str(tmp_path / "a.js"), str(tmp_path / "b.js")])
        assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__])
