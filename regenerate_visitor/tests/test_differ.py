"""
Tests for structural equivalence between visitor models.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from regenerate_visitor.pipeline import equivalent, extract

VISITORS = Path(__file__).parent / "test_data" / "visitors"

OLD = """\
var antlr4 = require('antlr4/index');

V.visitExpr = function(ctx) {
  return 1;
};

V.visitStmt = function(ctx) {
  return 2;
};
"""


class TestEquivalent:
    """Tests for equivalent()."""

    def test_identical_files(self):
        assert equivalent(extract(OLD), extract(OLD))

    def test_whitespace_outside_bodies_is_ignored(self):
        """Scaffold changes alone never trigger a merge."""
        new = """\
var antlr4 = require('antlr4/index');
// regenerated


V.visitExpr = function(ctx) {
  return 1;
};
V.visitStmt = function(ctx) {
  return 2;
};


"""
        assert equivalent(extract(OLD), extract(new))

    def test_body_change(self):
        new = OLD.replace("return 2;", "return null;")
        assert not equivalent(extract(OLD), extract(new))

    def test_whitespace_inside_body_counts(self):
        new = OLD.replace("  return 2;", "    return 2;")
        assert not equivalent(extract(OLD), extract(new))

    def test_extra_body_line(self):
        new = OLD.replace("  return 2;", "  log();\n  return 2;")
        assert not equivalent(extract(OLD), extract(new))

    def test_different_stub_count(self):
        new = OLD + "\nV.visitBlock = function(ctx) {\n  return 3;\n};\n"
        assert not equivalent(extract(OLD), extract(new))
        assert not equivalent(extract(new), extract(OLD))

    def test_different_stub_names(self):
        new = OLD.replace("visitStmt", "visitBlock")
        assert not equivalent(extract(OLD), extract(new))

    def test_declaration_order_is_ignored(self):
        new = """\
var antlr4 = require('antlr4/index');

V.visitStmt = function(ctx) {
  return 2;
};

V.visitExpr = function(ctx) {
  return 1;
};
"""
        assert equivalent(extract(OLD), extract(new))

    def test_imports_are_ignored(self):
        new = OLD.replace("var antlr4 = require('antlr4/index');", "var antlr4 = require('antlr4');")
        assert equivalent(extract(OLD), extract(new))

    def test_edited_visitor_differs_from_generated(self):
        generated = extract((VISITORS / "ExprVisitor.generated.js").read_text())
        edited = extract((VISITORS / "ExprVisitor.edited.js").read_text())
        assert not equivalent(edited, generated)

    def test_empty_models(self):
        assert equivalent(extract(""), extract("// nothing here"))


if __name__ == "__main__":
    pytest.main([__file__])
