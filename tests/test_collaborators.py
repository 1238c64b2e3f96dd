"""
Tests for the printer's collaborators: store, symbols, positions,
cancellation, terminal helpers and errors.
"""

import threading

import pytest

from lazyrepr import (
    CancellationToken, EvalError, Interrupted, InfiniteRecursionError,
    AbortError, PosTable, NO_POS, Store, StorePath, SymbolTable,
)
from lazyrepr.ansi import ANSI_RED, ANSI_NORMAL, filter_ansi_escapes, pluralize
from lazyrepr.positions import Pos
from lazyrepr.symbols import NO_SYMBOL

HASH = "0123456789abcdfghijklmnpqrsvwxyz"


class TestStore:
    """Test store path parsing and printing."""

    def test_parse(self):
        """Valid store paths are split into hash and name."""
        store = Store()
        sp = store.parse_store_path(f"/nix/store/{HASH}-hello-2.12")
        assert sp == StorePath(HASH, "hello-2.12")
        assert str(sp) == f"{HASH}-hello-2.12"

    def test_parse_subpath(self):
        """Paths below a store entry resolve to the entry."""
        store = Store()
        sp = store.parse_store_path(f"/nix/store/{HASH}-hello/bin/hello")
        assert sp.name == "hello"

    def test_print(self):
        """Printing prefixes the store directory."""
        store = Store("/gnu/store/")
        assert store.print_store_path(StorePath(HASH, "x")) == f"/gnu/store/{HASH}-x"

    def test_is_derivation(self):
        """.drv names are derivations."""
        assert StorePath(HASH, "a.drv").is_derivation
        assert not StorePath(HASH, "a").is_derivation

    @pytest.mark.parametrize("path", [
        "/tmp/foo",
        "/nix/store",
        "/nix/store/",
        "/nix/storefoo/x",
        "/nix/store/short-name",
        f"/nix/store/{HASH}",
        f"/nix/store/{HASH}-",
        f"/nix/store/{HASH}-bad name",
        f"/nix/store/{HASH.replace('0', 'e')}-x",
    ])
    def test_invalid(self, path):
        """Malformed or foreign paths are rejected."""
        with pytest.raises(ValueError):
            Store().parse_store_path(path)


class TestSymbolTable:
    """Test symbol interning."""

    def test_intern(self):
        """The same name yields the same symbol."""
        table = SymbolTable()
        a = table.create("a")
        assert table.create("a") == a
        assert table.create("b") != a
        assert table[a] == "a"
        assert "a" in table
        assert len(table) == 2

    def test_no_symbol_is_falsy(self):
        """The empty symbol is false, real symbols are true."""
        assert not NO_SYMBOL
        assert SymbolTable().create("x")


class TestPositions:
    """Test position interning and display."""

    def test_add(self):
        """Positions are looked up by index."""
        table = PosTable()
        idx = table.add(3, 4, "/a.nix")
        assert table[idx] == Pos(3, 4, "/a.nix")
        assert str(table[idx]) == "/a.nix:3:4"
        assert len(table) == 1

    def test_no_origin(self):
        """Inline source shows a placeholder origin."""
        assert str(Pos(1, 2)) == "«string»:1:2"

    def test_no_pos(self):
        """The reserved index prints as «none»."""
        assert str(PosTable()[NO_POS]) == "«none»"


class TestCancellationToken:
    """Test cooperative cancellation."""

    def test_check(self):
        """check() raises only after trigger()."""
        token = CancellationToken()
        token.check()
        token.trigger()
        assert token.is_set()
        with pytest.raises(Interrupted):
            token.check()
        token.clear()
        token.check()

    def test_cross_thread(self):
        """Another thread can trigger the token."""
        token = CancellationToken()
        thread = threading.Thread(target=token.trigger)
        thread.start()
        thread.join()
        assert token.is_set()

    def test_interrupted_is_not_eval_error(self):
        """Interrupts are never rendered as evaluation errors."""
        assert not issubclass(Interrupted, EvalError)


class TestAnsi:
    """Test terminal helpers."""

    def test_filter(self):
        """Color codes are removed, text is kept."""
        assert filter_ansi_escapes(f"{ANSI_RED}x{ANSI_NORMAL}y") == "xy"

    def test_filter_osc(self):
        """Operating system commands are removed."""
        assert filter_ansi_escapes("a\x1b]0;title\x07b") == "ab"

    def test_filter_plain(self):
        """Plain text is unchanged."""
        assert filter_ansi_escapes("/src/a.nix:1:2") == "/src/a.nix:1:2"

    def test_pluralize(self):
        """Singular only for exactly one."""
        assert pluralize(1, "item", "items") == "1 item"
        assert pluralize(2, "item", "items") == "2 items"
        assert pluralize(0, "item", "items") == "0 items"


class TestErrors:
    """Test the error hierarchy."""

    def test_msg_and_str(self):
        """msg() is the bare message, str() includes traces."""
        e = EvalError("boom", Pos(1, 1, "/a.nix"))
        e.add_trace(None, "while doing things")
        assert e.msg() == "boom"
        text = str(e)
        assert "error: boom" in text
        assert "/a.nix:1:1" in text
        assert "while doing things" in text

    def test_infinite_recursion_message(self):
        """Infinite recursion has a fixed message."""
        assert InfiniteRecursionError().msg() == "infinite recursion encountered"

    def test_abort_message(self):
        """Aborts quote the user's message."""
        assert "'stop'" in AbortError("stop").msg()
