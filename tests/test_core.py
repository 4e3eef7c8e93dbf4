"""Tests for chronicler.core - the Chronicler facade."""

import asyncio

import pytest

from chronicler import (
    DIAGNOSTICS_GROUP,
    Chronicler,
    EventNotFound,
    LogEvent,
    MalformedKey,
    Severity,
    chronicle,
)


class TestLog:
    def test_logs_and_saves_by_default(self, chron, sink):
        chron.log("hello", "fun")
        assert sink.calls == [
            ("log", "hello(1414975166s 997ms)", "#ffffff on #5677fc", "fun")
        ]
        assert chron.get_log("hello") == LogEvent(
            id="hello", time=1414975166997.0, data="fun", level=Severity.LOG, group=""
        )

    def test_with_group(self, chron, sink):
        chron.log("cool:hello1", "fun")
        assert sink.calls[0][1] == "cool:hello1(1414975166s 997ms)"
        stored = chron.get_log("cool:hello1")
        assert (stored.group, stored.id) == ("cool", "hello1")

    def test_group_keyword(self, chron):
        chron.log("hello", group="cool")
        assert chron.get_log("cool:hello").group == "cool"

    def test_embedded_group_wins_over_keyword(self, chron):
        chron.log("cool:hello", group="other")
        assert chron.get_log("cool:hello").group == "cool"

    def test_no_console_with_level_change(self, chron, sink):
        chron.level = Severity.WARN
        event = chron.log("hello2", "fun")
        assert sink.calls == []
        assert chron.get_log("hello2") == event

    def test_empty_id_rejected(self, chron):
        with pytest.raises(MalformedKey):
            chron.log("")
        assert chron.history() == ()


class TestWarnAndError:
    def test_warn(self, chron, sink):
        chron.warn("warn", "fun")
        assert sink.calls == [
            ("warn", "warn(1414975166s 997ms)", "#ffffff on #ff9800", "fun")
        ]
        assert chron.get_log("warn").level is Severity.WARN

    def test_error(self, chron, sink):
        chron.error("errors", "fun")
        assert sink.calls == [
            ("error", "errors(1414975166s 997ms)", "#ffffff on #e51c23", "fun")
        ]
        assert chron.get_log("errors").level is Severity.ERROR

    def test_warn_threshold_still_shows_warn(self, chron, sink):
        chron.level = "warn"
        chron.warn("w")
        chron.log("l")
        assert [c[0] for c in sink.calls] == ["warn"]

    def test_error_threshold_hides_warn_shows_error(self, chron, sink):
        chron.level = Severity.ERROR
        chron.warn("w")
        chron.error("e")
        assert [c[0] for c in sink.calls] == ["error"]

    def test_none_threshold_hides_everything(self, chron, sink):
        chron.level = Severity.NONE
        chron.error("e")
        assert sink.calls == []
        assert chron.get_log("e").level is Severity.ERROR

    def test_custom_colors(self, sink, clock):
        chron = Chronicler(sink=sink, clock=clock, colors={"LOG": "black", "FONT": "white"})
        chron.log("a")
        assert sink.calls[0][2] == "white on black"


class TestCollisions:
    def test_duplicate_id_adds_diagnostic_error(self, chron, sink):
        first = chron.log("cool:dup", 1)
        second = chron.log("cool:dup", 2)

        history = chron.history()
        assert history[:2] == (first, second)
        assert len(history) == 3
        diagnostic = history[2]
        assert diagnostic.group == DIAGNOSTICS_GROUP
        assert diagnostic.level is Severity.ERROR
        assert chron.get_log(f"{DIAGNOSTICS_GROUP}:{diagnostic.id}") == diagnostic
        assert chron.get_log("cool:dup") == second

        # The diagnostic goes to the console like any other error
        assert sink.calls[-1][0] == "error"
        assert sink.calls[-1][3] == "ID `dup` is already used in group `cool`."


class TestLookups:
    def test_get_log_missing(self, chron):
        with pytest.raises(EventNotFound):
            chron.get_log("missing")

    def test_get_difference(self, chron, clock):
        clock.set(1000.0, 5000.0)
        chron.log("cool:time", "fun")
        chron.log("three:four", "fun")
        assert chron.get_difference("cool:time", "three:four") == "4s"
        assert chron.get_difference("three:four", "cool:time") == "4s"

    def test_get_difference_missing(self, chron):
        chron.log("a")
        with pytest.raises(EventNotFound):
            chron.get_difference("a", "b")


class TestShowGroup:
    def test_rows_in_time_order(self, chron, sink, clock):
        clock.set(1500.0, 1000.0, 1800.0)
        chron.log("g:second", "b")
        chron.log("g:first", "a")
        chron.warn("g:third", "c")

        rows = chron.show_group("g")

        assert sink.tables == [rows]
        assert [r["ID"] for r in rows] == ["first", "second", "third"]
        assert [r["Time"] for r in rows] == ["1s", "1s 500ms", "1s 800ms"]
        assert [r["Time Since Start"] for r in rows] == ["", "500ms", "800ms"]
        assert [r["Time Since Last"] for r in rows] == ["", "500ms", "300ms"]
        assert [r["Data"] for r in rows] == ["a", "b", "c"]
        assert rows[2]["Level"] is Severity.WARN

    def test_unknown_group(self, chron):
        with pytest.raises(EventNotFound):
            chron.show_group("nope")


class TestListen:
    def test_listener_runs_after_log_returns(self, chron):
        seen = []

        async def main():
            chron.listen(seen.append, group="g")
            event = chron.log("g:a")
            assert seen == []
            await asyncio.sleep(0)
            return event

        event = asyncio.run(main())
        assert seen == [event]

    def test_decorator_form(self, chron):
        seen = []

        @chron.listen(min_level=Severity.WARN)
        def on_warn(event):
            seen.append(event.id)

        chron.log("quiet")
        chron.warn("loud")
        chron.drain()
        assert seen == ["loud"]

    def test_diagnostic_reaches_error_listeners(self, chron):
        seen = []
        chron.listen(seen.append, min_level="error")
        chron.log("dup")
        chron.log("dup")
        chron.drain()
        assert [e.group for e in seen] == [DIAGNOSTICS_GROUP]

    def test_conjunctive_policy(self, sink, clock):
        chron = Chronicler(sink=sink, clock=clock, match="all")
        seen = []
        chron.listen(seen.append, group="db", min_level="warn")
        chron.log("db:a")
        chron.warn("web:b")
        chron.warn("db:c")
        chron.drain()
        assert [e.id for e in seen] == ["c"]

    def test_unlisten(self, chron):
        seen = []
        chron.listen(seen.append)
        chron.listen(seen.append, group="g")
        assert chron.unlisten(seen.append) == 2
        chron.log("g:a")
        chron.drain()
        assert seen == []


class TestClearAll:
    def test_clears_events_keeps_listeners(self, chron):
        seen = []
        chron.listen(seen.append)
        chron.log("before")
        chron.drain()
        chron.clear_all()

        with pytest.raises(EventNotFound):
            chron.get_log("before")
        assert chron.history() == ()

        chron.log("after")
        chron.drain()
        assert [e.id for e in seen] == ["before", "after"]

    def test_id_can_be_reused_after_clear(self, chron):
        chron.log("a")
        chron.clear_all()
        chron.log("a")
        assert len(chron.history()) == 1


def test_instances_are_independent(sink, clock):
    one = Chronicler(sink=sink, clock=clock)
    two = Chronicler(sink=sink, clock=clock)
    one.log("a")
    with pytest.raises(EventNotFound):
        two.get_log("a")


def test_default_instance(sink):
    original_sink = chronicle.sink
    chronicle.sink = sink
    try:
        chronicle.log("default:hello", "fun")
        assert chronicle.get_log("default:hello").data == "fun"
        assert chronicle.levels is Severity
        assert chronicle.default_colors["LOG"] == "#5677fc"
    finally:
        chronicle.clear_all()
        chronicle.level = Severity.LOG
        chronicle.sink = original_sink
