from __future__ import annotations

import threading
import time

import pytest

from rainbow_tags.config import ConfigError, RainbowConfig
from rainbow_tags.decorations import DecorationPalette
from rainbow_tags.exceptions import DecorationDisposedError
from rainbow_tags.models import Position, Range
from rainbow_tags.positions import LineIndex
from rainbow_tags.scheduler import Debouncer
from rainbow_tags.session import Document, HighlightSession

# Long enough that timers never fire before `flush` in tests
MANUAL = 60.0


def _manual_config(**overrides) -> RainbowConfig:
    return RainbowConfig(colors=("red", "blue"), debounce_delay=MANUAL, **overrides)


def test_debouncer_runs_only_latest_callback():
    calls = []
    done = threading.Event()
    debouncer = Debouncer(0.05)

    debouncer.schedule(lambda: calls.append("first"))
    debouncer.schedule(lambda: (calls.append("second"), done.set()))

    assert done.wait(2)
    time.sleep(0.1)
    assert calls == ["second"]
    assert debouncer.pending is False


def test_debouncer_cancel_and_flush():
    calls = []
    debouncer = Debouncer(MANUAL)

    assert debouncer.flush() is False
    assert debouncer.cancel() is False

    debouncer.schedule(lambda: calls.append(1))
    assert debouncer.pending is True
    assert debouncer.cancel() is True
    assert debouncer.flush() is False

    debouncer.schedule(lambda: calls.append(2))
    assert debouncer.flush() is True
    assert debouncer.pending is False
    assert calls == [2]


def test_palette_applies_every_index(target):
    text = "<a><b></b></a>"
    with DecorationPalette(("red", "blue", "green")) as palette:
        palette.apply(target, {0: [(0, 1)]}, LineIndex(text))

    assert [(decoration.index, ranges) for decoration, ranges in target.calls] == [
        (0, [Range(Position(0, 0), Position(0, 1))]),
        (1, []),
        (2, []),
    ]
    assert palette.disposed is True
    assert all(decoration.disposed for decoration in palette.decorations)


def test_disposed_palette_cannot_apply(target):
    palette = DecorationPalette(("red",))
    palette.dispose()
    palette.dispose()

    with pytest.raises(DecorationDisposedError):
        palette.apply(target, {}, LineIndex(""))


def test_session_applies_ranges_on_flush(target):
    with HighlightSession(target, _manual_config()) as session:
        session.open_document("<a>\n<b></b></a>", "html")

        assert target.calls == []
        assert session.pending is True
        assert session.flush() is True

    latest = target.latest()
    assert latest[0][0] == Range(Position(0, 0), Position(0, 1))
    assert latest[1] == [
        Range(Position(1, 0), Position(1, 1)),
        Range(Position(1, 1), Position(1, 2)),
        Range(Position(1, 2), Position(1, 3)),
        Range(Position(1, 3), Position(1, 5)),
        Range(Position(1, 5), Position(1, 6)),
        Range(Position(1, 6), Position(1, 7)),
    ]
    assert len(latest[0]) == 6


def test_session_coalesces_edits(target):
    with HighlightSession(target, _manual_config()) as session:
        session.open_document("<a>", "typescriptreact")
        session.document_changed("<a><b>")
        session.document_changed("<a></a>")
        session.flush()

        assert session.document == Document(text="<a></a>", language_id="typescriptreact")

    assert len(target.calls) == 2
    assert len(target.latest()[0]) == 6
    assert target.latest()[1] == []


def test_session_skips_unsupported_languages(target):
    with HighlightSession(target, _manual_config()) as session:
        session.open_document("<a></a>", "python")
        session.flush()

    assert target.calls == []


def test_session_respects_ignored_tags(target):
    with HighlightSession(target, _manual_config(ignored_tags=("a",))) as session:
        session.open_document("<a><b/></a>", "html")
        session.flush()

    assert len(target.latest()[0]) == 3
    assert target.latest()[1] == []


def test_update_configuration_replaces_palette(target):
    with HighlightSession(target, _manual_config()) as session:
        session.open_document("<a><b><c></c></b></a>", "javascriptreact")
        session.flush()
        first_decorations = [decoration for decoration, _ in target.calls]

        session.update_configuration(
            RainbowConfig(colors=("red", "blue", "green"), debounce_delay=MANUAL)
        )
        assert all(decoration.disposed for decoration in first_decorations)
        assert session.pending is True

        target.calls.clear()
        session.flush()

    assert sorted(decoration.index for decoration, _ in target.calls) == [0, 1, 2]
    assert all(len(ranges) == 6 for ranges in target.latest().values())


def test_update_configuration_validates(target):
    with HighlightSession(target, _manual_config()) as session:
        with pytest.raises(ConfigError):
            session.update_configuration(RainbowConfig(colors=("nope",)))


def test_empty_palette_sets_no_decorations(target):
    with HighlightSession(target, RainbowConfig(colors=(), debounce_delay=MANUAL)) as session:
        session.open_document("<a></a>", "html")
        session.flush()

    assert target.calls == []


def test_document_changed_requires_open_document(target):
    with HighlightSession(target, _manual_config()) as session:
        with pytest.raises(ValueError):
            session.document_changed("<a>")


def test_closed_session_rejects_updates(target):
    session = HighlightSession(target, _manual_config())
    session.open_document("<a></a>", "html")
    session.close()
    session.close()

    assert session.flush() is False
    assert target.calls == []
    with pytest.raises(DecorationDisposedError):
        session.document_changed("<b></b>")
    with pytest.raises(DecorationDisposedError):
        session.trigger_update()


def test_session_updates_after_debounce_delay(target):
    config = RainbowConfig(colors=("red",), debounce_delay=0.01)
    with HighlightSession(target, config) as session:
        session.open_document("<p></p>", "html")

        assert target.applied.wait(2)

    assert len(target.latest()[0]) == 6


def test_target_can_edit_document_while_decorations_apply():
    class EditingTarget:
        def __init__(self):
            self.session = None
            self.calls = 0

        def set_decorations(self, decoration, ranges):
            self.calls += 1
            if self.calls == 1:
                self.session.document_changed("<b></b>")

    editing_target = EditingTarget()
    with HighlightSession(editing_target, _manual_config()) as session:
        editing_target.session = session
        session.open_document("<a></a>", "html")

        worker = threading.Thread(target=session.flush)
        worker.start()
        worker.join(2)

        assert not worker.is_alive()
        assert editing_target.calls == 2
        assert session.document.text == "<b></b>"
        assert session.pending is True
