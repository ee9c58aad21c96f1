"""Tests for the pure Python Signal and ObservableProperty classes."""

from dynlist.core.signal import ObservableProperty, Signal


class TestSignal:
    def test_connect_and_emit(self):
        sig = Signal()
        received = []
        sig.connect(lambda v: received.append(v))

        sig.emit(42)

        assert received == [42]

    def test_disconnect(self):
        sig = Signal()
        received = []
        handler = lambda v: received.append(v)
        sig.connect(handler)
        sig.emit(1)
        sig.disconnect(handler)
        sig.emit(2)

        assert received == [1]

    def test_disconnect_missing_handler_is_tolerated(self):
        sig = Signal()

        assert sig.disconnect(lambda: None) is False

    def test_disconnect_reports_removal(self):
        sig = Signal()
        handler = lambda: None
        sig.connect(handler)

        assert sig.disconnect(handler) is True
        assert sig.disconnect(handler) is False

    def test_duplicate_connect_ignored(self):
        sig = Signal()
        received = []
        handler = lambda v: received.append(v)
        sig.connect(handler)
        sig.connect(handler)

        sig.emit(1)

        assert received == [1]

    def test_emit_multiple_args(self):
        sig = Signal()
        received = []
        sig.connect(lambda *args: received.append(args))

        sig.emit(1, "two", 3.0)

        assert received == [(1, "two", 3.0)]

    def test_handler_exception_does_not_break_others(self):
        sig = Signal()
        received = []

        def bad_handler(v):
            raise RuntimeError("boom")

        sig.connect(bad_handler)
        sig.connect(lambda v: received.append(v))

        sig.emit(1)

        assert received == [1]

    def test_handler_may_disconnect_itself_during_emit(self):
        sig = Signal()
        calls = []

        def once(v):
            calls.append(v)
            sig.disconnect(once)

        sig.connect(once)
        sig.emit(1)
        sig.emit(2)

        assert calls == [1]


class TestObservableProperty:
    def test_initial_value(self):
        assert ObservableProperty(10).value == 10

    def test_changed_emits_on_new_value(self):
        prop = ObservableProperty(0)
        changes = []
        prop.changed.connect(lambda new, old: changes.append((new, old)))

        prop.value = 5
        prop.value = 5
        prop.value = 7

        assert changes == [(5, 0), (7, 5)]
