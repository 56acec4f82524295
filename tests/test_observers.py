"""Observer registry tests."""

from flagmirror import FlagState, Observers, SyncEvent


class _Recorder:
    def __init__(self, name: str, log: list[tuple[str, SyncEvent]]) -> None:
        self.name = name
        self.log = log

    def handle(self, event: SyncEvent) -> None:
        self.log.append((self.name, event))


class _Failing:
    def handle(self, event: SyncEvent) -> None:
        raise RuntimeError("observer broke")


def make_event() -> SyncEvent:
    return SyncEvent(project_key="proj", all_flags_state={"f": FlagState(value=1, version=1)})


def test_notify_in_registration_order() -> None:
    log: list[tuple[str, SyncEvent]] = []
    observers = Observers()
    observers.register_observer(_Recorder("first", log))
    observers.register_observer(_Recorder("second", log))
    event = make_event()

    observers.notify(event)

    assert [name for name, _ in log] == ["first", "second"]
    assert all(received is event for _, received in log)


def test_failing_observer_does_not_stop_delivery() -> None:
    log: list[tuple[str, SyncEvent]] = []
    observers = Observers()
    observers.register_observer(_Recorder("before", log))
    observers.register_observer(_Failing())
    observers.register_observer(_Recorder("after", log))

    observers.notify(make_event())

    assert [name for name, _ in log] == ["before", "after"]


def test_notify_without_observers() -> None:
    # Should not raise
    Observers().notify(make_event())


def test_deregister_observer() -> None:
    log: list[tuple[str, SyncEvent]] = []
    observers = Observers()
    recorder = _Recorder("only", log)
    observers.register_observer(recorder)

    assert observers.deregister_observer(recorder) is True
    assert observers.deregister_observer(recorder) is False
    observers.notify(make_event())

    assert log == []
    assert len(observers) == 0


def test_registries_are_independent() -> None:
    log: list[tuple[str, SyncEvent]] = []
    a = Observers()
    b = Observers()
    a.register_observer(_Recorder("a", log))

    b.notify(make_event())

    assert log == []
