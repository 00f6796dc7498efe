import gc
import weakref

import pytest

from weakevents import (
    InvalidCallbackError,
    SubscriptionConstructionError,
    UnsupportedCallbackError,
    WeakEventSubscription,
)


class Recorder:
    def __init__(self, log: list) -> None:
        self.log = log

    def on_event(self, sender, args):
        self.log.append((sender, args))
        return args * 2


class Slotted:
    __slots__ = ("value",)

    def on_event(self, sender, args):
        pass


def test_subscription_forwards_to_live_instance():
    dummy_log = []
    recorder = Recorder(dummy_log)
    subscription = WeakEventSubscription(recorder.on_event)

    result = subscription.handler("sender", 21)

    assert result == 42
    assert dummy_log == [("sender", 21)]
    assert subscription.target is recorder
    assert subscription.is_alive


def test_subscription_is_callable():
    dummy_log = []
    recorder = Recorder(dummy_log)
    subscription = WeakEventSubscription(recorder.on_event)

    subscription(None, 1)

    assert dummy_log == [(None, 1)]


def test_subscription_handler_identity_is_stable():
    recorder = Recorder([])
    subscription = WeakEventSubscription(recorder.on_event)

    assert subscription.handler is subscription.handler


def test_subscription_does_not_keep_instance_alive():
    recorder = Recorder([])
    probe = weakref.ref(recorder)
    subscription = WeakEventSubscription(recorder.on_event)

    del recorder
    gc.collect()

    assert probe() is None
    assert subscription.target is None
    assert not subscription.is_alive


def test_dead_subscription_runs_unsubscribe_action_once():
    dummy_log = []
    calls = []
    recorder = Recorder(dummy_log)
    subscription = WeakEventSubscription(recorder.on_event, calls.append)

    del recorder
    gc.collect()

    subscription.handler(None, 1)
    subscription.handler(None, 2)
    subscription.handler(None, 3)

    assert dummy_log == []
    assert calls == [subscription.handler]


def test_dead_subscription_without_action_is_noop():
    dummy_log = []
    recorder = Recorder(dummy_log)
    subscription = WeakEventSubscription(recorder.on_event)

    del recorder
    gc.collect()

    assert subscription.handler(None, 1) is None
    assert dummy_log == []


def test_unsubscribe_action_is_cleared_even_if_it_raises():
    calls = []

    def failing_action(handler):
        calls.append(handler)
        raise RuntimeError("unsubscribe failed")

    recorder = Recorder([])
    subscription = WeakEventSubscription(recorder.on_event, failing_action)
    del recorder
    gc.collect()

    with pytest.raises(RuntimeError, match="unsubscribe failed"):
        subscription.handler(None, 1)
    subscription.handler(None, 2)

    assert len(calls) == 1


def test_subscription_rejects_none():
    with pytest.raises(InvalidCallbackError):
        WeakEventSubscription(None)


def test_subscription_rejects_free_function():
    def handler(sender, args):
        pass

    with pytest.raises(UnsupportedCallbackError):
        WeakEventSubscription(handler)


def test_subscription_rejects_mismatched_owner_type():
    recorder = Recorder([])

    with pytest.raises(SubscriptionConstructionError):
        WeakEventSubscription(recorder.on_event, owner_type=Slotted)


def test_subscription_requires_weak_referenceable_owner():
    with pytest.raises(SubscriptionConstructionError, match="__weakref__"):
        WeakEventSubscription(Slotted().on_event)


def test_subscription_repr_reports_state():
    recorder = Recorder([])
    subscription = WeakEventSubscription(recorder.on_event)
    assert repr(subscription) == "<WeakEventSubscription Recorder.on_event (alive)>"

    del recorder
    gc.collect()
    assert repr(subscription) == "<WeakEventSubscription Recorder.on_event (dead)>"


def test_live_owner_with_reassigned_class_is_still_called():
    dummy_log = []
    calls = []

    class Unrelated:
        pass

    recorder = Recorder(dummy_log)
    subscription = WeakEventSubscription(recorder.on_event, calls.append)
    recorder.__class__ = Unrelated

    subscription.handler("sender", 3)

    assert dummy_log == [("sender", 3)]
    assert calls == []
    assert subscription.is_alive
