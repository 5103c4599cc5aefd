from mr_bot.idempotency import RecentEventIds


def test_record_if_new():
    seen = RecentEventIds()
    assert seen.record_if_new("Ev1") is True
    assert seen.record_if_new("Ev1") is False
    assert seen.record_if_new("Ev2") is True


def test_oldest_ids_are_evicted():
    seen = RecentEventIds(capacity=2)
    for key in ("a", "b", "c"):
        seen.record_if_new(key)
    assert len(seen) == 2
    assert seen.record_if_new("a") is True
    assert seen.record_if_new("c") is False
