"""Tests for derivation and ranking (deterministic total order)."""

from datetime import timedelta

from salespulse.engine.ranking import with_derived, derive_all, sort_tasks, rank_tasks
from salespulse.models.task import DerivedTask, TaskPriority


class TestWithDerived:
    """Test with_derived() projection."""

    def test_attaches_roi_and_weight(self, make_task):
        task = make_task(revenue=1000, time_taken=3, priority=TaskPriority.HIGH)

        derived = with_derived(task)

        assert isinstance(derived, DerivedTask)
        assert derived.roi == 333.33
        assert derived.priority_weight == 3
        assert derived.id == task.id
        assert derived.created_at == task.created_at

    def test_does_not_mutate_input(self, make_task):
        task = make_task(revenue=100, time_taken=0)
        before = task.model_dump()

        derived = with_derived(task)

        assert task.model_dump() == before
        assert not hasattr(task, "roi")
        assert derived.roi is None

    def test_is_pure(self, make_task):
        task = make_task(revenue=77, time_taken=7)
        assert with_derived(task).roi == with_derived(task).roi

    def test_rederiving_a_derived_task(self, make_task):
        derived = with_derived(make_task(revenue=10, time_taken=2))
        assert with_derived(derived).roi == 5.0


class TestSortTasks:
    """Test sort_tasks() key precedence."""

    def test_roi_descending(self, make_task):
        low = make_task(title="low", revenue=100, time_taken=10)
        high = make_task(title="high", revenue=1000, time_taken=1)
        mid = make_task(title="mid", revenue=500, time_taken=5)

        ranked = rank_tasks([low, high, mid])

        assert [t.title for t in ranked] == ["high", "mid", "low"]

    def test_null_roi_sorts_last(self, make_task):
        invalid = make_task(title="invalid", revenue=1_000_000, time_taken=0)
        negative = make_task(title="negative", revenue=-100, time_taken=1)
        positive = make_task(title="positive", revenue=1, time_taken=1)

        ranked = rank_tasks([invalid, negative, positive])

        assert [t.title for t in ranked] == ["positive", "negative", "invalid"]

    def test_priority_breaks_roi_ties(self, make_task):
        low = make_task(title="a", priority=TaskPriority.LOW)
        high = make_task(title="b", priority=TaskPriority.HIGH)
        medium = make_task(title="c", priority=TaskPriority.MEDIUM)

        ranked = rank_tasks([low, high, medium])

        assert [t.priority for t in ranked] == ["High", "Medium", "Low"]

    def test_newer_first_on_ties(self, make_task, now):
        older = make_task(title="older", created_at=now - timedelta(days=2))
        newer = make_task(title="newer", created_at=now)

        ranked = rank_tasks([older, newer])

        assert [t.title for t in ranked] == ["newer", "older"]

    def test_title_then_id(self, make_task):
        b = make_task(id="1", title="Bravo")
        a2 = make_task(id="b", title="Alpha")
        a1 = make_task(id="a", title="Alpha")

        ranked = rank_tasks([b, a2, a1])

        assert [(t.title, t.id) for t in ranked] == [("Alpha", "a"), ("Alpha", "b"), ("Bravo", "1")]

    def test_title_ignores_case(self, make_task):
        banana = make_task(title="Banana")
        apple = make_task(title="apple")
        cherry = make_task(title="Cherry")

        ranked = rank_tasks([banana, cherry, apple])

        assert [t.title for t in ranked] == ["apple", "Banana", "Cherry"]

    def test_id_ignores_case(self, make_task):
        zed = make_task(id="Zed", title="Same")
        alpha = make_task(id="alpha", title="Same")

        ranked = rank_tasks([zed, alpha])

        assert [t.id for t in ranked] == ["alpha", "Zed"]

    def test_lowercase_first_when_only_case_differs(self, make_task):
        upper = make_task(id="2", title="Acme")
        lower = make_task(id="1", title="acme")

        assert [t.title for t in rank_tasks([upper, lower])] == ["acme", "Acme"]

    def test_does_not_mutate_input(self, make_task):
        derived = derive_all([make_task(revenue=r) for r in (10, 30, 20)])
        original = list(derived)

        ranked = sort_tasks(derived)

        assert derived == original
        assert ranked is not derived

    def test_permutation_and_idempotent(self, make_task, now):
        tasks = [
            make_task(revenue=r, time_taken=t, priority=p, created_at=now - timedelta(hours=h))
            for r, t, p, h in [
                (100, 1, TaskPriority.LOW, 1),
                (100, 1, TaskPriority.HIGH, 2),
                (0, 0, TaskPriority.HIGH, 3),
                (50, 2, TaskPriority.MEDIUM, 1),
                (100, 1, TaskPriority.LOW, 1),
            ]
        ]

        once = rank_tasks(tasks)
        twice = sort_tasks(once)

        assert len(once) == len(tasks)
        assert sorted(t.id for t in once) == sorted(t.id for t in tasks)
        assert [t.id for t in twice] == [t.id for t in once]
        assert once[-1].roi is None

    def test_empty(self):
        assert sort_tasks([]) == []
