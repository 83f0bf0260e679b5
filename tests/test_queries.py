"""Tests for the query handler."""

from datetime import timedelta
from uuid import uuid4

import pytest
from fakes import FakeTaskRepository, titles

from task_tracker.cancellation import CancellationToken
from task_tracker.exceptions import OperationCancelledError
from task_tracker.models import Priority
from task_tracker.queries import FilterTasksQuery, SearchTasksQuery, TaskQueryHandler
from task_tracker.sorting import SortField


@pytest.fixture
def handler(fake_repository: FakeTaskRepository) -> TaskQueryHandler:
    return TaskQueryHandler(fake_repository)


@pytest.fixture
def cancelled_token() -> CancellationToken:
    token = CancellationToken()
    token.cancel()
    return token


class TestFilterQuery:
    """Tests for TaskQueryHandler.filter."""

    def test_empty_query_returns_all_in_order(self, handler, sample_tasks):
        assert handler.filter(FilterTasksQuery()) == sample_tasks

    def test_title(self, handler):
        assert titles(handler.filter(FilterTasksQuery(title="Buy"))) == ["Buy groceries"]

    def test_tags(self, handler):
        result = handler.filter(FilterTasksQuery(tags=["urgent"]))
        assert titles(result) == ["Buy groceries", "Call dentist"]

    def test_completed(self, handler):
        assert titles(handler.filter(FilterTasksQuery(is_completed=True))) == ["Call dentist"]

    def test_priority(self, handler):
        result = handler.filter(FilterTasksQuery(priority=Priority.MEDIUM))
        assert titles(result) == ["Write report", "Grocery shopping"]

    def test_date_range(self, handler, now):
        query = FilterTasksQuery(
            due_after=now - timedelta(days=2),
            due_before=now + timedelta(days=2),
        )
        assert len(handler.filter(query)) == 2

    def test_combined_filters(self, handler):
        query = FilterTasksQuery(tags=["shopping"], is_completed=False, priority=Priority.HIGH)
        assert titles(handler.filter(query)) == ["Buy groceries"]

    def test_filter_then_sort(self, handler):
        query = FilterTasksQuery(tags=["shopping", "urgent"], sort_by=SortField.TITLE)
        assert titles(handler.filter(query)) == [
            "Buy groceries",
            "Call dentist",
            "Grocery shopping",
        ]

    def test_sort_descending(self, handler):
        query = FilterTasksQuery(sort_by=SortField.PRIORITY, sort_descending=True)
        assert handler.filter(query)[0].priority == Priority.HIGH

    def test_descending_without_field_keeps_order(self, handler, sample_tasks):
        assert handler.filter(FilterTasksQuery(sort_descending=True)) == sample_tasks

    def test_no_match_is_empty(self, handler):
        assert handler.filter(FilterTasksQuery(title="NonexistentTask")) == []

    def test_does_not_write(self, handler, fake_repository, sample_tasks):
        handler.filter(FilterTasksQuery(sort_by=SortField.TITLE))
        assert fake_repository.save_calls == 0
        assert fake_repository.tasks == sample_tasks

    def test_cancelled_before_start(self, handler, fake_repository, cancelled_token):
        with pytest.raises(OperationCancelledError):
            handler.filter(FilterTasksQuery(), cancelled_token)
        assert fake_repository.get_all_calls == 0

    def test_expired_timeout_cancels(self, handler, fake_repository):
        with pytest.raises(OperationCancelledError):
            handler.filter(FilterTasksQuery(), CancellationToken.with_timeout(0))
        assert fake_repository.get_all_calls == 0

    def test_live_token_does_not_cancel(self, handler, sample_tasks):
        assert handler.filter(FilterTasksQuery(), CancellationToken()) == sample_tasks


class TestSearchQuery:
    """Tests for TaskQueryHandler.search."""

    def test_empty_term(self, handler, sample_tasks):
        assert handler.search(SearchTasksQuery()) == sample_tasks

    def test_term(self, handler):
        assert titles(handler.search(SearchTasksQuery("shopping"))) == ["Grocery shopping"]

    def test_description_term(self, handler):
        assert titles(handler.search(SearchTasksQuery("appointment"))) == ["Call dentist"]

    def test_cancelled_before_start(self, handler, fake_repository, cancelled_token):
        with pytest.raises(OperationCancelledError):
            handler.search(SearchTasksQuery("report"), cancelled_token)
        assert fake_repository.get_all_calls == 0


class TestLookups:
    def test_get_all(self, handler, sample_tasks):
        assert handler.get_all() == sample_tasks

    def test_get_by_id(self, handler, sample_tasks):
        assert handler.get_by_id(sample_tasks[1].id) == sample_tasks[1]

    def test_get_by_id_missing(self, handler):
        assert handler.get_by_id(uuid4()) is None

    def test_get_all_cancelled(self, handler, fake_repository, cancelled_token):
        with pytest.raises(OperationCancelledError):
            handler.get_all(cancelled_token)
        assert fake_repository.get_all_calls == 0
