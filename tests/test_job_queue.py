"""Tests for the FIFO job queue and its drain."""

import pytest

from device_print_service.errors import QueueFullError
from device_print_service.events import PRINT_FINISHED, PRINT_STARTED, QUEUED, REJECTED
from device_print_service.job_queue import JobQueue


@pytest.fixture()
def queue(events, scheduler):
    return JobQueue('NETWORK', events, scheduler=scheduler, print_delay=1.0)


def test_submit_returns_without_printing_to_completion(queue, scheduler):
    job = queue.submit('Doc1')
    assert job.document == 'Doc1'
    assert job.status == 'printing'
    assert not job.done
    assert scheduler.pending == 1


def test_first_job_starts_immediately_rest_wait(queue):
    first = queue.submit('Doc1')
    second = queue.submit('Doc2')
    third = queue.submit('Doc3')

    assert queue.in_flight is first
    assert queue.pending == 2
    assert second.status == 'queued'
    assert third.status == 'queued'


def test_only_one_timer_outstanding(queue, scheduler):
    for name in ('Doc1', 'Doc2', 'Doc3', 'Doc4'):
        queue.submit(name)
    assert scheduler.pending == 1
    scheduler.run_next()
    assert scheduler.pending == 1


def test_jobs_complete_in_submission_order(queue, scheduler):
    jobs = [queue.submit(f'Doc{i}') for i in range(1, 6)]
    finished = []
    for job in jobs:
        job.add_done_callback(lambda j: finished.append(j.document))

    scheduler.run_all()

    assert finished == ['Doc1', 'Doc2', 'Doc3', 'Doc4', 'Doc5']
    assert all(job.done for job in jobs)
    assert queue.in_flight is None
    assert queue.pending == 0


def test_execution_windows_never_overlap(queue, scheduler):
    jobs = [queue.submit(name) for name in ('Doc1', 'Doc2', 'Doc2', 'Doc3')]
    scheduler.run_all()

    for previous, current in zip(jobs, jobs[1:]):
        assert previous.completed_at <= current.started_at


def test_scenario_event_order(queue, scheduler, event_kinds):
    queue.submit('Doc1')
    queue.submit('Doc2')
    queue.submit('Doc3')

    assert event_kinds(QUEUED) == [(QUEUED, 'Doc1'), (QUEUED, 'Doc2'), (QUEUED, 'Doc3')]
    assert event_kinds(PRINT_FINISHED) == []

    scheduler.run_all()

    assert event_kinds(PRINT_STARTED, PRINT_FINISHED) == [
        (PRINT_STARTED, 'Doc1'), (PRINT_FINISHED, 'Doc1'),
        (PRINT_STARTED, 'Doc2'), (PRINT_FINISHED, 'Doc2'),
        (PRINT_STARTED, 'Doc3'), (PRINT_FINISHED, 'Doc3'),
    ]


def test_queue_restarts_after_going_idle(queue, scheduler):
    first = queue.submit('Doc1')
    scheduler.run_all()
    assert first.done
    assert not queue.is_busy

    second = queue.submit('Doc2')
    assert queue.in_flight is second
    scheduler.run_all()
    assert second.done


def test_duplicates_are_separate_jobs(queue, scheduler):
    a = queue.submit('Same')
    b = queue.submit('Same')
    assert a.id != b.id
    scheduler.run_all()
    assert a.done and b.done


def test_submit_from_done_callback(queue, scheduler):
    follow_up = []
    first = queue.submit('Doc1')
    first.add_done_callback(lambda job: follow_up.append(queue.submit('After')))
    queue.submit('Doc2')

    scheduler.run_all()

    assert follow_up[0].done
    assert follow_up[0].completed_at >= first.completed_at


def test_print_delay_is_fixed(events, scheduler):
    queue = JobQueue('NETWORK', events, scheduler=scheduler, print_delay=2.5)
    queue.submit('short')
    queue.submit('a much longer document ' * 50)
    scheduler.run_next()
    assert scheduler.now == 2.5
    scheduler.run_next()
    assert scheduler.now == 5.0


def test_unbounded_by_default(queue):
    for i in range(500):
        queue.submit(f'Doc{i}')
    assert queue.pending == 499


class TestBoundedQueue:

    @pytest.fixture()
    def bounded(self, events, scheduler):
        return JobQueue('NETWORK', events, scheduler=scheduler, max_pending=2)

    def test_rejects_over_capacity(self, bounded, event_kinds):
        bounded.submit('Doc1')  # in flight, not pending
        bounded.submit('Doc2')
        bounded.submit('Doc3')
        with pytest.raises(QueueFullError):
            bounded.submit('Doc4')

        assert bounded.pending == 2
        assert event_kinds(REJECTED) == [(REJECTED, 'Doc4')]

    def test_accepts_again_after_drain(self, bounded, scheduler):
        for name in ('Doc1', 'Doc2', 'Doc3'):
            bounded.submit(name)
        scheduler.run_next()
        job = bounded.submit('Doc4')
        assert job.status == 'queued'


def test_snapshot(queue):
    queue.submit('Doc1')
    queue.submit('Doc2')
    snapshot = queue.snapshot()
    assert snapshot['in_flight']['document'] == 'Doc1'
    assert [j['document'] for j in snapshot['pending']] == ['Doc2']
    assert snapshot['max_pending'] is None
