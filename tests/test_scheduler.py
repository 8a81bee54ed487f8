"""Tests for printers driven by real threads and timers."""

import threading

from device_print_service.events import DISCONNECTED, EventLog, PRINT_FINISHED, PRINT_STARTED
from device_print_service.config import Settings
from device_print_service.manager import PrinterManager
from device_print_service.printers import NetworkPrinter, UsbPrinter
from device_print_service.scheduler import TimerScheduler


def test_call_later_runs_callback():
    scheduler = TimerScheduler()
    fired = threading.Event()
    scheduler.call_later(0.01, fired.set)
    assert fired.wait(2)


def test_callback_errors_are_logged(caplog):
    scheduler = TimerScheduler()
    timer = scheduler.call_later(0, lambda: 1 / 0)
    timer.join(2)
    assert 'Scheduled callback' in caplog.text


def test_cancel_all():
    scheduler = TimerScheduler()
    fired = threading.Event()
    scheduler.call_later(5, fired.set)
    scheduler.cancel_all()
    assert not fired.wait(0.05)


def test_network_printer_with_threads():
    events = EventLog()
    printer = NetworkPrinter(events=events, scheduler=TimerScheduler(), print_delay=0.01)

    jobs = [printer.submit(f'Doc{i}') for i in range(1, 4)]
    assert jobs[-1].wait(5)

    order = [(e.kind, e.document) for e in events.history()
             if e.kind in (PRINT_STARTED, PRINT_FINISHED)]
    assert order == [
        (PRINT_STARTED, 'Doc1'), (PRINT_FINISHED, 'Doc1'),
        (PRINT_STARTED, 'Doc2'), (PRINT_FINISHED, 'Doc2'),
        (PRINT_STARTED, 'Doc3'), (PRINT_FINISHED, 'Doc3'),
    ]


def test_concurrent_submitters_never_overlap():
    events = EventLog(history_limit=1000)
    printer = NetworkPrinter(events=events, scheduler=TimerScheduler(), print_delay=0.001)

    jobs = []
    jobs_lock = threading.Lock()

    def submit_many(prefix):
        for i in range(10):
            job = printer.submit(f'{prefix}-{i}')
            with jobs_lock:
                jobs.append(job)

    threads = [threading.Thread(target=submit_many, args=(name,)) for name in 'ABC']
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(job.wait(10) for job in jobs)

    running = 0
    for event in events.history():
        if event.kind == PRINT_STARTED:
            running += 1
            assert running == 1
        elif event.kind == PRINT_FINISHED:
            running -= 1
    assert running == 0


def test_replaced_printer_jobs_complete_with_real_timers():
    settings = Settings(network_print_delay=0.05, default_printers=('NETWORK',))
    manager = PrinterManager(settings=settings)
    manager.add_default_printers()
    try:
        first = manager.submit_document('NETWORK', 'Doc1')
        second = manager.submit_document('NETWORK', 'Doc2')
        manager.add_printer('NETWORK')

        assert first.wait(5)
        assert second.wait(5)
    finally:
        manager.close()


def test_usb_prints_from_two_threads_never_overlap():
    events = EventLog()
    printer = UsbPrinter(events=events, print_delay=0.05)
    printer.connect('C1')

    threads = [threading.Thread(target=printer.print_document, args=(name,)) for name in 'XY']
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    order = [e.kind for e in events.history() if e.kind in (PRINT_STARTED, PRINT_FINISHED)]
    assert order == [PRINT_STARTED, PRINT_FINISHED, PRINT_STARTED, PRINT_FINISHED]


def test_usb_disconnect_waits_for_print_in_progress():
    events = EventLog()
    started = threading.Event()
    release = threading.Event()

    def slow_print(_delay):
        started.set()
        release.wait(5)

    printer = UsbPrinter(events=events, print_delay=1, sleep=slow_print)
    printer.connect('C1')

    printing = threading.Thread(target=printer.print_document, args=('X',))
    printing.start()
    assert started.wait(5)

    detaching = threading.Thread(target=printer.disconnect)
    detaching.start()
    detaching.join(0.05)
    assert printer.connected_client == 'C1'

    release.set()
    printing.join(5)
    detaching.join(5)

    kinds = [e.kind for e in events.history()]
    assert kinds[-2:] == [PRINT_FINISHED, DISCONNECTED]
    assert printer.connected_client is None
