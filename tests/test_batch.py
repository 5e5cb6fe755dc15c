import threading

import pytest

from primecount.core.counters import Counters
from primecount.core.models import Range
from primecount.executor.threaded import WorkerPoolExecutor
from primecount.services.batch import BatchTask
from primecount.services.reporter import Reporter


def test_scan_counts_primes_in_half_open_range():
    t = BatchTask(Range(2, 12), Counters(), span=10, report=lambda n: None)
    assert t.scan() == 4           # 2 3 5 7
    t = BatchTask(Range(11, 14), Counters(), span=3, report=lambda n: None)
    assert t.scan() == 2           # 11 13, 14 excluded


def test_single_batch_reports(reporter, out):
    c = Counters()
    BatchTask(Range(2, 100), c, span=98, report=reporter)()

    assert c.snapshot() == (98, 25)
    assert out.getvalue() == "25 primes.\n"


def test_only_last_merge_reports(reporter, out):
    c = Counters()
    a = BatchTask(Range(2, 50), c, span=98, report=reporter)
    b = BatchTask(Range(50, 100), c, span=98, report=reporter)

    b()
    assert not reporter.reported
    a()
    assert reporter.lines == ["25 primes."]
    assert reporter.value == 25


def test_empty_range_merges_nothing():
    c = Counters()
    BatchTask(Range(7, 7), c, span=10, report=lambda n: None)()
    assert c.snapshot() == (0, 0)


def test_reporter_refuses_second_report(out):
    r = Reporter(out)
    assert r(5) == "5 primes."
    with pytest.raises(RuntimeError):
        r(5)
    assert out.getvalue() == "5 primes.\n"


def test_reporter_defaults_to_stdout(capsys):
    Reporter()(1229)
    assert capsys.readouterr().out == "1229 primes.\n"


class GatedCounters(Counters):
    """Holds the merge of one batch size until `release` is set."""

    def __init__(self, hold_size, release):
        super().__init__()
        self.hold_size = hold_size
        self.release = release

    def merge(self, primes, processed):
        if processed == self.hold_size:
            assert self.release.wait(5), "other batch never finished"
        return super().merge(primes, processed)


def test_last_merge_reports_primes_from_every_batch_on_threads(reporter):
    b_done = threading.Event()
    c = GatedCounters(hold_size=48, release=b_done)
    a = BatchTask(Range(2, 50), c, span=98, report=reporter)    # 15 primes, held
    b = BatchTask(Range(50, 100), c, span=98, report=reporter)  # 10 primes

    def run_b():
        b()
        b_done.set()

    ex = WorkerPoolExecutor(workers=2)
    ex.submit(a)
    ex.submit(run_b)
    ex.join()
    ex.shutdown()

    assert c.snapshot() == (98, 25)
    assert reporter.lines == ["25 primes."]


def test_reporter_keeps_reported_count(out):
    r = Reporter(out)
    assert r.value is None
    r(0)
    assert r.value == 0
    assert r.reported
