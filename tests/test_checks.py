import threading

import pytest

from auction_load.checks import STATUS_CHECK, CheckResult, CheckTally, ResponseTimes, check_status


def test_status_200_passes():
    assert check_status(200) == CheckResult(STATUS_CHECK, True)
    assert STATUS_CHECK == "status is 200"


def test_other_status_fails():
    result = check_status(500)
    assert result.name == "status is 200"
    assert not result.passed
    assert result.detail == "status=500"
    assert not check_status(201).passed


def test_missing_response_fails():
    result = check_status(0)
    assert not result.passed
    assert "transport error" in result.detail


def test_tally_pass_rate_and_summary():
    tally = CheckTally()
    for code in (200, 200, 200, 503):
        tally.record(check_status(code))

    assert tally.total(STATUS_CHECK) == 4
    assert tally.pass_rate(STATUS_CHECK) == 0.75
    assert tally.summary() == ["status is 200: 75.00% (3/4)"]


def test_tally_unknown_check():
    tally = CheckTally()
    assert tally.pass_rate("missing") == 0.0
    assert tally.total("missing") == 0
    assert tally.names() == []
    assert tally.summary() == []


def test_tally_concurrent_records():
    tally = CheckTally()

    def worker():
        for _ in range(500):
            tally.record(check_status(200))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert tally.total(STATUS_CHECK) == 4000
    assert tally.pass_rate(STATUS_CHECK) == 1.0


def test_tally_reset():
    tally = CheckTally()
    tally.record(check_status(404))
    tally.reset()
    assert tally.names() == []


def test_transport_error_is_kept_in_detail():
    result = check_status(0, ConnectionError("Connection refused"))
    assert not result.passed
    assert result.detail == "no response (transport error): ConnectionError('Connection refused')"


def test_response_time_percentile_is_interpolated():
    times = ResponseTimes()
    for ms in (10, 20, 30, 40, 50):
        times.record(ms)

    assert times.percentile(0.5) == 30
    assert times.percentile(0.95) == pytest.approx(48)
    assert times.percentile(1.0) == 50


def test_response_times_are_not_bucketed():
    times = ResponseTimes()
    for _ in range(100):
        times.record(4960)
    assert times.percentile(0.95) == 4960


def test_empty_response_times():
    times = ResponseTimes()
    assert len(times) == 0
    with pytest.raises(ValueError):
        times.percentile(0.95)
