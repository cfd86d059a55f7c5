import logging

from locust import HttpUser, constant, events, task

from auction_load.checks import CheckTally, ResponseTimes, check_status
from auction_load.config import SCENARIO
from auction_load.errors import CheckFailure, ThresholdBreach
from auction_load.request import auction_list_request

logger = logging.getLogger(__name__)


class AuctionBrowser(HttpUser):
    """Anonymous visitor paging through the in-progress auction list."""

    scenario = SCENARIO
    host = SCENARIO.host
    wait_time = constant(SCENARIO.pacing_seconds)

    @task
    def browse_auctions(self):
        request = auction_list_request(self.scenario.query)
        with self.client.request(
            request.method,
            request.url,
            headers=request.headers,
            name=request.name,
            catch_response=True,
        ) as response:
            result = check_status(response.status_code, getattr(response, "error", None))
            checks.record(result)
            if result.passed:
                response.success()
            else:
                # reported to the host, never raised
                response.failure(CheckFailure(result.name, result.detail))
                logger.debug("check failed: %s (%s)", result.name, result.detail)


# per-run state, summarised when locust quits
checks = CheckTally()
response_times = ResponseTimes()


def evaluate_threshold(environment, threshold=SCENARIO.latency_threshold, samples=None):
    """Mark the run failed when the configured latency percentile is breached."""
    samples = response_times if samples is None else samples
    if not len(samples):
        logger.warning("No requests recorded, skipping threshold %s", threshold.expression)
        return False

    # locust's own stats round response times into buckets, so use the raw samples
    observed = samples.percentile(threshold.fraction)
    try:
        threshold.enforce(observed)
    except ThresholdBreach as e:
        logger.error("Test failed: %s", e)
        environment.process_exit_code = 1
        return True

    logger.info("Threshold %s passed (observed %sms)", threshold.expression, observed)
    return False


@events.request.add_listener
def on_request(**kwargs):
    response_times.on_request(**kwargs)


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    checks.reset()
    response_times.reset()
    logger.info(
        "Starting %s users for %s against %s (threshold %s)",
        SCENARIO.concurrency,
        SCENARIO.run_time(),
        environment.host or SCENARIO.host,
        SCENARIO.latency_threshold.expression,
    )


@events.quitting.add_listener
def on_quitting(environment, **kwargs):
    for line in checks.summary():
        logger.info("check %s", line)
    evaluate_threshold(environment)
