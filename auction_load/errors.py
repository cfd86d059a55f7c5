class ConfigurationError(ValueError):
    """Scenario parameters the host cannot run with."""


class CheckFailure(Exception):
    """A single iteration's check did not hold. Reported, never fatal."""

    def __init__(self, check_name, detail):
        super().__init__("{}: {}".format(check_name, detail))
        self.check_name = check_name
        self.detail = detail


class ThresholdBreach(Exception):
    """The run-wide latency threshold was violated."""

    def __init__(self, expression, observed_ms):
        super().__init__("threshold {} breached (observed {}ms)".format(expression, observed_ms))
        self.expression = expression
        self.observed_ms = observed_ms
