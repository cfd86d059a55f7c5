"""Run the auction listing scenario headless.

Usage:
  python -m auction_load                      # 10 users, 30s, localhost:8085
  python -m auction_load --host http://staging:8085 --only-summary
"""

import os
import subprocess
import sys

from auction_load.config import SCENARIO

LOCUSTFILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "locustfile.py")


def build_command(extra_args=(), scenario=SCENARIO):
    # locust keeps the last occurrence of a flag, so extra args override the scenario
    return [
        sys.executable, "-m", "locust",
        "-f", LOCUSTFILE,
        *scenario.locust_arguments(),
        *extra_args,
    ]


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    return subprocess.call(build_command(argv))


if __name__ == "__main__":
    sys.exit(main())
