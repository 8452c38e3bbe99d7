import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Upper bound on concurrent band workers. Fixed, not read from the environment.
MAX_WORKERS = 8

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s')
LOG_DATEFMT = os.getenv("LOG_DATEFMT", '%H:%M:%S')

# Seconds cv2.imread may take before the load is aborted (0 disables the alarm)
IMAGE_LOAD_TIMEOUT = int(os.getenv("IMAGE_LOAD_TIMEOUT", "5"))

BENCHMARK_REPEATS = int(os.getenv("BENCHMARK_REPEATS", "1"))


def configure_logging(level: str | None = None) -> None:
    """
    Centralized logging configuration. Call once, from an entry point,
    before anything else logs.
    """
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
