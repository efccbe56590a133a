"""
pointproofs configuration
Defaults are read from the environment once, at import time.
"""

import logging
import os

# Pairing curve passed to charm's PairingGroup
DEFAULT_PAIRING_CURVE = os.getenv('POINTPROOFS_CURVE', 'MNT224')

# Worker threads for data-parallel scalar multiplication (1 = serial).
# charm's C arithmetic does not release the GIL, so more workers keep the
# result identical but do not make it faster.
DEFAULT_WORKERS = int(os.getenv('POINTPROOFS_WORKERS', 1))

# Batch fixed-base precomputation of generated bases
PRECOMPUTE = os.getenv('POINTPROOFS_PRECOMPUTE', 'true').lower() == 'true'

DEFAULT_LOG_LEVEL = os.getenv('POINTPROOFS_LOG_LEVEL', 'WARNING').upper()


class Config:
    """Configuration"""

    def __init__(self):
        self.curve = DEFAULT_PAIRING_CURVE
        self.workers = DEFAULT_WORKERS
        self.precompute = PRECOMPUTE
        self.log_level = DEFAULT_LOG_LEVEL

    def configure_logging(self, level=None):
        """Attach a stream handler to the package logger at the configured level."""
        package_logger = logging.getLogger('pointproofs')
        package_logger.setLevel(level or self.log_level)
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter('%(asctime)s %(name)s %(levelname)s %(message)s'))
            package_logger.addHandler(handler)
        return package_logger


# Global configuration instance
config = Config()
