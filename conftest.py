import logging
import os
from collections import OrderedDict

import structlog

from nbtserde.conf import NBTSERDE_CONFIG_YAML_ENV

# tests run with the default settings unless a config is given explicitly for the test run
test_config = os.environ.get('NBTSERDE_TEST_CONFIG_YAML')
if test_config is not None:
    os.environ[NBTSERDE_CONFIG_YAML_ENV] = test_config
else:
    os.environ.pop(NBTSERDE_CONFIG_YAML_ENV, None)

# log records go through stdlib logging, nothing is printed to stdout during tests or doctests
logging.getLogger('nbtserde').setLevel(logging.INFO)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.KeyValueRenderer(key_order=['event']),
    ],
    context_class=OrderedDict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)
