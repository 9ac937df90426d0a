from __future__ import annotations

import logging

import structlog


def pytest_configure(config):
    # Debug messages would end up in the output checked by the doctests
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING)
    )
