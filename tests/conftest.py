"""
Shared fixtures: loguru handlers writing into buffers
"""

import io

import pytest
from loguru import logger

from colorgful.lib.log import application_only
from colorgful.lib.sink import formatter_install


@pytest.fixture
def logged():
    """
    Install a formatter or theme as a loguru handler, return its buffer

    Formatters write into a fresh StringIO; themes into their own writer.
    Handlers only see application records and are removed after the test.
    """
    handler_ids = []

    def install(target, output=None):
        if hasattr(target, "install"):
            handler_ids.append(target.install(logger, filter=application_only))
            return target.output.writer

        buffer = output if output is not None else io.StringIO()
        handler_ids.append(formatter_install(target, buffer, filter=application_only))
        return buffer

    yield install

    for handler_id in handler_ids:
        logger.remove(handler_id)
