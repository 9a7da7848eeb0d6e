# Created in October 2026
#
# Copyright 2026 - 2026 The keytab_provider authors
#
# This file is part of keytab_provider
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import logging

from typing import Union

KEYTAB_LOGGER_NAME = 'keytab_provider'

_keytab_logger = None


def configure_log_level(level: Union[str, int]):
    """ Set the log level of the keytab logger. The codec only traces at DEBUG, so that's the level to
    use when working out why a keytab won't parse.
    :param level: The lowest log severity to be recorded, either as a logging level number or a level
                  name such as 'debug' or 'INFO'.
    """
    if isinstance(level, str):
        level = level.strip().upper()
    get_logger().setLevel(level)


def disable_logging():
    """ Disable logging entirely for the keytab logger """
    get_logger().propagate = False


def enable_logging():
    """ Enable logging for the keytab logger """
    get_logger().propagate = True


def get_logger():
    """ Retrieve the keytab logger for this package. If it has not been declared, then declare it. """
    global _keytab_logger
    if _keytab_logger is not None:
        return _keytab_logger
    logger = logging.getLogger(KEYTAB_LOGGER_NAME)
    # by default, only log info+. applications that never configure logging shouldn't hear from us at all
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.NullHandler())
    _keytab_logger = logger
    return _keytab_logger
