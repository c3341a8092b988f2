# -*- coding: utf-8 -*-

""" pySmsPdu: Logging
"""

#
# (C) 2026 by the pySmsPdu contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import logging
from cmd2 import style

class _PduLogHandler(logging.Handler):
    def __init__(self, log_callback):
        super().__init__()
        self.log_callback = log_callback

    def emit(self, record):
        formatted_message = self.format(record)
        self.log_callback(formatted_message, record)

class PduLogger:
    """
    Static class to centralize the log output of the PDU decoder. Every pySmsPdu module obtains its logger through
    the get method. Configuration of the log behaviour (see setup and set_ methods) is entirely optional. In case no
    print callback is set (see setup method), the logger will pass the log messages directly to print() without
    applying any formatting to the original log message.
    """

    LOG_FMTSTR = "%(levelname)s: %(message)s"
    LOG_FMTSTR_VERBOSE = "%(module)s.%(lineno)d -- " + LOG_FMTSTR
    __formatter = logging.Formatter(LOG_FMTSTR)
    __formatter_verbose = logging.Formatter(LOG_FMTSTR_VERBOSE)

    # No print callback by default, means that log messages are passed directly to print()
    print_callback = None

    # No specific color scheme by default
    colors = {}

    verbose = False

    # Quiet by default, applications raise the verbosity through set_level()
    level = logging.WARNING

    # all loggers handed out by get(), so that set_level() can reach them
    loggers = {}

    def __init__(self):
        raise RuntimeError('static class, do not instantiate')

    @staticmethod
    def setup(print_callback = None, colors:dict = {}):
        """
        Set a print callback function and color scheme. This function call is optional. In case this method is not
        called, default settings apply.
        Args:
            print_callback : A callback function that accepts the resulting log string as input. The callback should
                             have the following format: print_callback(message:str)
            colors : An optional dict through which certain log levels can be assigned a color.
                     (e.g. {logging.WARN: Fg.YELLOW})
        """
        PduLogger.print_callback = print_callback
        PduLogger.colors = colors

    @staticmethod
    def set_verbose(verbose:bool = False):
        """
        Enable/disable verbose logging. (has no effect in case no print callback is set, see method setup)
        Args:
            verbose: verbosity (True = verbose logging, False = normal logging)
        """
        PduLogger.verbose = verbose

    @staticmethod
    def set_level(level:int = logging.WARNING):
        """
        Set the logging level of all pySmsPdu loggers.
        Args:
            level: Logging level, valid log levels are: DEBUG, INFO, WARNING, ERROR and CRITICAL
        """
        PduLogger.level = level
        for logger in PduLogger.loggers.values():
            logger.setLevel(level)

    @staticmethod
    def _log_callback(message, record):
        if not PduLogger.print_callback:
            # In case no print callback has been set display the message as if it were printed trough a normal
            # python print statement.
            print(record.message)
        else:
            # When a print callback is set, use it to display the log line. Apply color if the API user chose one
            if PduLogger.verbose:
                formatted_message = logging.Formatter.format(PduLogger.__formatter_verbose, record)
            else:
                formatted_message = logging.Formatter.format(PduLogger.__formatter, record)
            color = PduLogger.colors.get(record.levelno)
            if color:
                if isinstance(color, str):
                    PduLogger.print_callback(color + formatted_message + "\033[0m")
                else:
                    PduLogger.print_callback(style(formatted_message, fg = color))
            else:
                PduLogger.print_callback(formatted_message)

    @staticmethod
    def get(log_facility: str):
        """
        Set up and return a python logger object. Asking twice for the same facility returns the same logger.
        Args:
            log_facility : Name of log facility (usually the __name__ of the calling module)
        """
        logger = PduLogger.loggers.get(log_facility)
        if logger is not None:
            return logger
        logger = logging.getLogger(log_facility)
        handler = _PduLogHandler(log_callback=PduLogger._log_callback)
        logger.addHandler(handler)
        logger.setLevel(PduLogger.level)
        # our handler does the output, do not hand the record on to whatever the application configured
        logger.propagate = False
        PduLogger.loggers[log_facility] = logger
        return logger
