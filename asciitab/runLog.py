# Copyright 2024 TerraPower, LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
This module handles logging of console output (e.g. warnings, information, errors)
while tables are loaded and rendered.

The default way of calling the global asciitab logger is to just import it:

.. code::

    from asciitab import runLog

You can then log things:

.. code::

    runLog.info('information here')
    runLog.warning('odd input here', single=True)

Or change the log level:

.. code::

    runLog.setVerbosity('debug')

The library is quiet by default: only warnings and errors are emitted until the verbosity is
lowered.
"""
import collections
import logging
import operator
import sys

# global constants
_WHITE_SPACE = " " * 7
SEP = "|"
STDOUT_LOGGER_NAME = "ASCIITAB"
DEFAULT_VERBOSITY = logging.WARNING


class _RunLog:
    """
    Handles all the logging.

    Messages go to stderr, formatted like log statements, so that they never mix with rendered
    tables written to stdout.
    """

    def __init__(self, name=STDOUT_LOGGER_NAME):
        """
        Build a log object.

        Parameters
        ----------
        name : str
            Name of the underlying ``logging.Logger``.
        """
        self._name = name
        self._verbosity = DEFAULT_VERBOSITY
        self.logLevels = None
        self._logLevelNumbers = []
        self.logger = None

        self._setLogLevels()
        self.startLog(name)

    def _setLogLevels(self):
        """Fill the logLevels dict with the level numbers and their printed prefixes."""
        # NOTE: use ordereddict so the levels are listed from quietest to loudest
        self.logLevels = collections.OrderedDict(
            [
                ("debug", (logging.DEBUG, "[dbug] ")),
                ("extra", (15, "[xtra] ")),
                ("info", (logging.INFO, "[info] ")),
                ("important", (25, "[impt] ")),
                ("warning", (logging.WARNING, "[warn] ")),
                ("error", (logging.ERROR, "[err ] ")),
                ("header", (100, "")),
            ]
        )
        self._logLevelNumbers = sorted([l[0] for l in self.logLevels.values()])
        global _WHITE_SPACE
        _WHITE_SPACE = " " * len(max([l[1] for l in self.logLevels.values()]))

    def log(self, msgType, msg, single=False, label=None, **kwargs):
        """
        This is a wrapper around logger.log() that does most of the work and is
        used by all message passers (e.g. info, warning, etc.).

        In this situation, we do the mangling needed to get the log level to the correct number.
        """
        # Determine the log level: users can optionally pass in custom strings ("debug")
        msgLevel = msgType if isinstance(msgType, int) else self.logLevels[msgType][0]
        self.logger.log(msgLevel, str(msg), single=single, label=label)

    def getDuplicatesFilter(self):
        """Find the no-duplicates filter of the underlying logger, if it exists."""
        if not self.logger or not isinstance(self.logger, RunLogger):
            return None

        return self.logger.getDuplicatesFilter()

    def clearSingleWarnings(self):
        """Reset the single warned list so we get messages again."""
        dupsFilter = self.getDuplicatesFilter()
        if dupsFilter:
            dupsFilter.singleMessageCounts.clear()
            dupsFilter.singleWarningMessageCounts.clear()

    def warningReport(self):
        """Summarize all the single-print warnings seen so far."""
        self.logger.warningReport()

    def getLogVerbosityRank(self, level):
        """Return integer verbosity rank given the string verbosity name."""
        try:
            return self.logLevels[level][0]
        except KeyError:
            log_strs = list(self.logLevels.keys())
            raise KeyError(
                "{} is not a valid verbosity level: {}".format(level, log_strs)
            )

    def setVerbosity(self, level):
        """
        Sets the minimum output verbosity for the logger.

        Any message with a higher verbosity than this will be emitted.

        Parameters
        ----------
        level : int or str
            The level to set the log output verbosity to.
            Valid numbers are 0-100 and valid strings are keys of logLevels

        Examples
        --------
        >>> setVerbosity('debug') -> sets to 10
        >>> setVerbosity(0) -> sets to 10
        """
        if isinstance(level, str):
            self._verbosity = self.getLogVerbosityRank(level)
        elif isinstance(level, int) and not isinstance(level, bool):
            # snap to a canonical level, otherwise logging silently drops nearly everything
            if level in self._logLevelNumbers:
                self._verbosity = level
            elif level < self._logLevelNumbers[0]:
                self._verbosity = self._logLevelNumbers[0]
            else:
                for i in range(len(self._logLevelNumbers) - 1, -1, -1):
                    if level >= self._logLevelNumbers[i]:
                        self._verbosity = self._logLevelNumbers[i]
                        break
        else:
            raise TypeError("Invalid verbosity rank {}.".format(level))

        if self.logger is not None:
            for handler in self.logger.handlers:
                handler.setLevel(self._verbosity)
            self.logger.setLevel(self._verbosity)

    def getVerbosity(self):
        """Return the global runLog verbosity."""
        return self._verbosity

    def startLog(self, name):
        """Attach a fresh RunLogger writing to stderr."""
        self.logger = RunLogger(name, self)
        self.setVerbosity(self._verbosity)


# Here are all the module-level functions that should be used for most outputs.
# They use the Log object behind the scenes.
def raw(msg):
    """Print raw text without any special functionality."""
    LOG.log("header", msg, single=False, label=msg)


def extra(msg, single=False, label=None):
    LOG.log("extra", msg, single=single, label=label)


def debug(msg, single=False, label=None):
    LOG.log("debug", msg, single=single, label=label)


def info(msg, single=False, label=None):
    LOG.log("info", msg, single=single, label=label)


def important(msg, single=False, label=None):
    LOG.log("important", msg, single=single, label=label)


def warning(msg, single=False, label=None):
    LOG.log("warning", msg, single=single, label=label)


def error(msg, single=False, label=None):
    LOG.log("error", msg, single=single, label=label)


def header(msg, single=False, label=None):
    LOG.log("header", msg, single=single, label=label)


def warningReport():
    LOG.warningReport()


def setVerbosity(level):
    LOG.setVerbosity(level)


def getVerbosity():
    return LOG.getVerbosity()


def getLogVerbosityRank(level):
    return LOG.getLogVerbosityRank(level)


# ---------------------------------------


class DeduplicationFilter(logging.Filter):
    """
    Important logging filter

    * allow users to turn off duplicate warnings
    * handles special indentation rules for our logs
    """

    def __init__(self, *args, **kwargs):
        logging.Filter.__init__(self, *args, **kwargs)
        self.singleMessageCounts = {}
        self.singleWarningMessageCounts = {}

    def filter(self, record):
        # determine if this is a "do not duplicate" message
        msg = str(record.msg)
        single = getattr(record, "single", False)
        label = getattr(record, "label", msg)
        label = msg if label is None else label

        # If the message is set to "do not duplicate" we may filter it out
        if single:
            if record.levelno in (logging.WARNING, logging.CRITICAL):
                counts = self.singleWarningMessageCounts
            else:
                counts = self.singleMessageCounts

            if label not in counts:
                counts[label] = 1
            else:
                counts[label] += 1
                return False

        # indent continuation lines of multi-line messages under the level prefix
        record.msg = msg.rstrip().replace("\n", "\n" + _WHITE_SPACE)
        return True


class _PrefixFormatter(logging.Formatter):
    """Print the short level prefix (e.g. ``[warn]``) in front of each message."""

    def __init__(self, runLog):
        logging.Formatter.__init__(self, "%(message)s")
        self._prefixes = {num: prefix for num, prefix in runLog.logLevels.values()}

    def format(self, record):
        return self._prefixes.get(record.levelno, "") + logging.Formatter.format(
            self, record
        )


class RunLogger(logging.Logger):
    """Custom Logger to support:

    1. Giving users the option to de-duplicate warnings
    2. Printing the short asciitab level prefixes
    """

    def __init__(self, name, runLog=None):
        logging.Logger.__init__(self, name)
        self.allowStopDuplicates()

        handler = logging.StreamHandler(sys.stderr)
        if runLog is not None:
            handler.setFormatter(_PrefixFormatter(runLog))
        self.addHandler(handler)

    def log(self, msgLevel, msg, single=False, label=None, **kwargs):
        """Log ``msg`` while passing the de-duplication data along to the filter."""
        logging.Logger.log(
            self, msgLevel, str(msg), extra={"single": single, "label": label}
        )

    def allowStopDuplicates(self):
        """helper method to allow us to safely add the deduplication filter at any time"""
        for f in self.filters:
            if isinstance(f, DeduplicationFilter):
                return
        self.addFilter(DeduplicationFilter())

    def getDuplicatesFilter(self):
        """This object should have a no-duplicates filter. If it exists, find it."""
        for f in self.filters:
            if isinstance(f, DeduplicationFilter):
                return f

        return None

    def warningReport(self):
        """Summarize all warnings seen so far."""
        lines = ["----- Final Warning Count --------"]
        lines.append("  {0:^10s}   {1:^25s}".format("COUNT", "LABEL"))

        dupsFilter = self.getDuplicatesFilter()
        if dupsFilter is None or not dupsFilter.singleWarningMessageCounts:
            lines.append("  {0:^10s}   {1:^25s}".format(str(0), str("None Found")))
        else:
            for label, count in sorted(
                dupsFilter.singleWarningMessageCounts.items(),
                key=operator.itemgetter(1),
            ):
                lines.append("  {0:^10s}   {1:^25s}".format(str(count), str(label)))
        lines.append("------------------------------------")

        # report at the warning level, so it survives the default verbosity
        for line in lines:
            logging.Logger.log(self, logging.WARNING, line, extra={"single": False})


def logFactory():
    """Create the default logging object."""
    return _RunLog(STDOUT_LOGGER_NAME)


LOG = logFactory()
