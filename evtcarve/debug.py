# evtcarve
#
# This file is part of evtcarve.
#
# evtcarve is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# evtcarve is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with evtcarve.  If not, see <http://www.gnu.org/licenses/>.
#

""" Diagnostics for evtcarve.

Messages go through the logging module, to stderr, so they never mix
with the records written to the output. Each -d given on the command
line shows one more level of detail:

   -d     every signature hit and the length found in front of it
   -dd    how the input was opened as well
"""
import sys
import inspect
import logging

FORMAT = "%(levelname)-8s: %(name)-20s: %(message)s"

def threshold(level):
    """The lowest logging level shown for a -d count of level"""
    if level <= 0:
        return logging.INFO
    return logging.DEBUG + 1 - level

def setup(level = 0):
    """Sets up the global logging environment"""
    for i in range(1, 9):
        logging.addLevelName(logging.DEBUG - i, "DEBUG" + str(i))
    logging.basicConfig(format = FORMAT, stream = sys.stderr)
    logging.getLogger('').setLevel(threshold(level))

def debug(msg, level = 1):
    """Logs a message only shown with at least level -d flags"""
    _log(msg, logging.DEBUG + 1 - level)

def warning(msg):
    _log(msg, logging.WARNING)

def error(msg):
    """Logs msg and ends the run with exit status 1"""
    _log(msg, logging.ERROR)
    sys.exit(1)

def _caller():
    """Name of the first module up the stack that is not this one"""
    frm = inspect.currentframe()
    try:
        while frm is not None and frm.f_globals.get("__name__") == __name__:
            frm = frm.f_back
        if frm is None:
            return "evtcarve"
        return frm.f_globals.get("__name__", "evtcarve")
    finally:
        del frm

def _log(msg, loglevel):
    logging.getLogger(_caller()).log(loglevel, msg)

def register_options(config):
    config.add_option("DEBUG", short_option = 'd', default = 0,
                      action = 'count', help = "Debug mode: log every candidate and dump rejected records")
