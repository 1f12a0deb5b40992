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

import io
import os
import sys
import evtcarve.debug as debug

class Command(object):
    """ Base class for each command """
    ## Carved text holds arbitrary bytes, anything the output encoding
    ## cannot represent is escaped rather than stopping the run
    output_errors = "backslashreplace"

    def __init__(self, config, *_args, **_kwargs):
        self._config = config

    @staticmethod
    def register_options(config):
        """Registers options into a config object provided"""
        config.add_option("OUTPUT-FILE", default = None,
                          help = "write output in this file")

    def calculate(self):
        """ This function is responsible for performing all calculations

        We should not have any output functions (e.g. print) in this
        function at all.

        If this function is expected to take a long time to return
        some data, the function should return a generator.
        """

    def execute(self):
        """ Executes the command."""
        if self._config.OUTPUT_FILE and os.path.exists(self._config.OUTPUT_FILE):
            debug.error("File " + self._config.OUTPUT_FILE + " already exists.  Cowardly refusing to overwrite it...")

        data = self.calculate()

        if self._config.OUTPUT_FILE:
            with open(self._config.OUTPUT_FILE, 'w', errors = self.output_errors) as outfd:
                self.render_text(outfd, data)
        else:
            self.render_text(self._stdout(), data)

    def _stdout(self):
        ## Only real text streams can change their error handler
        if isinstance(sys.stdout, io.TextIOWrapper):
            sys.stdout.reconfigure(errors = self.output_errors)
        return sys.stdout

    def render_text(self, outfd, data):
        raise NotImplementedError("Text rendering has not been implemented for this command.")
