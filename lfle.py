#!/usr/bin/env python
#  -*- mode: python; -*-
#
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

"""
lfle - parses content for EVT records, sending them to STDOUT
"""

#pylint: disable-msg=C0111
import sys
import textwrap

import evtcarve.conf as conf
import evtcarve.constants as constants
import evtcarve.debug as debug
import evtcarve.exceptions as exceptions
from evtcarve.carve import LfLe

def examples():
    return textwrap.dedent("""
    Ex:
    #Send recovered records to STDOUT (can redirect to a file)
    lfle -f mem.raw

    #Print statistics after the records
    lfle -f pagefile.sys -s
    """)

def main(argv = None):
    config = conf.ConfObject(argv)
    config.set_usage(usage = "lfle [options] v.{0}".format(constants.VERSION))
    config.add_help_hook(examples)

    conf.register_options(config)
    debug.register_options(config)
    LfLe.register_options(config)

    ## The config file may only be known once the command line is read
    config.parse_options(False)
    try:
        config.add_file(config.CONF_FILE)
    except exceptions.ConfigurationError as e:
        debug.error(str(e))
    config.parse_options()

    # Set the logging level now we know whether debug is set or not
    debug.setup(config.get_int("DEBUG"))

    if not config.FILE:
        config.print_help()
        return 1

    try:
        LfLe(config).execute()
    except exceptions.EvtCarveException as e:
        debug.error(str(e))

    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("Interrupted")
        sys.exit(1)
