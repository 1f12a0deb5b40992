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
Parse EVT records from unstructured data: unallocated space, the
pagefile, memory, as well as EVT files reported as "corrupt".

  - Look for the "LfLe" signature on a 4-byte border
  - Take the preceding 4 bytes as the size of the record
    - skip it if the size is too small or 4K or more
    - if the first and last 4 bytes of the record agree, it is
      treated as a valid record and parsed

Output goes out in 5-field TLN format (pipe delimited).
"""

import evtcarve.addrspace as addrspace
import evtcarve.commands as commands
import evtcarve.debug as debug
import evtcarve.exceptions as exceptions
import evtcarve.scan as scan
import evtcarve.utils as utils
from evtcarve.renderers.text import TLNRenderer, HexdumpRenderer, StatsRenderer

class LfLe(commands.Command):
    """Carve EVT records from memory, the pagefile or unallocated space"""

    def __init__(self, config, *args, **kwargs):
        commands.Command.__init__(self, config, *args, **kwargs)
        self.context = None

    @staticmethod
    def register_options(config):
        commands.Command.register_options(config)
        config.add_option("FILE", short_option = 'f', default = None,
                          help = "file to be parsed")
        config.add_option("STATS", short_option = 's', default = False,
                          action = 'store_true', help = "maintain/print statistics")
        config.add_option("OFFSET", short_option = 'o', default = 0, type = 'str',
                          help = "offset to start scanning from (decimal or 0x hex)")

    @property
    def dump(self):
        return self._config.get_int("DEBUG") > 0

    def start_offset(self):
        try:
            offset = utils.parse_offset(self._config.OFFSET)
        except ValueError:
            raise exceptions.ConfigurationError("Invalid offset {0!r}".format(self._config.OFFSET))
        if offset < 0:
            raise exceptions.ConfigurationError("Offset must not be negative")
        return offset

    def calculate(self):
        if not self._config.FILE:
            raise exceptions.ConfigurationError("You must specify a file to parse (-f)")

        offset = self.start_offset()
        addr_space = addrspace.load_as(self._config.FILE)

        self.context = scan.ScanContext()
        debug.debug("Scanning {0} ({1} bytes) from offset 0x{2:x}".format(addr_space.name, addr_space.size(), offset))

        return self._scan(addr_space, offset)

    def _scan(self, addr_space, offset):
        scanner = scan.EvtScanner(context = self.context, dump = self.dump)
        try:
            for candidate in scanner.scan(addr_space, offset):
                yield candidate
        finally:
            addr_space.close()

    def render_text(self, outfd, data):
        tln = TLNRenderer()
        dumper = HexdumpRenderer()

        for candidate in data:
            if candidate.record is not None:
                outfd.write(tln.format_line(candidate.record) + "\n")
            elif self.dump and candidate.data:
                dumper.render(outfd, candidate.data)

        if self._config.get_bool("STATS") and self.context is not None:
            StatsRenderer().render(outfd, self.context.stats)
