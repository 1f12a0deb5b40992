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

"""Plain text output: TLN lines, hex dumps and the statistics report"""

import evtcarve.utils as utils
from evtcarve.renderers import Renderer

class TLNRenderer(Renderer):
    """Renders accepted records in the 5 field, pipe delimited TLN format:

       Time|Source|System|User|Description
    """
    source = "EVT"

    def format_line(self, record):
        desc = "[{0}] - {1}/{2};{3};{4}".format(record.record_number, record.source,
                                                record.event_id, record.event_type_label,
                                                record.strings)
        return "|".join([str(record.time_generated), self.source, record.computer_name,
                         record.security_identifier, desc])

    def render(self, outfd, records):
        for record in records:
            outfd.write(self.format_line(record) + "\n")

class HexdumpRenderer(Renderer):
    """Hex editor style dump of raw bytes, used when debugging"""
    width = 16

    def format_lines(self, data):
        ## Every byte is written as " XX", the column is padded to 50
        for offset, hexdata, translated_data in utils.Hexdump(data, self.width):
            yield "0x{0:08X}  {1:<50} {2}".format(offset, " " + hexdata, "".join(translated_data))

    def render(self, outfd, data):
        for line in self.format_lines(data):
            outfd.write(line + "\n")

class StatsRenderer(Renderer):
    rows = [("Small records skipped    ", "too_small"),
            ("Large records skipped    ", "oversized"),
            ("Malformed records skipped", "malformed"),
            ("Records retrieved        ", "accepted")]

    def render(self, outfd, stats):
        outfd.write("\n")
        for title, attr in self.rows:
            outfd.write("{0}: {1}\n".format(title, getattr(stats, attr)))
