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

#pylint: disable-msg=C0111

def Hexdump(data, width = 16):
    """ Hexdump function shared by the renderers """
    for offset in range(0, len(data), width):
        row_data = data[offset:offset + width]
        translated_data = [chr(x) if x < 127 and x > 31 else "." for x in row_data]
        hexdata = " ".join(["{0:02X}".format(x) for x in row_data])

        yield offset, hexdata, translated_data

def parse_offset(value):
    """Offsets may be given in decimal or with a 0x prefix"""
    if isinstance(value, int):
        return value
    return int(str(value).strip(), 0)
