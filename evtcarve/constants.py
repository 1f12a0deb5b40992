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

# Scanning is done in small windows so that very large images
# (pagefiles, memory dumps) never have to be held in memory.

VERSION = "20180915"

SCAN_BLOCKSIZE = 4096

## Record signature, "LfLe" (0x654c664c as a little endian DWORD)
EVT_MAGIC_BYTES = b"LfLe"

## Size of the fixed part of an EVENTLOGRECORD
EVT_HEADER_SIZE = 0x38

## Anything at or below this cannot hold a record header
EVT_MIN_RECORD = 0x30

## Records at or above this are not trusted
EVT_MAX_RECORD = 0x1000

DEFAULT_CONF_NAME = ".evtcarverc"
