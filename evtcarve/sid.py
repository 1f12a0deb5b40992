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
Binary security identifiers (SIDs) as stored in event records.

References:
  http://blogs.msdn.com/oldnewthing/archive/2004/03/15/89753.aspx
  http://support.microsoft.com/kb/286182/
  http://support.microsoft.com/kb/243330
"""

import struct
import binascii

SID_MIN_SIZE = 12
SID_TOO_SHORT = "SID less than 12 bytes"

class SecurityIdentifier(object):
    """ A decoded SID.

    identifier_authority is kept in the textual form used in the
    output: hex digits with any leading zeros removed.
    """
    def __init__(self, revision, identifier_authority, sub_authorities, rid = None):
        self.revision = revision
        self.identifier_authority = identifier_authority
        self.sub_authorities = list(sub_authorities)
        ## Parsed, but never part of the string form
        self.rid = rid

    def __str__(self):
        return "S-" + "-".join(str(i) for i in [self.revision, self.identifier_authority] + self.sub_authorities)

    def __repr__(self):
        return "<SecurityIdentifier {0}>".format(self)

def parse_sid(data):
    """Parse a buffer taken from SidOffset of an event record.

    @param data: the SidLength bytes of the record at SidOffset (may
    be fewer if the record was cut short)

    @returns: a SecurityIdentifier, or None if there are fewer than 12 bytes
    """
    length = len(data)
    if length < SID_MIN_SIZE:
        return None

    revision = data[0]
    id_auth = binascii.hexlify(data[2:8]).decode("ascii").lstrip("0")

    if length == SID_MIN_SIZE:
        (sub,) = struct.unpack_from("<I", data, 8)
        return SecurityIdentifier(revision, id_auth, [sub])

    ## The sub authority window runs length - 2 bytes from offset 8,
    ## which is past the end of the SID. Only whole DWORDs that are
    ## actually present are used.
    window = data[8:8 + (length - 2)]
    count = len(window) // 4
    subs = struct.unpack("<{0}I".format(count), window[:count * 4])

    rid = None
    if length >= 26:
        (rid,) = struct.unpack_from("<H", data, 24)

    return SecurityIdentifier(revision, id_auth, subs, rid = rid)

def translate_sid(data):
    """Returns the string form of a binary SID, or a placeholder
    message if the buffer is too short to hold one"""
    sid = parse_sid(data)
    if sid is None:
        return SID_TOO_SHORT
    return str(sid)
