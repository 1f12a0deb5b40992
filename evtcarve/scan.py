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
Carving of event records out of unstructured data.

The scanner looks for the "LfLe" signature on 4 byte boundaries and
hands every hit to a RecordBoundaryCheck, which reads the DWORD in
front of the signature as the record size and decides whether the
bytes there look like a real record. Where scanning continues is
entirely up to the check.
"""
import struct
import collections

import evtcarve.debug as debug
import evtcarve.constants as constants
import evtcarve.evt as evt

class Classification(object):
    TOO_SMALL = "too_small"
    OVERSIZED = "oversized"
    MALFORMED = "malformed"
    ACCEPTED = "accepted"

class ScanState(object):
    SCANNING = "scanning"
    CANDIDATE_FOUND = "candidate-found"
    RECORD_ACCEPTED = "record-accepted"
    RECORD_REJECTED = "record-rejected"
    DONE = "done"

    transitions = {
        SCANNING : (CANDIDATE_FOUND, DONE),
        CANDIDATE_FOUND : (RECORD_ACCEPTED, RECORD_REJECTED),
        RECORD_ACCEPTED : (SCANNING, DONE),
        RECORD_REJECTED : (SCANNING, DONE),
        DONE : (),
    }

## One signature hit. data is only kept where something may want
## to look at the raw bytes (decoding or a debug dump).
Candidate = collections.namedtuple("Candidate",
                                   ["offset", "length", "classification", "next_offset",
                                    "trailer", "data", "record"])

class ScanStats(object):
    """Outcome counters for one scan. They only ever go up."""
    fields = (Classification.TOO_SMALL, Classification.OVERSIZED,
              Classification.MALFORMED, Classification.ACCEPTED)

    def __init__(self):
        self._counts = dict((f, 0) for f in self.fields)

    def increment(self, classification):
        if classification not in self._counts:
            raise KeyError("Unknown classification {0}".format(classification))
        self._counts[classification] += 1

    @property
    def too_small(self):
        return self._counts[Classification.TOO_SMALL]

    @property
    def oversized(self):
        return self._counts[Classification.OVERSIZED]

    @property
    def malformed(self):
        return self._counts[Classification.MALFORMED]

    @property
    def accepted(self):
        return self._counts[Classification.ACCEPTED]

    def as_dict(self):
        return dict(self._counts)

    def __repr__(self):
        return "<ScanStats {0}>".format(", ".join("{0}={1}".format(f, self._counts[f]) for f in self.fields))

class ScanContext(object):
    """Everything a single scan owns: its counters and the event type labels"""
    def __init__(self, types = None):
        self.stats = ScanStats()
        self.types = tuple(types or evt.EVENT_TYPES)

class RecordBoundaryCheck(object):
    """ Validates the record around a signature hit.

    offset is always the offset of the signature itself, the size of
    the record is the DWORD at offset - 4.
    """
    def __init__(self, address_space, context = None, dump = False):
        self.address_space = address_space
        self.context = context or ScanContext()
        self.dump = dump

    def read_length(self, offset):
        ## A signature at the very start of the input has no size in front of it
        if offset < 4:
            return 0
        data = self.address_space.read(offset - 4, 4)
        if len(data) < 4:
            return 0
        (length,) = struct.unpack("<I", data)
        return length

    def validate(self, offset):
        length = self.read_length(offset)

        debug.debug("Magic number located at offset 0x{0:x} with length of {1} bytes".format(offset, length))

        if length < constants.EVT_MIN_RECORD:
            return Candidate(offset, length, Classification.TOO_SMALL, offset + 4, None, None, None)

        if length == constants.EVT_MIN_RECORD:
            data = None
            if self.dump:
                data = self.address_space.read(offset - 4, length)
            return Candidate(offset, length, Classification.TOO_SMALL, offset + (length - 4), None, data, None)

        ## Records are rarely anywhere near 4K. A larger size is far more
        ## likely to be a stray signature, so only step past it.
        if length >= constants.EVT_MAX_RECORD:
            return Candidate(offset, length, Classification.OVERSIZED, offset + 4, None, None, None)

        data = self.address_space.read(offset - 4, length)
        trailer = None
        if len(data) == length:
            (trailer,) = struct.unpack_from("<I", data, length - 4)

        debug.debug("Possible record located at offset 0x{0:08x}; Length = 0x{1:x}, Final Length = {2}".format(
                    offset - 4, length, "0x{0:x}".format(trailer) if trailer is not None else "(truncated)"))

        if trailer != length:
            return Candidate(offset, length, Classification.MALFORMED, offset + length, trailer, data, None)

        record = evt.parse_record(data, offset = offset - 4, types = self.context.types)
        return Candidate(offset, length, Classification.ACCEPTED, offset + length, trailer, data, record)

class EvtScanner(object):
    """ Walks an address space looking for event records.

    Data is read in windows of SCAN_BLOCKSIZE bytes. The signature is
    only looked for at offsets that are a multiple of 4 away from where
    the scan (or the last candidate) left off.
    """
    ## A signature starting in the last bytes of a block must still be
    ## readable in full
    overlap = 4

    def __init__(self, context = None, dump = False, blocksize = constants.SCAN_BLOCKSIZE):
        self.context = context or ScanContext()
        self.dump = dump
        self.blocksize = blocksize
        self.state = ScanState.SCANNING

    @property
    def stats(self):
        return self.context.stats

    def _set_state(self, state):
        if state not in ScanState.transitions[self.state]:
            raise RuntimeError("Invalid scan state transition {0} -> {1}".format(self.state, state))
        self.state = state

    @staticmethod
    def _find_aligned(data, limit):
        pos = data.find(constants.EVT_MAGIC_BYTES)
        while pos != -1 and pos < limit:
            if pos % 4 == 0:
                return pos
            pos = data.find(constants.EVT_MAGIC_BYTES, pos + 1)
        return None

    def scan(self, address_space, offset = 0):
        """Yields a Candidate for every signature found, in offset order"""
        check = RecordBoundaryCheck(address_space, context = self.context, dump = self.dump)
        end = address_space.size()
        current_offset = offset
        self.state = ScanState.SCANNING

        while current_offset < end:
            l = min(self.blocksize + self.overlap, end - current_offset)
            data = address_space.read(current_offset, l)
            if not data:
                break

            i = self._find_aligned(data, min(self.blocksize, len(data)))
            if i is None:
                current_offset += min(self.blocksize, len(data))
                continue

            self._set_state(ScanState.CANDIDATE_FOUND)
            candidate = check.validate(current_offset + i)
            self.context.stats.increment(candidate.classification)

            if candidate.classification == Classification.ACCEPTED:
                self._set_state(ScanState.RECORD_ACCEPTED)
            else:
                self._set_state(ScanState.RECORD_REJECTED)

            yield candidate

            current_offset = candidate.next_offset
            self._set_state(ScanState.SCANNING)

        self._set_state(ScanState.DONE)
