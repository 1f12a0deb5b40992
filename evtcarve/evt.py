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
Decoding of carved EVENTLOGRECORD structures.

References:
  http://msdn.microsoft.com/en-us/library/aa363646(VS.85).aspx
  WFA 2E pg 260-263 by Harlan Carvey
"""

import evtcarve.obj as obj
import evtcarve.sid as sid
import evtcarve.constants as constants
import evtcarve.addrspace as addrspace

evt_record_types = {
    'EVTRecordStruct' : [ 0x38, {
        'RecordLength' : [ 0x0, ['unsigned int']],
        'Magic' : [ 0x4, ['unsigned int']],  #LfLe
        'RecordNumber' : [ 0x8, ['unsigned int']],
        'TimeGenerated' : [ 0xc, ['unsigned int']],
        'TimeWritten' : [ 0x10, ['unsigned int']],
        'EventIDLow' : [ 0x14, ['unsigned short']],
        'EventIDHigh' : [ 0x16, ['unsigned short']],
        'EventType' : [ 0x18, ['unsigned short']],
        'NumStrings' : [ 0x1a, ['unsigned short']], #number of description strings in event message
        'EventCategory' : [ 0x1c, ['unsigned short']],
        'ReservedFlags' : [ 0x1e, ['unsigned short']],
        'ClosingRecordNum' : [ 0x20, ['unsigned int']],
        'StringOffset' : [ 0x24, ['unsigned int']], #offset w/in record of description strings
        'SidLength' : [ 0x28, ['unsigned int']], #length of SID: if 0 no SID is present
        'SidOffset' : [ 0x2c, ['unsigned int']], #offset w/in record to start of SID (if present)
        'DataLength' : [ 0x30, ['unsigned int']], #length of binary data of record
        'DataOffset' : [ 0x34, ['unsigned int']], #offset of data w/in record
    } ],
}

EVT_PROFILE = obj.Profile(evt_record_types)

## Checked in this order, the first bit set wins. Several bits set at
## once has no defined meaning.
EVENT_TYPES = ((0x0001, "Error"),
               (0x0002, "Warn"),
               (0x0004, "Info"),
               (0x0008, "Success"),
               (0x0010, "Failure"))

NO_SID = "N/A"

def event_type_label(event_type, types = EVENT_TYPES):
    for bit, label in types:
        if event_type & bit:
            return label
    return ""

def strip_nulls(data):
    return data.replace(b"\x00", b"")

def to_text(data):
    ## latin-1 maps every byte, so garbage passes through unchanged
    return data.decode("latin-1")

class EventRecord(object):
    """One carved event log record"""

    def __init__(self, offset = None, **kwargs):
        self.offset = offset
        self.length = 0
        self.record_number = 0
        self.time_generated = 0
        self.time_written = 0
        self.event_id = 0
        self.event_id_high = 0
        self.event_type = 0
        self.event_type_label = ""
        self.num_strings = 0
        self.category = 0
        self.closing_record_number = 0
        self.string_offset = 0
        self.sid_length = 0
        self.sid_offset = 0
        self.data_length = 0
        self.data_offset = 0
        self.source = ""
        self.computer_name = ""
        self.security_identifier = NO_SID
        self.strings = ""
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __repr__(self):
        return "<EventRecord {0} @ {1}>".format(self.record_number,
                                               "0x{0:x}".format(self.offset) if self.offset is not None else "?")

def split_names(data, end):
    """Source and computer name, the two null terminated UTF-16
    strings following the fixed header"""
    items = data[constants.EVT_HEADER_SIZE:end].split(b"\x00\x00")
    source = to_text(strip_nulls(items[0]))
    computer_name = ""
    if len(items) > 1:
        computer_name = to_text(strip_nulls(items[1]))
    return source, computer_name

def split_strings(data, num_strings):
    """Split the description strings, keeping any remainder in the last one"""
    if num_strings:
        strings = data.split(b"\x00\x00", num_strings - 1)
    else:
        strings = data.split(b"\x00\x00")
        while strings and not strings[-1]:
            strings.pop()

    text = b",".join(strings)
    text = strip_nulls(text).replace(b"\t", b"").replace(b"\n", b" ").replace(b"\r", b"")
    return to_text(text)

def parse_record(data, offset = None, types = EVENT_TYPES):
    """Decode the raw bytes of a record whose length has already been
    validated. data starts at the RecordLength field.

    Every field is taken by position, so this always returns a record.
    """
    bufferas = addrspace.BufferAddressSpace(data = data)
    evtlog = obj.Object("EVTRecordStruct", offset = 0, vm = bufferas, profile = EVT_PROFILE)

    rec = EventRecord(offset = offset,
                      length = evtlog.RecordLength.v(),
                      record_number = evtlog.RecordNumber.v(),
                      time_generated = evtlog.TimeGenerated.v(),
                      time_written = evtlog.TimeWritten.v(),
                      event_id = evtlog.EventIDLow.v(),
                      event_id_high = evtlog.EventIDHigh.v(),
                      event_type = evtlog.EventType.v(),
                      num_strings = evtlog.NumStrings.v(),
                      category = evtlog.EventCategory.v(),
                      closing_record_number = evtlog.ClosingRecordNum.v(),
                      string_offset = evtlog.StringOffset.v(),
                      sid_length = evtlog.SidLength.v(),
                      sid_offset = evtlog.SidOffset.v(),
                      data_length = evtlog.DataLength.v(),
                      data_offset = evtlog.DataOffset.v())

    rec.event_type_label = event_type_label(rec.event_type, types)

    ## If the SidLength is zero, the strings follow the names directly
    if rec.sid_length == 0:
        end = rec.string_offset
        rec.security_identifier = NO_SID
    else:
        end = rec.sid_offset
        rec.security_identifier = sid.translate_sid(data[rec.sid_offset:rec.sid_offset + rec.sid_length])

    rec.source, rec.computer_name = split_names(data, end)
    rec.strings = split_strings(data[rec.string_offset:rec.data_offset], rec.num_strings)

    return rec
