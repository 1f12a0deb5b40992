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

class EvtCarveException(Exception):
    """Generic evtcarve specific exception, to help differentiate from other exceptions"""
    def __init__(self, *args, **kwargs):
        Exception.__init__(self, *args, **kwargs)

class AddrSpaceError(EvtCarveException):
    """Input could not be opened as an address space"""
    def __init__(self, location = None):
        self.location = location
        self.reasons = []
        EvtCarveException.__init__(self, "Unable to open {0}".format(location))

    def append_reason(self, driver, reason):
        self.reasons.append((driver, reason))

    def __str__(self):
        result = EvtCarveException.__str__(self)
        if self.reasons:
            result += "\nTried to open input as:\n"
            for k, v in self.reasons:
                result += " {0}: {1}\n".format(k, v)

        return result

class ConfigurationError(EvtCarveException):
    """An option was given a value we cannot use"""
