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
   Address spaces give the scanner windowed, bounded access to the
   input. Nothing here ever reads the whole image into memory.
"""

import os
import evtcarve.exceptions as exceptions
import evtcarve.debug as debug

class ASAssertionError(AssertionError):

    def __init__(self, *args, **kwargs):
        AssertionError.__init__(self, *args, **kwargs)

class BaseAddressSpace(object):
    """ This is the base class of all Address Spaces. """
    def __init__(self, *_args, **_kwargs):
        self.name = "Unnamed AS"

    def as_assert(self, assertion, error = None):
        """Duplicate for the assert command (so that optimizations don't disable them)"""
        if not assertion:
            if error is None:
                error = "Instantiation failed for unspecified reason"
            raise ASAssertionError(error)

    def read(self, addr, length):
        """ Read some data from a certain offset.

        Reads are clipped to the end of the address space, so the
        result may be shorter than length. Reads starting outside
        the address space return an empty string.
        """
        raise NotImplementedError("This is an abstract method and should not be referenced directly")

    def zread(self, addr, length):
        """ Read data from a certain offset padded with \\x00 where data is not available """
        data = self.read(addr, length)
        if len(data) != length:
            data += b"\x00" * (length - len(data))
        return data

    def size(self):
        raise NotImplementedError("This is an abstract method and should not be referenced directly")

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *_exc):
        self.close()
        return False

class FileAddressSpace(BaseAddressSpace):
    """ This is a direct file AS.

    Every read seeks and reads at most the requested window.
    """
    def __init__(self, path, **kwargs):
        BaseAddressSpace.__init__(self, **kwargs)
        self.as_assert(path, 'Filename must be specified')
        self.as_assert(os.path.isfile(path), 'Filename must be specified and exist')
        self.name = os.path.abspath(path)
        self.fname = self.name
        self.fhandle = open(self.fname, 'rb')
        self.fhandle.seek(0, os.SEEK_END)
        self.fsize = self.fhandle.tell()

    def read(self, addr, length):
        addr, length = int(addr), int(length)
        if addr < 0 or length <= 0 or addr >= self.fsize:
            return b""
        length = min(length, self.fsize - addr)
        self.fhandle.seek(addr)
        return self.fhandle.read(length)

    def size(self):
        return self.fsize

    def close(self):
        self.fhandle.close()

## This is a specialised AS for use internally and in tests - it
## provides the same interface over a bytes buffer.
class BufferAddressSpace(BaseAddressSpace):
    def __init__(self, data = b'', **kwargs):
        BaseAddressSpace.__init__(self, **kwargs)
        self.name = "Buffer"
        self.data = data

    def read(self, addr, length):
        addr = int(addr)
        if addr < 0 or length <= 0:
            return b""
        return self.data[addr: addr + int(length)]

    def size(self):
        return len(self.data)

def load_as(path):
    """Opens path as an address space, raising AddrSpaceError if we cannot"""
    error = exceptions.AddrSpaceError(path)
    for cls in [FileAddressSpace]:
        debug.debug("Trying {0} ".format(cls.__name__))
        try:
            result = cls(path)
            debug.debug("Succeeded instantiating {0}".format(result.name))
            return result
        except ASAssertionError as e:
            debug.debug("Failed instantiating {0}: {1}".format(cls.__name__, e), 2)
            error.append_reason(cls.__name__, e)
        except (IOError, OSError) as e:
            debug.debug("Failed instantiating (exception): {0}".format(e))
            error.append_reason(cls.__name__ + " - EXCEPTION", e)

    raise error
