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
   A small object model for the fixed layout structures we carve.

   Structures are described as vtypes:

       'Name' : [ size, {
           'Member' : [ offset, ['native type name']],
       } ]

   and are instantiated over an address space with Object().
"""

#pylint: disable-msg=C0111

import struct
import functools
import evtcarve.debug as debug

## The following is a conversion of basic C99 types to python struct
## format strings. Everything we parse is little endian, regardless
## of the platform we happen to run on.
native_types = {
    'int' : [4, '<i'],
    'long': [4, '<i'],
    'unsigned long' : [4, '<I'],
    'unsigned int' : [4, '<I'],
    'char' : [1, '<c'],
    'unsigned char' : [1, '<B'],
    'unsigned short int' : [2, '<H'],
    'unsigned short' : [2, '<H'],
    'short' : [2, '<h'],
    'long long' : [8, '<q'],
    'unsigned long long' : [8, '<Q'],
    }

def Object(theType, offset, vm, name = None, profile = None, **kwargs):
    """ A function which instantiates the object named in theType (as
    a string) from the type in profile passing optional args of
    kwargs.
    """
    name = name or theType
    offset = int(offset)

    if profile is not None and profile.has_type(theType):
        return profile.types[theType](offset = offset, vm = vm, name = name, **kwargs)

    ## If we get here we have no idea what the type is supposed to be?
    debug.warning("Cant find object {0} in profile {1}?".format(theType, profile))
    return None

class BaseObject(object):

    def __init__(self, theType, offset, vm, name = None, **_kwargs):
        self._vol_theType = theType
        self._vol_offset = offset
        self._vol_vm = vm
        self._vol_name = name

    @property
    def obj_vm(self):
        return self._vol_vm

    @property
    def obj_offset(self):
        return self._vol_offset

    @property
    def obj_name(self):
        return self._vol_name

    def v(self):
        """ Do the actual reading and decoding of this member """
        return None

    def __repr__(self):
        return "[{0} {1}] @ 0x{2:08X}".format(self.__class__.__name__, self.obj_name or '',
                                     self.obj_offset)

class NativeType(BaseObject):
    def __init__(self, theType, offset, vm, format_string = None, **kwargs):
        BaseObject.__init__(self, theType, offset, vm, **kwargs)
        self.format_string = format_string

    def size(self):
        return struct.calcsize(self.format_string)

    def v(self):
        ## Carved data may stop short of the member, what is missing
        ## reads as zero
        data = self.obj_vm.zread(self.obj_offset, self.size())
        (val,) = struct.unpack(self.format_string, data)
        return val

    def __eq__(self, other):
        return self.v() == other

    def __repr__(self):
        return " [{0}]: {1}".format(self._vol_theType, self.v())

class CType(BaseObject):
    """ A CType is an object which represents a c struct """
    def __init__(self, theType, offset, vm, name = None, members = None, struct_size = 0, **kwargs):
        """ This must be instantiated with a dict of members. The keys
        are the member names, the values are (offset, Curried Object
        class) pairs that will be instantiated when accessed.
        """
        BaseObject.__init__(self, theType, offset, vm, name = name, **kwargs)
        self.members = members or {}
        self.struct_size = struct_size

    def size(self):
        return self.struct_size

    def v(self):
        """ When a struct is evaluated we just return our offset. """
        return int(self.obj_offset)

    def m(self, attr):
        try:
            offset, cls = self.members[attr]
        except KeyError:
            raise AttributeError("Struct {0} has no member {1}".format(self.obj_name, attr))

        return cls(offset = int(offset) + int(self.obj_offset), vm = self.obj_vm, name = attr)

    def __getattr__(self, attr):
        if attr.startswith("_") or attr in ('members', 'struct_size'):
            raise AttributeError(attr)
        return self.m(attr)

class Profile(object):
    """ A collection of vtypes compiled into instantiable classes """

    def __init__(self, vtypes = None):
        self.vtypes = {}
        self.types = {}
        if vtypes:
            self.add_types(vtypes)

    def add_types(self, vtypes):
        self.vtypes.update(vtypes)
        for name, (size, members) in vtypes.items():
            self.types[name] = self._compile_struct(name, size, members)

    def has_type(self, theType):
        return theType in self.types

    def get_obj_size(self, name):
        return self.vtypes[name][0]

    def _list_to_type(self, name, typeList):
        typeName = typeList[0]
        if typeName not in native_types:
            raise TypeError("Unsupported member type {0} for {1}".format(typeName, name))

        _size, fmt = native_types[typeName]
        return functools.partial(NativeType, typeName, format_string = fmt)

    def _compile_struct(self, name, size, members):
        compiled = {}
        for member_name, (offset, typeList) in members.items():
            compiled[member_name] = (offset, self._list_to_type(member_name, typeList))

        return functools.partial(CType, name, members = compiled, struct_size = size)
