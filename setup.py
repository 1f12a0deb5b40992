#!/usr/bin/env python

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

import re

from setuptools import setup

def read_version():
    """Reads VERSION without importing the package"""
    with open("evtcarve/constants.py") as fh:
        return re.search(r'^VERSION = "([^"]+)"', fh.read(), re.M).group(1)

opts = {}

opts['name'] = "evtcarve"
opts['version'] = read_version()
opts['description'] = "evtcarve -- carve Windows Event Log (EVT) records from unstructured data"
opts['license'] = "GPL"
opts['python_requires'] = ">=3.7"
opts['py_modules'] = ["lfle"]
opts['packages'] = ["evtcarve",
                    "evtcarve.renderers"]
opts['entry_points'] = {'console_scripts': ['lfle = lfle:main']}
opts['extras_require'] = {'test': ['pytest']}

distrib = setup(**opts) #pylint: disable-msg=W0142
