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

""" Configuration for evtcarve.

Options are declared by the modules that need them through
add_option(), and are then resolved, in order, from:

   - values forced by the code with update()

   - the command line

   - the environment (EVTCARVE_<NAME>)

   - the [DEFAULT] section of a configuration file, by default
     ~/.evtcarverc

   - the default given when the option was declared
"""
import configparser
import optparse
import os
import sys

import evtcarve.constants as constants
import evtcarve.exceptions as exceptions

class EvtCarveOptionParser(optparse.OptionParser):
    final = False
    help_hooks = []

    def _process_args(self, largs, rargs, values):
        try:
            return optparse.OptionParser._process_args(self, largs, rargs, values)
        except (optparse.BadOptionError, optparse.OptionValueError) as err:
            if self.final:
                raise err

    def error(self, msg):
        ## We cant emit errors about missing parameters until all the
        ## options have been registered
        if self.final:
            return optparse.OptionParser.error(self, msg)
        else:
            raise RuntimeError(msg)

    def exit(self, status = 0, msg = None):
        if msg:
            sys.stderr.write(msg)
        sys.exit(1 if status else status)

    def print_help(self, file = None):
        file = file or sys.stdout
        optparse.OptionParser.print_help(self, file)

        for cb in self.help_hooks:
            file.write(cb())

class ConfObject(object):
    """ Holds the configuration of a single run.

    Unlike a process wide singleton, every instance has its own
    parser and option tables, so several can coexist (for example
    in tests).
    """
    env_prefix = "EVTCARVE_"

    def __init__(self, argv = None):
        self.__dict__['optparser'] = EvtCarveOptionParser(add_help_option = False,
                                                          version = False)
        self.__dict__['optparser'].help_hooks = []
        self.__dict__['argv'] = argv

        ## Options derived by reading any config files
        self.__dict__['cnf_opts'] = {}
        ## Command line opts
        self.__dict__['opts'] = {}
        self.__dict__['args'] = []
        self.__dict__['default_opts'] = {}
        ## Forced values, these can not be overridden
        self.__dict__['readonly'] = {}
        ## A list of option names:
        self.__dict__['options'] = []
        self.__dict__['_filenames'] = []

        self.optparser.add_option("-h", "--help", action = "store_true", default = False,
                                  help = "list all available options and their default values")

    def set_usage(self, usage = None, version = None):
        if usage:
            self.optparser.set_usage(usage)

        if version:
            self.optparser.version = version

    def add_file(self, filename):
        """ Adds a new file to parse """
        if filename in self._filenames:
            return

        self._filenames.append(filename)
        self.cnf_opts.clear()

        for f in self._filenames:
            if not os.access(f, os.R_OK):
                continue

            conf_parser = configparser.ConfigParser()
            try:
                conf_parser.read(f)
                items = conf_parser.items('DEFAULT')
            except configparser.Error as e:
                raise exceptions.ConfigurationError("Unable to read configuration file {0}: {1}".format(f, e))

            for k, v in items:
                self.cnf_opts[k.replace("-", "_")] = v

    def print_help(self):
        return self.optparser.print_help()

    def add_help_hook(self, cb):
        """ Adds an epilog to the help message """
        self.optparser.help_hooks.append(cb)

    def parse_options(self, final = True):
        """ Parses the options from command line and any conf files
        currently added.

        The final parameter should only be set by main programs at the
        point where they are prepared for us to call exit if required
        (for example when we detect the -h parameter).
        """
        self.optparser.final = final

        try:
            (opts, args) = self.optparser.parse_args(self.argv)

            self.opts.clear()

            for k in dir(opts):
                v = getattr(opts, k)
                if k in self.options and v is not None:
                    self.opts[k] = v

        ## If error() was called we catch it here
        except RuntimeError:
            opts = {}
            args = self.optparser.largs

        self.__dict__['args'] = args

        if final and getattr(opts, "help", False):
            self.optparser.print_help()
            sys.exit(1)

    def add_option(self, option, short_option = None, **args):
        """ Adds options both to the config file parser and the
        command line parser.

        Args:
          option:            The long option name.
          short_option:      An optional short option.
        """
        option = option.lower()
        normalized_option = option.replace("-", "_")

        if normalized_option in self.options:
            return

        self.options.append(normalized_option)

        if 'default' in args:
            self.default_opts[normalized_option] = args.pop('default')

        if short_option:
            self.optparser.add_option("-{0}".format(short_option), "--{0}".format(option), **args)
        else:
            self.optparser.add_option("--{0}".format(option), **args)

    def update(self, key, value):
        """ This can be used by scripts to force a value of an option """
        self.readonly[key.lower().replace("-", "_")] = value

    def get_value(self, key):
        return getattr(self, key.replace("-", "_"))

    ## Values from the environment or a config file arrive as strings
    def get_int(self, key):
        value = self.get_value(key)
        if value is None or value == "":
            return 0
        if isinstance(value, str):
            try:
                return int(value, 0)
            except ValueError:
                raise exceptions.ConfigurationError("Option {0} expects an integer, got {1!r}".format(key, value))
        return int(value)

    def get_bool(self, key):
        value = self.get_value(key)
        if isinstance(value, str):
            return value.strip().lower() not in ("", "0", "false", "no", "off")
        return bool(value)

    def __setattr__(self, attr, value):
        self.update(attr, value)

    def __getattr__(self, attr):
        if attr.startswith("_"):
            raise AttributeError(attr)

        key = attr.lower()

        try:
            return self.readonly[key]
        except KeyError:
            pass

        try:
            return self.opts[key]
        except KeyError:
            pass

        try:
            return os.environ[self.env_prefix + attr.upper()]
        except KeyError:
            pass

        try:
            return self.cnf_opts[key]
        except KeyError:
            pass

        try:
            return self.default_opts[key]
        except KeyError:
            pass

        raise AttributeError("Parameter {0} is not configured - try setting it on the command line (-h for help)".format(attr))

def default_conf_path():
    try:
        return os.path.join(os.environ['HOME'], constants.DEFAULT_CONF_NAME)
    except KeyError:
        return constants.DEFAULT_CONF_NAME

def register_options(config):
    config.add_option("CONF-FILE", default = default_conf_path(),
                      help = "User based configuration file")
