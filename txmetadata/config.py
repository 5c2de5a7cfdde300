# -*- test-case-name: txmetadata.test.test_config -*-
##
# Copyright (c) 2006-2017 Apple Inc. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
##

__all__ = [
    "Config",
    "ConfigDict",
    "ConfigProvider",
    "PListConfigProvider",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "config",
]

import copy
import os
import plistlib
from xml.parsers.expat import ExpatError

from twisted.logger import Logger, LogLevel, InvalidLogLevelError

from txmetadata.imetadata import ObjectFormat

log = Logger()


DEFAULT_CONFIG = {
    # Name of the ObjectFormat used by setObject() when the caller does not
    # give one.
    "DefaultObjectFormat": "xml",

    # Level at which the legacy call shape logs the failures it discards.
    "LegacyFailureLogLevel": "debug",
}



class ConfigurationError(RuntimeError):
    """
    Invalid configuration.
    """



class ConfigDict(dict):
    """
    Dictionary which can be accessed using attribute syntax, because
    that reads and writes nicer in code.  For example:
      C{config.DefaultObjectFormat}
    instead of:
      C{config["DefaultObjectFormat"]}
    """
    def __init__(self, mapping=None):
        if mapping is not None:
            for key, value in mapping.items():
                self[key] = value


    def __repr__(self):
        return "*" + dict.__repr__(self)


    def __setitem__(self, key, value):
        if key.startswith("_"):
            # Names beginning with "_" are reserved for real attributes
            raise KeyError("Keys may not begin with '_': %s" % (key,))

        if isinstance(value, dict) and not isinstance(value, self.__class__):
            dict.__setitem__(self, key, self.__class__(value))
        else:
            dict.__setitem__(self, key, value)


    def __setattr__(self, attr, value):
        if attr.startswith("_"):
            dict.__setattr__(self, attr, value)
        else:
            self[attr] = value


    def __getattr__(self, attr):
        if not attr.startswith("_") and attr in self:
            return self[attr]
        else:
            return dict.__getattribute__(self, attr)


    def __delattr__(self, attr):
        if not attr.startswith("_") and attr in self:
            del self[attr]
        else:
            dict.__delattr__(self, attr)



class ConfigProvider(object):
    """
    Configuration provider, abstraction for config storage/format/defaults.
    """

    def __init__(self, defaults=None):
        """
        Create configuration provider with given defaults.
        """
        self._configFileName = None
        if defaults is None:
            self._defaults = ConfigDict()
        else:
            self._defaults = ConfigDict(copy.deepcopy(defaults))


    def getDefaults(self):
        """
        Return defaults.
        """
        return self._defaults


    def setConfigFileName(self, configFileName):
        """
        Change configuration file path and name for next load operations.
        """
        self._configFileName = configFileName
        if self._configFileName:
            self._configFileName = os.path.abspath(configFileName)


    def loadConfig(self):
        """
        Load the configuration, return a dictionary of settings.
        """
        return self._defaults



class PListConfigProvider(ConfigProvider):
    """
    Configuration read from an XML property list file.  Keys absent from the
    file keep their defaults.
    """

    def loadConfig(self):
        configDict = {}
        if self._configFileName:
            configDict = self._parseConfigFromFile(self._configFileName)
        return ConfigDict(configDict)


    def _parseConfigFromFile(self, filename):
        try:
            with open(filename, "rb") as f:
                configDict = plistlib.load(f)
        except (IOError, OSError):
            log.error("Configuration file does not exist or is inaccessible: {f}", f=filename)
            raise ConfigurationError("Configuration file does not exist or is inaccessible: %s" % (filename,))
        except (ExpatError, ValueError):
            log.error("Configuration file is not a valid property list: {f}", f=filename)
            raise ConfigurationError("Configuration file is not a valid property list: %s" % (filename,))

        if not isinstance(configDict, dict):
            raise ConfigurationError("Configuration file does not contain a dictionary: %s" % (filename,))

        for key in configDict:
            if key not in self._defaults:
                log.warn("Ignoring unknown configuration option: {key}", key=key)
        return dict(
            (key, value) for key, value in configDict.items()
            if key in self._defaults
        )



class Config(object):
    def __init__(self, provider=None):
        if not provider:
            self._provider = ConfigProvider()
        else:
            self._provider = provider
        self._updating = False
        self._postUpdateHooks = []
        self.reset()


    def __setattr__(self, attr, value):
        if "_data" in self.__dict__ and attr in self.__dict__["_data"]:
            self._data[attr] = value
        else:
            self.__dict__[attr] = value

        # So as not to cause a flurry of updates, don't mark ourselves
        # dirty when the attribute begins with an underscore
        if not attr.startswith("_"):
            self.__dict__["_dirty"] = True

    _dirty = False
    _data = ()
    def __getattr__(self, attr):
        if self._dirty:
            self.update()

        if attr in self._data:
            return self._data[attr]
        raise AttributeError(attr)


    def addPostUpdateHooks(self, hooks):
        self._postUpdateHooks.extend(hooks)


    def update(self, items=None, reloading=False):
        if self._updating:
            return
        self._updating = True

        try:
            if not isinstance(items, ConfigDict):
                items = ConfigDict(items)

            mergeData(self._data, items)
            for hook in self._postUpdateHooks:
                hook(self._data, reloading=reloading)
        finally:
            self._updating = False
        self._dirty = False


    def load(self, configFile):
        self._provider.setConfigFileName(configFile)
        self.update(self._provider.loadConfig())


    def reload(self):
        configDict = self._provider.loadConfig()
        self.reset()
        self.update(configDict, reloading=True)


    def reset(self):
        self._data = ConfigDict(copy.deepcopy(self._provider.getDefaults()))
        self._dirty = True



def mergeData(oldData, newData):
    """
    Merge two ConfigDict objects; oldData will be updated with all the keys
    and values from newData
    @param oldData: the object to modify
    @type oldData: ConfigDict
    @param newData: the object to copy data from
    @type newData: ConfigDict
    """
    for key, value in newData.items():
        if isinstance(value, (dict,)):
            if key in oldData:
                assert isinstance(oldData[key], ConfigDict), \
                    "%r in %r is not a ConfigDict" % (oldData[key], oldData)
            else:
                oldData[key] = {}
            mergeData(oldData[key], value)
        else:
            oldData[key] = value



def _checkObjectFormat(configDict, reloading=False):
    try:
        ObjectFormat.lookupByName(configDict.DefaultObjectFormat)
    except (ValueError, TypeError):
        raise ConfigurationError(
            "Unknown DefaultObjectFormat: %r" % (configDict.DefaultObjectFormat,)
        )



def _checkLogLevel(configDict, reloading=False):
    try:
        LogLevel.levelWithName(configDict.LegacyFailureLogLevel)
    except (InvalidLogLevelError, TypeError):
        raise ConfigurationError(
            "Unknown LegacyFailureLogLevel: %r" % (configDict.LegacyFailureLogLevel,)
        )


POST_UPDATE_HOOKS = (
    _checkObjectFormat,
    _checkLogLevel,
)


config = Config(PListConfigProvider(DEFAULT_CONFIG))
config.addPostUpdateHooks(POST_UPDATE_HOOKS)
