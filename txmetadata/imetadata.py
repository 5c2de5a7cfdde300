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

"""
Extended attribute metadata interfaces
"""

__all__ = [
    "ErrorKind",
    "ObjectFormat",
    "AttributeStoreError",
    "IMetadataStore",
    "ILegacyMetadataStore",
]

import plistlib

from zope.interface import Interface

from constantly import Names, NamedConstant, Values, ValueConstant

#
# Exceptions
#

class ErrorKind(Names):
    """
    Kinds of failure reported by metadata store operations.
    """
    targetUnreachable = NamedConstant()
    permissionDenied = NamedConstant()
    attributeNotFound = NamedConstant()
    quotaOrSizeExceeded = NamedConstant()
    unsupportedOnFileSystem = NamedConstant()
    ioFailure = NamedConstant()

    # Codec failures
    encodingInvalid = NamedConstant()
    unserializable = NamedConstant()
    malformedData = NamedConstant()



class ObjectFormat(Values):
    """
    Property list formats used to store structured values.

    Values are the format identifiers understood by L{plistlib}.
    """
    xml = ValueConstant(plistlib.FMT_XML)
    binary = ValueConstant(plistlib.FMT_BINARY)



class AttributeStoreError(RuntimeError):
    """
    Extended attribute operation failed.

    Instances are normally carried inside an L{OperationResult} rather than
    raised.

    @ivar kind: the classification of the failure.
    @type kind: L{ErrorKind}

    @ivar path: the file system path of the target, or C{None}.

    @ivar key: the attribute name involved, or C{None} for operations which
        do not name one.

    @ivar errno: the platform error code, or C{None} for codec failures.
    """

    def __init__(self, kind, message, path=None, key=None, errno=None):
        RuntimeError.__init__(self, message)
        self.kind = kind
        self.message = message
        self.path = path
        self.key = key
        self.errno = errno


    def __repr__(self):
        return "<%s %s: %s>" % (
            self.__class__.__name__, self.kind.name, self.message,
        )


    def __eq__(self, other):
        if not isinstance(other, AttributeStoreError):
            return NotImplemented
        return (
            (self.kind, self.path, self.key, self.errno) ==
            (other.kind, other.path, other.key, other.errno)
        )


    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result


    __hash__ = RuntimeError.__hash__



#
# Interfaces
#

class IMetadataStore(Interface):
    """
    Typed access to the extended attributes of file system entries.

    Every method returns an L{OperationResult}: either the value described
    below or an L{AttributeStoreError}.  No method raises for attribute
    failures.

    Targets are L{txmetadata.target.AttributeTarget}s, which decide whether
    symbolic links are traversed.  Keys are C{str} and are passed to the
    platform untouched.
    """

    def listKeys(target): #@NoSelf
        """
        Enumerate the attribute names set on C{target}.

        @return: a result holding a C{list} of C{str}, empty if the target has
            no attributes.
        """

    def getRaw(target, key): #@NoSelf
        """
        Retrieve the bytes stored under C{key}.

        @return: a result holding C{bytes}.
        """

    def setRaw(target, key, value): #@NoSelf
        """
        Store C{value} verbatim under C{key}, replacing any existing value.

        @return: a result holding C{None}.
        """

    def removeKey(target, key): #@NoSelf
        """
        Remove the attribute C{key}.

        @return: a result holding C{None}.
        """

    def hasKey(target, key): #@NoSelf
        """
        Determine whether C{key} is set on C{target}.

        @return: a result holding a C{bool}.
        """

    def copyAllKeys(source, destination): #@NoSelf
        """
        Copy every attribute of C{source} onto C{destination}.

        @return: a result holding the C{list} of copied keys.
        """

    def getText(target, key): #@NoSelf
        """
        Retrieve the value of C{key} decoded as UTF-8.

        @return: a result holding C{str}.
        """

    def setText(target, key, text): #@NoSelf
        """
        Store C{text} encoded as UTF-8 under C{key}.

        @return: a result holding C{None}.
        """

    def getObject(target, key): #@NoSelf
        """
        Retrieve the value of C{key} parsed as a property list of any
        supported format.

        @return: a result holding the structured value.
        """

    def setObject(target, key, value, format=None): #@NoSelf
        """
        Store C{value} under C{key} serialised as a property list.

        @param format: an L{ObjectFormat} constant, or
            C{None} for the configured default.

        @return: a result holding C{None}.
        """



class ILegacyMetadataStore(Interface):
    """
    Sentinel-returning view of an L{IMetadataStore}.

    Failures are logged and discarded.  Getters return C{None} (or an empty
    list from C{listKeys}, C{False} from C{hasKey}) on failure.  Setters,
    C{removeKey} and C{copyAllKeys} always return C{None} and give no
    indication of success or failure at all; use L{IMetadataStore} wherever
    failure must be observed.
    """

    def listKeys(target): #@NoSelf
        """
        @return: a C{list} of C{str}, empty on failure.
        """

    def getRaw(target, key): #@NoSelf
        """
        @return: C{bytes}, or C{None} on failure.
        """

    def setRaw(target, key, value): #@NoSelf
        """
        @return: C{None}.
        """

    def removeKey(target, key): #@NoSelf
        """
        @return: C{None}.
        """

    def hasKey(target, key): #@NoSelf
        """
        @return: C{True} if C{key} is set, C{False} if not or on failure.
        """

    def copyAllKeys(source, destination): #@NoSelf
        """
        @return: C{None}.
        """

    def getText(target, key): #@NoSelf
        """
        @return: C{str}, or C{None} on failure.
        """

    def setText(target, key, text): #@NoSelf
        """
        @return: C{None}.
        """

    def getObject(target, key): #@NoSelf
        """
        @return: the structured value, or C{None} on failure.
        """

    def setObject(target, key, value, format=None): #@NoSelf
        """
        @return: C{None}.
        """
