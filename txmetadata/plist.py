# -*- test-case-name: txmetadata.test.test_plist -*-
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
Structured values stored in extended attributes as property lists.

A structured value is built only from C{str}, C{int}, C{float}, C{bool},
C{bytes} (or C{bytearray}), C{list} and C{dict} with C{str} keys.  Anything
else, including tuples, C{None}, dates and self-referencing containers, is
refused rather than converted, so that every stored value reads back equal
to the one written.  The same rules apply to what is read: a stored property
list holding anything else is reported as malformed.  Containers may nest
at most L{MAX_DEPTH} deep.

Values are written as XML property lists unless another L{ObjectFormat} is
requested, and read back in whichever format they were written.
"""

__all__ = [
    "MAX_DEPTH",
    "ObjectFormat",
    "serialize",
    "deserialize",
    "formatOf",
    "getObject",
    "setObject",
]

import plistlib
from xml.parsers.expat import ExpatError

from twisted.logger import Logger

from txmetadata.config import config
from txmetadata.imetadata import AttributeStoreError, ErrorKind, ObjectFormat
from txmetadata.raw import getRaw, setRaw
from txmetadata.result import OperationResult
from txmetadata.target import validTarget

log = Logger()

# Integer range representable in a property list
_MIN_INTEGER = -(1 << 63)
_MAX_INTEGER = (1 << 64) - 1

# Deepest container nesting accepted in either direction
MAX_DEPTH = 256

_BINARY_HEADER = b"bplist00"

# plistlib's XML reader lets some of these escape on malformed input; the
# binary reader wraps its own as InvalidFileException (a ValueError).  Both
# readers recurse per nesting level.
_PARSE_ERRORS = (
    ValueError, ExpatError, IndexError, KeyError, AttributeError, TypeError,
    OverflowError, RecursionError,
)



def _checkText(text, where, format):
    # The XML reader turns carriage returns into newlines
    if format is ObjectFormat.xml and "\r" in text:
        raise AttributeStoreError(
            ErrorKind.unserializable,
            "Carriage return cannot be stored in an XML property list at %s" % (where,),
        )



def _checkValue(value, where, active, format, depth=0):
    """
    Verify that C{value} is a structured value which C{format} can hold.
    A C{format} of C{None} checks only the types.

    @raise AttributeStoreError: of kind L{ErrorKind.unserializable}.
    """
    if isinstance(value, str):
        _checkText(value, where, format)
        return

    if isinstance(value, (bool, float, bytes, bytearray)):
        return

    if isinstance(value, int):
        if not _MIN_INTEGER <= value <= _MAX_INTEGER:
            raise AttributeStoreError(
                ErrorKind.unserializable,
                "Integer out of range at %s: %d" % (where, value),
            )
        return

    if isinstance(value, (list, dict)):
        if id(value) in active:
            raise AttributeStoreError(
                ErrorKind.unserializable,
                "Container refers to itself at %s" % (where,),
            )
        if depth >= MAX_DEPTH:
            raise AttributeStoreError(
                ErrorKind.unserializable,
                "Containers nested more than %d deep" % (MAX_DEPTH,),
            )
        active.add(id(value))
        try:
            if isinstance(value, list):
                for index, item in enumerate(value):
                    _checkValue(item, "%s[%d]" % (where, index), active, format, depth + 1)
            else:
                for name, item in value.items():
                    if not isinstance(name, str):
                        raise AttributeStoreError(
                            ErrorKind.unserializable,
                            "Non-string key at %s: %r" % (where, name),
                        )
                    _checkText(name, where, format)
                    _checkValue(item, "%s[%r]" % (where, name), active, format, depth + 1)
        finally:
            active.discard(id(value))
        return

    raise AttributeStoreError(
        ErrorKind.unserializable,
        "Unsupported type at %s: %s" % (where, type(value).__name__),
    )



def serialize(value, format=ObjectFormat.xml):
    """
    Serialise a structured value as a property list.

    @param format: the L{ObjectFormat} to write.

    @return: the encoded C{bytes}.

    @raise AttributeStoreError: of kind L{ErrorKind.unserializable} if
        C{value} is not a structured value or cannot be expressed in
        C{format}.  Containers nested deeper than L{MAX_DEPTH} are refused,
        as are strings holding a carriage return when writing XML.
    """
    if format not in ObjectFormat.iterconstants():
        raise TypeError("Not an ObjectFormat: %r" % (format,))

    _checkValue(value, "root", set(), format)

    try:
        return plistlib.dumps(value, fmt=format.value, sort_keys=False)
    except (TypeError, ValueError, OverflowError, RecursionError) as e:
        # e.g. control characters in a string written as XML
        raise AttributeStoreError(
            ErrorKind.unserializable,
            "Unable to write %s property list: %s" % (format.name, e),
        )



def deserialize(data):
    """
    Parse a property list of any supported format.

    @raise AttributeStoreError: of kind L{ErrorKind.malformedData} if
        C{data} is not a property list, or holds something other than a
        structured value (dates, UIDs, self-referencing containers or
        containers nested deeper than L{MAX_DEPTH}).
    """
    try:
        value = plistlib.loads(data)
    except _PARSE_ERRORS as e:
        raise AttributeStoreError(
            ErrorKind.malformedData,
            "Not a property list: %s" % (e,),
        )
    try:
        _checkValue(value, "root", set(), None)
    except AttributeStoreError as e:
        raise AttributeStoreError(
            ErrorKind.malformedData,
            "Property list does not hold a structured value: %s" % (e.message,),
        )
    return value



def formatOf(data):
    """
    Determine the L{ObjectFormat} of C{data}.

    @return: an L{ObjectFormat} constant, or C{None} if C{data} does not
        parse as any of them.
    """
    try:
        deserialize(data)
    except AttributeStoreError:
        return None
    if data[:8] == _BINARY_HEADER:
        return ObjectFormat.binary
    return ObjectFormat.xml



def defaultFormat():
    return ObjectFormat.lookupByName(config.DefaultObjectFormat)



def setObject(target, key, value, format=None):
    """
    Store a structured value under C{key} as a property list.

    @param format: the L{ObjectFormat} to write, or C{None} for the
        configured default (XML unless configured otherwise).  XML property
        lists cannot hold a carriage return; text containing one fails with
        L{ErrorKind.unserializable} unless written as
        L{ObjectFormat.binary}.
    """
    validTarget(target)
    if format is None:
        format = defaultFormat()
    try:
        data = serialize(value, format)
    except AttributeStoreError as e:
        log.debug("Unable to store {key} on {path}: {message}", key=key, path=target.path, message=e.message)
        return OperationResult.failure(AttributeStoreError(
            e.kind, "%s [%s]: %s" % (target.path, key, e.message),
            path=target.path, key=key,
        ))
    return setRaw(target, key, data)



def getObject(target, key):
    """
    Retrieve the structured value stored under C{key}, in whichever
    supported format it was written.
    """
    result = getRaw(target, key)
    if result.failed:
        return result
    try:
        return OperationResult.success(deserialize(result.value))
    except AttributeStoreError as e:
        log.debug("Invalid value for {key} on {path}: {message}", key=key, path=target.path, message=e.message)
        return OperationResult.failure(AttributeStoreError(
            e.kind, "%s [%s]: %s" % (target.path, key, e.message),
            path=target.path, key=key,
        ))
