# -*- test-case-name: txmetadata.test.test_raw -*-
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
Raw extended attribute I/O.

Values are stored and returned as C{bytes}, unchanged.  Every call goes
straight to the file system; nothing is cached between calls, so concurrent
callers see whatever ordering the platform gives them.

This implementation uses Bob Ippolito's xattr package, available from::

    https://pypi.org/project/xattr/
"""

__all__ = [
    "listKeys",
    "getRaw",
    "setRaw",
    "removeKey",
    "hasKey",
    "copyAllKeys",
]

from twisted.logger import Logger
from twisted.python.util import untilConcludes

from txmetadata.imetadata import AttributeStoreError, ErrorKind
from txmetadata.result import OperationResult, errorFromOSError
from txmetadata.target import validTarget

log = Logger()



def validKey(key):
    # Keys are passed through to the platform; only the type is checked
    if not isinstance(key, str):
        raise TypeError("Not an attribute key: %r" % (key,))



def _failed(operation, error):
    log.debug(
        "{operation} failed ({kind}): {message}",
        operation=operation, kind=error.kind.name, message=error.message,
    )
    return OperationResult.failure(error)



def listKeys(target):
    """
    Enumerate the names of all extended attributes on C{target}.

    @return: an L{OperationResult} holding a C{list} of C{str}.  A target
        with no attributes yields an empty list.
    """
    validTarget(target)
    try:
        names = untilConcludes(target.attrs.list)
    except (IOError, OSError) as e:
        return _failed("listKeys", errorFromOSError(e, path=target.path))
    except UnicodeDecodeError as e:
        return _failed("listKeys", AttributeStoreError(
            ErrorKind.encodingInvalid,
            "%s: attribute name is not valid UTF-8: %s" % (target.path, e),
            path=target.path,
        ))
    return OperationResult.success(list(names))



def getRaw(target, key):
    """
    Retrieve the bytes stored under C{key} on C{target}.
    """
    validTarget(target)
    validKey(key)
    try:
        data = untilConcludes(target.attrs.get, key)
    except (IOError, OSError) as e:
        return _failed("getRaw", errorFromOSError(e, path=target.path, key=key))
    return OperationResult.success(bytes(data))



def setRaw(target, key, value):
    """
    Store C{value} verbatim under C{key} on C{target}, replacing any
    existing value.
    """
    validTarget(target)
    validKey(key)
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError("Not a bytes value: %r" % (value,))
    try:
        untilConcludes(target.attrs.set, key, bytes(value))
    except (IOError, OSError) as e:
        return _failed("setRaw", errorFromOSError(e, path=target.path, key=key))
    return OperationResult.success()



def removeKey(target, key):
    """
    Remove the attribute C{key} from C{target}.  Removing an attribute which
    is not set fails with L{ErrorKind.attributeNotFound}.
    """
    validTarget(target)
    validKey(key)
    try:
        untilConcludes(target.attrs.remove, key)
    except (IOError, OSError) as e:
        return _failed("removeKey", errorFromOSError(e, path=target.path, key=key))
    return OperationResult.success()



def hasKey(target, key):
    """
    Determine whether C{key} is set on C{target}.

    A missing attribute is a successful C{False}; an unreachable target is
    still a failure.
    """
    result = getRaw(target, key)
    if result.kind is ErrorKind.attributeNotFound:
        return OperationResult.success(False)
    if result.failed:
        return result
    return OperationResult.success(True)



def copyAllKeys(source, destination):
    """
    Copy every attribute on C{source} onto C{destination}, overwriting
    attributes of the same name.  Stops at the first failure; attributes
    copied before it remain on C{destination}.

    @return: an L{OperationResult} holding the C{list} of copied keys.
    """
    validTarget(destination)
    keys = listKeys(source)
    if keys.failed:
        return keys

    copied = []
    for key in keys.value:
        data = getRaw(source, key)
        if data.failed:
            return data
        stored = setRaw(destination, key, data.value)
        if stored.failed:
            return stored
        copied.append(key)

    return OperationResult.success(copied)
