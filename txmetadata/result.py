# -*- test-case-name: txmetadata.test.test_result -*-
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
Operation results and classification of platform failures.
"""

__all__ = [
    "OperationResult",
    "kindForErrno",
    "errorFromOSError",
    "ERRNO_NO_ATTR",
]

import errno
import os
import sys

from txmetadata.imetadata import AttributeStoreError, ErrorKind

#
# python-xattr on Linux fails with ENODATA for a missing attribute.  On
# Darwin and FreeBSD the xattr library fails with ENOATTR, which some
# versions of CPython do not expose.  Its value is 93.
#
if sys.platform.startswith(("darwin", "freebsd")):
    ERRNO_NO_ATTR = getattr(errno, "ENOATTR", 93)
else:
    ERRNO_NO_ATTR = errno.ENODATA

_errnoKinds = {}

for _kind, _names in (
    (ErrorKind.targetUnreachable, ("ENOENT", "ENOTDIR", "ELOOP", "ENAMETOOLONG")),
    (ErrorKind.permissionDenied, ("EACCES", "EPERM", "EROFS")),
    (ErrorKind.quotaOrSizeExceeded, ("E2BIG", "ERANGE", "ENOSPC", "EDQUOT", "EFBIG")),
    (ErrorKind.unsupportedOnFileSystem, ("ENOTSUP", "EOPNOTSUPP")),
):
    for _name in _names:
        if hasattr(errno, _name):
            _errnoKinds[getattr(errno, _name)] = _kind

_errnoKinds[ERRNO_NO_ATTR] = ErrorKind.attributeNotFound

del _kind, _names, _name



def kindForErrno(code):
    """
    Map a platform error code onto an L{ErrorKind}.

    Codes with no specific meaning for extended attributes map to
    L{ErrorKind.ioFailure}.
    """
    return _errnoKinds.get(code, ErrorKind.ioFailure)



def errorFromOSError(e, path=None, key=None):
    """
    Build an L{AttributeStoreError} describing a failed platform call.

    @param e: the error raised by the platform call.
    @type e: L{OSError}
    """
    kind = kindForErrno(e.errno)
    if e.errno is not None:
        reason = os.strerror(e.errno)
    else:
        reason = str(e)
    if key is None:
        message = "%s: %s" % (path, reason)
    else:
        message = "%s [%s]: %s" % (path, key, reason)
    return AttributeStoreError(kind, message, path=path, key=key, errno=e.errno)



class OperationResult(object):
    """
    The outcome of a metadata store operation: either a value or an
    L{AttributeStoreError}, never both and never neither.
    """

    __slots__ = ("value", "error")

    def __init__(self, value=None, error=None):
        if error is not None and value is not None:
            raise ValueError("A result may not hold both a value and an error")
        if error is not None and not isinstance(error, AttributeStoreError):
            raise TypeError("Not an AttributeStoreError: %r" % (error,))
        self.value = value
        self.error = error


    @classmethod
    def success(cls, value=None):
        return cls(value=value)


    @classmethod
    def failure(cls, error):
        if error is None:
            raise TypeError("A failed result requires an error")
        return cls(error=error)


    @property
    def succeeded(self):
        return self.error is None


    @property
    def failed(self):
        return self.error is not None


    @property
    def kind(self):
        """
        The L{ErrorKind} of the failure, or C{None} on success.
        """
        return None if self.error is None else self.error.kind


    def unwrap(self):
        """
        Return the value, raising the error if the operation failed.
        """
        if self.error is not None:
            raise self.error
        return self.value


    def valueOr(self, default):
        if self.error is not None:
            return default
        return self.value


    def __eq__(self, other):
        if not isinstance(other, OperationResult):
            return NotImplemented
        return (self.value, self.error) == (other.value, other.error)


    def __ne__(self, other):
        if not isinstance(other, OperationResult):
            return NotImplemented
        return not self.__eq__(other)


    __hash__ = None


    def __bool__(self):
        return self.error is None


    def __repr__(self):
        if self.error is not None:
            return "<%s failed: %r>" % (self.__class__.__name__, self.error)
        return "<%s succeeded: %r>" % (self.__class__.__name__, self.value)
