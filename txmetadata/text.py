# -*- test-case-name: txmetadata.test.test_text -*-
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
UTF-8 text stored in extended attributes.
"""

__all__ = [
    "getText",
    "setText",
]

from twisted.logger import Logger

from txmetadata.imetadata import AttributeStoreError, ErrorKind
from txmetadata.raw import getRaw, setRaw
from txmetadata.result import OperationResult
from txmetadata.target import validTarget

log = Logger()



def setText(target, key, text):
    """
    Store C{text} under C{key} as UTF-8.
    """
    validTarget(target)
    if not isinstance(text, str):
        raise TypeError("Not text: %r" % (text,))
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        # Lone surrogates have no UTF-8 form
        log.debug("Unable to encode text for {key}: {e}", key=key, e=e)
        return OperationResult.failure(AttributeStoreError(
            ErrorKind.encodingInvalid,
            "%s [%s]: text cannot be encoded as UTF-8: %s" % (target.path, key, e),
            path=target.path, key=key,
        ))
    return setRaw(target, key, data)



def getText(target, key):
    """
    Retrieve the value of C{key} decoded as UTF-8.  Bytes which are not
    valid UTF-8 fail with L{ErrorKind.encodingInvalid}; the raw value is
    still available from L{getRaw}.
    """
    result = getRaw(target, key)
    if result.failed:
        return result
    try:
        return OperationResult.success(result.value.decode("utf-8"))
    except UnicodeDecodeError as e:
        log.debug("Value of {key} on {path} is not UTF-8: {e}", key=key, path=target.path, e=e)
        return OperationResult.failure(AttributeStoreError(
            ErrorKind.encodingInvalid,
            "%s [%s]: value is not valid UTF-8: %s" % (target.path, key, e),
            path=target.path, key=key,
        ))
