# -*- test-case-name: txmetadata.test.test_legacy -*-
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
Legacy, sentinel-returning metadata calls.

Each function here calls the same-named function of L{txmetadata.raw},
L{txmetadata.text} or L{txmetadata.plist} exactly once and returns its
value.  On failure the error is logged and dropped:

  - C{getRaw}, C{getText} and C{getObject} return C{None}
  - C{listKeys} returns an empty list
  - C{hasKey} returns C{False}
  - C{setRaw}, C{setText}, C{setObject}, C{removeKey} and C{copyAllKeys}
    return C{None} whether or not they succeeded.  They give no indication
    of failure at all; do not use them where failure matters.

New code should use the result-returning calls instead.
"""

__all__ = [
    "legacyCall",
    "listKeys",
    "getRaw",
    "setRaw",
    "removeKey",
    "hasKey",
    "copyAllKeys",
    "getText",
    "setText",
    "getObject",
    "setObject",
]

from functools import wraps

from twisted.logger import Logger, LogLevel

from txmetadata import raw, text, plist
from txmetadata.config import config

log = Logger()



def legacyCall(explicit, sentinel=None, void=False):
    """
    Adapt a result-returning call into one which returns a bare value.

    @param explicit: a callable returning an L{OperationResult}.

    @param sentinel: a 0-arg callable producing the value returned on
        failure, or C{None} to return C{None}.

    @param void: if true, the adapted call always returns C{None}.
    """
    @wraps(explicit)
    def call(*args, **kwargs):
        result = explicit(*args, **kwargs)
        if result.failed:
            log.emit(
                LogLevel.levelWithName(config.LegacyFailureLogLevel),
                "Discarding {kind} failure from {call}: {message}",
                kind=result.error.kind.name,
                call=getattr(explicit, "__name__", repr(explicit)),
                message=result.error.message,
            )
            if void or sentinel is None:
                return None
            return sentinel()
        if void:
            return None
        return result.value

    call.explicit = explicit
    return call


listKeys = legacyCall(raw.listKeys, sentinel=list)
getRaw = legacyCall(raw.getRaw)
setRaw = legacyCall(raw.setRaw, void=True)
removeKey = legacyCall(raw.removeKey, void=True)
hasKey = legacyCall(raw.hasKey, sentinel=lambda: False)
copyAllKeys = legacyCall(raw.copyAllKeys, void=True)

getText = legacyCall(text.getText)
setText = legacyCall(text.setText, void=True)

getObject = legacyCall(plist.getObject)
setObject = legacyCall(plist.setObject, void=True)
