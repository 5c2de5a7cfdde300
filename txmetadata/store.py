# -*- test-case-name: txmetadata.test.test_store -*-
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
Metadata store objects.

L{MetadataStore} carries no state of its own; it exists so that callers can
be handed an L{IMetadataStore} provider (and tests a substitute for one).
"""

__all__ = [
    "MetadataStore",
    "LegacyMetadataStore",
]

from zope.interface import implementer

from txmetadata import raw, text, plist
from txmetadata.imetadata import IMetadataStore, ILegacyMetadataStore
from txmetadata.legacy import legacyCall


@implementer(IMetadataStore)
class MetadataStore(object):
    """
    Extended attribute metadata store returning L{OperationResult}s.
    """

    def __repr__(self):
        return "<%s>" % (self.__class__.__name__,)

    listKeys = staticmethod(raw.listKeys)
    getRaw = staticmethod(raw.getRaw)
    setRaw = staticmethod(raw.setRaw)
    removeKey = staticmethod(raw.removeKey)
    hasKey = staticmethod(raw.hasKey)
    copyAllKeys = staticmethod(raw.copyAllKeys)

    getText = staticmethod(text.getText)
    setText = staticmethod(text.setText)

    getObject = staticmethod(plist.getObject)
    setObject = staticmethod(plist.setObject)



@implementer(ILegacyMetadataStore)
class LegacyMetadataStore(object):
    """
    Sentinel-returning view of an L{IMetadataStore} provider.

    Every call is forwarded once to the wrapped store; see
    L{txmetadata.legacy} for what is returned on failure.
    """

    def __init__(self, store=None):
        if store is None:
            store = MetadataStore()
        if not IMetadataStore.providedBy(store):
            raise TypeError("Not an IMetadataStore provider: %r" % (store,))
        self._store = store


    def __repr__(self):
        return "<%s %r>" % (self.__class__.__name__, self._store)


    def listKeys(self, target):
        return legacyCall(self._store.listKeys, sentinel=list)(target)


    def getRaw(self, target, key):
        return legacyCall(self._store.getRaw)(target, key)


    def setRaw(self, target, key, value):
        return legacyCall(self._store.setRaw, void=True)(target, key, value)


    def removeKey(self, target, key):
        return legacyCall(self._store.removeKey, void=True)(target, key)


    def hasKey(self, target, key):
        return legacyCall(self._store.hasKey, sentinel=lambda: False)(target, key)


    def copyAllKeys(self, source, destination):
        return legacyCall(self._store.copyAllKeys, void=True)(source, destination)


    def getText(self, target, key):
        return legacyCall(self._store.getText)(target, key)


    def setText(self, target, key, text):
        return legacyCall(self._store.setText, void=True)(target, key, text)


    def getObject(self, target, key):
        return legacyCall(self._store.getObject)(target, key)


    def setObject(self, target, key, value, format=None):
        return legacyCall(self._store.setObject, void=True)(target, key, value, format)
