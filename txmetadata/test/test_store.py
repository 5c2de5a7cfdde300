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
Tests for L{txmetadata.store}.
"""

from zope.interface import implementer
from zope.interface.verify import verifyObject, BrokenMethodImplementation

from twisted.trial import unittest

from txmetadata import legacy
from txmetadata.imetadata import IMetadataStore, ILegacyMetadataStore, \
    AttributeStoreError, ErrorKind
from txmetadata.result import OperationResult
from txmetadata.store import MetadataStore, LegacyMetadataStore
from txmetadata.target import AttributeTarget
from txmetadata.test.util import XattrTestCase, attributeKey



@implementer(IMetadataStore)
class RecordingStore(object):
    """
    L{IMetadataStore} which records calls and answers every one of them with
    the same result.
    """

    def __init__(self, result):
        self.result = result
        self.calls = []


    def _record(name):
        def method(self, *args):
            self.calls.append((name,) + args)
            return self.result
        method.__name__ = name
        return method

    listKeys = _record("listKeys")
    getRaw = _record("getRaw")
    setRaw = _record("setRaw")
    removeKey = _record("removeKey")
    hasKey = _record("hasKey")
    copyAllKeys = _record("copyAllKeys")
    getText = _record("getText")
    setText = _record("setText")
    getObject = _record("getObject")
    setObject = _record("setObject")

    del _record



class InterfaceTests(unittest.TestCase):

    def test_metadataStore(self):
        try:
            verifyObject(IMetadataStore, MetadataStore())
        except BrokenMethodImplementation as e:
            self.fail(e)


    def test_legacyMetadataStore(self):
        try:
            verifyObject(ILegacyMetadataStore, LegacyMetadataStore())
        except BrokenMethodImplementation as e:
            self.fail(e)


    def test_wrapsProvidersOnly(self):
        self.assertRaises(TypeError, LegacyMetadataStore, object())



class LegacyMetadataStoreTests(unittest.TestCase):
    """
    L{LegacyMetadataStore} forwards each call once and applies the legacy
    sentinels.
    """

    target = AttributeTarget("/path", traverseLink=False)

    def calls(self, result):
        store = RecordingStore(result)
        return store, LegacyMetadataStore(store)


    def test_forwardedOnce(self):
        store, legacyStore = self.calls(OperationResult.success(b"value"))
        self.assertEquals(legacyStore.getRaw(self.target, "k"), b"value")
        legacyStore.setObject(self.target, "k", [1])
        self.assertEquals(store.calls, [
            ("getRaw", self.target, "k"),
            ("setObject", self.target, "k", [1], None),
        ])


    def test_failureSentinels(self):
        store, legacyStore = self.calls(OperationResult.failure(
            AttributeStoreError(ErrorKind.targetUnreachable, "gone")
        ))
        self.assertEquals(legacyStore.listKeys(self.target), [])
        self.assertIdentical(legacyStore.getRaw(self.target, "k"), None)
        self.assertIdentical(legacyStore.getText(self.target, "k"), None)
        self.assertIdentical(legacyStore.getObject(self.target, "k"), None)
        self.assertIdentical(legacyStore.hasKey(self.target, "k"), False)
        for result in (
            legacyStore.setRaw(self.target, "k", b""),
            legacyStore.setText(self.target, "k", u""),
            legacyStore.setObject(self.target, "k", {}),
            legacyStore.removeKey(self.target, "k"),
            legacyStore.copyAllKeys(self.target, self.target),
        ):
            self.assertIdentical(result, None)
        self.assertEquals(len(store.calls), 10)


    def test_voidOnSuccess(self):
        store, legacyStore = self.calls(OperationResult.success([u"copied"]))
        self.assertIdentical(
            legacyStore.copyAllKeys(self.target, self.target), None
        )
        self.assertEquals(legacyStore.listKeys(self.target), [u"copied"])



class MetadataStoreTests(XattrTestCase):
    """
    The store objects agree with the module-level calls.
    """

    def test_roundTrips(self):
        store = MetadataStore()
        legacyStore = LegacyMetadataStore(store)
        key = attributeKey("store")

        self.assertTrue(store.setText(self.target, key, u"text").succeeded)
        self.assertEquals(store.getText(self.target, key).value, u"text")
        self.assertEquals(legacyStore.getText(self.target, key), u"text")
        self.assertEquals(
            legacyStore.getText(self.target, key),
            legacy.getText(self.target, key),
        )

        legacyStore.setObject(self.target, key, {u"a": [1]})
        self.assertEquals(store.getObject(self.target, key).value, {u"a": [1]})

        store.removeKey(self.target, key)
        self.assertIdentical(
            store.getRaw(self.target, key).kind, ErrorKind.attributeNotFound
        )
        self.assertIdentical(legacyStore.getRaw(self.target, key), None)
