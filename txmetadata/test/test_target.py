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
Tests for L{txmetadata.target}.
"""

from xattr import xattr, XATTR_NOFOLLOW

from twisted.python.filepath import FilePath
from twisted.trial import unittest

from txmetadata.target import AttributeTarget, validTarget


class AttributeTargetTests(unittest.TestCase):

    def test_paths(self):
        """
        Paths may be given as text, bytes or L{FilePath}.
        """
        for path in (u"/tmp/file", b"/tmp/file", FilePath("/tmp/file")):
            self.assertEquals(AttributeTarget(path, True).path, u"/tmp/file")


    def test_equality(self):
        self.assertEquals(
            AttributeTarget("/a", traverseLink=True),
            AttributeTarget(FilePath("/a"), traverseLink=True),
        )
        self.assertNotEquals(
            AttributeTarget("/a", traverseLink=True),
            AttributeTarget("/a", traverseLink=False),
        )
        self.assertEquals(
            len(set([
                AttributeTarget.following("/a"),
                AttributeTarget("/a", 1),
                AttributeTarget.notFollowing("/a"),
            ])),
            2,
        )


    def test_options(self):
        self.assertEquals(AttributeTarget("/a", True).options, 0)
        self.assertEquals(AttributeTarget("/a", False).options, XATTR_NOFOLLOW)


    def test_attrs(self):
        attrs = AttributeTarget.notFollowing("/a").attrs
        self.assertIsInstance(attrs, xattr)
        self.assertEquals(attrs.options, XATTR_NOFOLLOW)


    def test_repr(self):
        self.assertIn("no follow", repr(AttributeTarget.notFollowing("/a")))
        self.assertNotIn("no follow", repr(AttributeTarget.following("/a")))


    def test_validTarget(self):
        validTarget(AttributeTarget.following("/a"))
        self.assertRaises(TypeError, validTarget, "/a")
