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
Test support for extended attribute tests.
"""

__all__ = [
    "attributeKey",
    "FakeXattr",
    "XattrTestCase",
]

import errno
import os

from twisted.python.filepath import FilePath
from twisted.trial import unittest
from twisted.trial.unittest import SkipTest

from txmetadata import raw
from txmetadata import target as targetModule
from txmetadata.config import config
from txmetadata.imetadata import ErrorKind
from txmetadata.target import AttributeTarget


def attributeKey(name):
    """
    Return an attribute key usable by unprivileged processes.  Linux requires
    the C{user.} namespace; elsewhere it is simply part of the name.
    """
    return "user.org.calendarserver.txmetadata.%s" % (name,)



class XattrTestCase(unittest.TestCase):
    """
    Base class for tests which need a file on a file system supporting
    extended attributes.  Tests are skipped when the file system used for
    temporary files does not support them.
    """

    def setUp(self):
        self.addCleanup(config.reset)

        tempDir = FilePath(self.mktemp())
        tempDir.makedirs()
        self.tempDir = tempDir
        self.path = tempDir.child("test")
        self.path.touch()
        self.target = AttributeTarget(self.path, traverseLink=True)

        probe = attributeKey("probe")
        result = raw.setRaw(self.target, probe, b"")
        if result.kind in (
            ErrorKind.unsupportedOnFileSystem,
            ErrorKind.permissionDenied,
        ):
            raise SkipTest(
                "Extended attributes not supported here: %s"
                % (result.error.message,)
            )
        raw.removeKey(self.target, probe)


    def makeFile(self, name):
        path = self.tempDir.child(name)
        path.touch()
        return path


    def makeLink(self, name, destination):
        link = self.tempDir.child(name)
        os.symlink(destination.path, link.path)
        return link



class FakeXattr(object):
    """
    Stand-in for L{xattr.xattr} which fails every call with a given error
    code, optionally after some number of C{EINTR} failures.
    """

    def __init__(self, path, options=0):
        self.path = path
        self.options = options


    @classmethod
    def install(cls, testCase, code, interruptions=0):
        """
        Replace the platform accessor for the duration of C{testCase}.

        @return: the list of call names made, appended to as calls happen.
        """
        calls = []
        state = {"interruptions": interruptions}

        class Installed(cls):
            def _fail(self, name):
                calls.append(name)
                if state["interruptions"]:
                    state["interruptions"] -= 1
                    raise OSError(errno.EINTR, os.strerror(errno.EINTR), self.path)
                if code is None:
                    return None
                raise OSError(code, os.strerror(code), self.path)

        testCase.patch(targetModule, "xattr", Installed)
        return calls


    def get(self, name, options=0):
        result = self._fail("get")
        return b"" if result is None else result


    def set(self, name, value, options=0):
        self._fail("set")


    def remove(self, name, options=0):
        self._fail("remove")


    def list(self, options=0):
        self._fail("list")
        return []
