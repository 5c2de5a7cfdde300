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
File system entries whose extended attributes are accessed.
"""

__all__ = [
    "AttributeTarget",
    "validTarget",
]

import os

from twisted.python.filepath import FilePath
from xattr import xattr, XATTR_NOFOLLOW


class AttributeTarget(object):
    """
    A path together with the symbolic link traversal mode used to reach it.

    With C{traverseLink} set, a symbolic link at C{path} resolves to its
    referent; without it, the link itself is addressed.  The two may carry
    different attributes.

    @ivar path: the file system path.
    @type path: C{str}

    @ivar traverseLink: whether symbolic links are followed.
    @type traverseLink: C{bool}
    """

    def __init__(self, path, traverseLink):
        if isinstance(path, FilePath):
            path = path.path
        path = os.fspath(path)
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        self.path = path
        self.traverseLink = bool(traverseLink)


    @classmethod
    def following(cls, path):
        return cls(path, traverseLink=True)


    @classmethod
    def notFollowing(cls, path):
        return cls(path, traverseLink=False)


    @property
    def options(self):
        """
        Options passed to the platform calls for this target.
        """
        return 0 if self.traverseLink else XATTR_NOFOLLOW


    @property
    def attrs(self):
        return xattr(self.path, options=self.options)


    def _cmpval(self):
        return (self.path, self.traverseLink)


    def __hash__(self):
        return hash(self._cmpval())


    def __eq__(self, other):
        if not isinstance(other, AttributeTarget):
            return NotImplemented
        return self._cmpval() == other._cmpval()


    def __ne__(self, other):
        if not isinstance(other, AttributeTarget):
            return NotImplemented
        return self._cmpval() != other._cmpval()


    def __repr__(self):
        return "<%s %r%s>" % (
            self.__class__.__name__,
            self.path,
            "" if self.traverseLink else " (no follow)",
        )



def validTarget(target):
    # Used by operations to verify that targets are valid
    if not isinstance(target, AttributeTarget):
        raise TypeError("Not an AttributeTarget: %r" % (target,))
