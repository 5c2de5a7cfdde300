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
Typed metadata stored in file system extended attributes.

The result-returning calls live in L{txmetadata.raw} (bytes),
L{txmetadata.text} (UTF-8 text) and L{txmetadata.plist} (structured values);
L{txmetadata.legacy} wraps each of them in a call returning bare values.
L{txmetadata.store} bundles them as L{IMetadataStore} providers.
"""
