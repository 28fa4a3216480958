#!/usr/bin/python3.12
# Copyright 2025 The listdocs Authors.
# All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License. You may obtain
# a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.
"""Convert POD formatted documentation to Markdown pages.

Usage mirrors pod2man, e.g.:

    POD2MD_DESTDIR=site/manpages pod2md.py -r 6.2 sympa.conf.pod sympa.conf.5
"""

import sys

from listdocs.pod2md import main

if __name__ == "__main__":
    sys.exit(main())
