#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entry point for the DevOps toolchain installer.
"""

import sys

from installer.main_installer import main

if __name__ == "__main__":
    sys.exit(main())
