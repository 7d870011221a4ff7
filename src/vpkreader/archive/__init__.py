#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
vpkreader 归档

提供目录归档的打开、查找与读取功能。
"""

from .reader import VpkArchive
from .stream import BoundedStream

__all__ = [
    "VpkArchive",
    "BoundedStream",
]
