#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
日志配置

包根 logger 只挂 NullHandler，输出方式由使用方决定。
设置环境变量 VPKREADER_LOG (如 DEBUG) 时，额外挂一个输出到 stderr 的
StreamHandler 并使用该级别。子模块 logger 通过传播输出。
"""

import logging
import os

ROOT_LOGGER_NAME = "vpkreader"
LOG_ENV_VAR = "VPKREADER_LOG"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return root
    root.addHandler(logging.NullHandler())

    level_name = os.getenv(LOG_ENV_VAR)
    if level_name:
        level = getattr(logging, level_name.upper(), logging.WARNING)
        root.setLevel(level)
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """获取 logger，首次调用时配置包根 logger"""
    _configure_root()
    return logging.getLogger(name)
