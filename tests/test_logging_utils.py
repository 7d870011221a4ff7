#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
日志配置测试
"""

import logging

import pytest

from vpkreader.logging_utils import (
    get_logger,
    _configure_root,
    LOG_ENV_VAR,
    ROOT_LOGGER_NAME,
)


@pytest.fixture
def fresh_root():
    """清空包根 logger 的处理器，测试结束后恢复"""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers.clear()
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestGetLogger:
    """get_logger 测试"""

    def test_child_logger_propagates_to_root(self):
        logger = get_logger("vpkreader.core.parser")
        assert logger.name == "vpkreader.core.parser"
        assert logger.propagate

    def test_root_configured_once(self):
        get_logger("vpkreader.a")
        root = logging.getLogger(ROOT_LOGGER_NAME)
        count = len(root.handlers)
        get_logger("vpkreader.b")
        assert len(root.handlers) == count

    def test_null_handler_by_default(self, fresh_root, monkeypatch):
        """未设置环境变量时不向 stderr 输出"""
        monkeypatch.delenv(LOG_ENV_VAR, raising=False)
        _configure_root()

        assert len(fresh_root.handlers) == 1
        assert isinstance(fresh_root.handlers[0], logging.NullHandler)
        assert fresh_root.level == logging.NOTSET

    def test_env_var_enables_stream_handler(self, fresh_root, monkeypatch):
        monkeypatch.setenv(LOG_ENV_VAR, "debug")
        _configure_root()

        stream_handlers = [
            h for h in fresh_root.handlers
            if isinstance(h, logging.StreamHandler)
        ]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].level == logging.DEBUG
        assert fresh_root.level == logging.DEBUG
        assert any(isinstance(h, logging.NullHandler) for h in fresh_root.handlers)

    def test_unknown_level_falls_back_to_warning(self, fresh_root, monkeypatch):
        monkeypatch.setenv(LOG_ENV_VAR, "chatty")
        _configure_root()
        assert fresh_root.level == logging.WARNING

    def test_failed_load_logged(self, tmp_path, vpk_builder, caplog):
        from vpkreader import VpkArchive, FormatError

        path = tmp_path / "bad_dir.vpk"
        path.write_bytes(vpk_builder({}, version=7))

        with caplog.at_level(logging.WARNING, logger=ROOT_LOGGER_NAME):
            with pytest.raises(FormatError):
                VpkArchive(str(path))
        assert any("bad_dir.vpk" in r.getMessage() for r in caplog.records)
