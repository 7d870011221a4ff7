#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
VPK 归档读取器

打开 *_dir.vpk 目录文件，一次性解析出目录树，
之后的查找和读取都只依赖内存中的目录树。
"""

import io
import os
from typing import BinaryIO, Dict, Iterator, List, Optional, Tuple, Union

from ..core.batch import BatchResult, ErrorPolicy, ProgressCallback, ProgressTracker
from ..core.parser import load_directory
from ..core.schema import VpkHeader, DEFAULT_ENCODING, DIR_MARKER
from ..core.tree import DirectoryTree, FileEntry
from ..exceptions import (
    ArchiveNotLoadedError,
    TruncatedDataError,
    UnsafePathError,
    UnsupportedEntryError,
    VpkError,
)
from ..logging_utils import get_logger
from ..utils import shard_path_for, split_logical_name
from .stream import BoundedStream

logger = get_logger(__name__)


class VpkArchive:
    """
    VPK 归档

    持有目录文件句柄和解析后的目录树。关闭句柄不影响已构建的目录树；
    每次读取分片数据都会打开一个独立的新句柄，由调用方负责关闭。

    Example:
        >>> with VpkArchive("dota/pak01_dir.vpk") as vpk:  # doctest: +SKIP
        ...     entry = vpk.get_file("resource/flash3/images/spellicons/icon.png")
        ...     data = vpk.read_entry(entry)
    """

    def __init__(
        self,
        file_path: Union[str, os.PathLike],
        auto_open: bool = True,
        encoding: str = DEFAULT_ENCODING,
        dir_marker: str = DIR_MARKER,
        skip_v2_extension: bool = False
    ):
        """
        初始化归档

        Args:
            file_path: 目录文件路径
            auto_open: 是否立即打开并解析
            encoding: 名称解码方式 (单字节编码)
            dir_marker: 目录文件名中的标记，用于推导分片文件名
            skip_v2_extension: 版本 2 时跳过头部之后的 16 个保留字节
        """
        self._file_path = os.fspath(file_path)
        self._encoding = encoding
        self._dir_marker = dir_marker
        self._skip_v2_extension = skip_v2_extension

        # 内部状态
        self._file: Optional[BinaryIO] = None
        self._header: Optional[VpkHeader] = None
        self._tree: Optional[DirectoryTree] = None

        if auto_open:
            self.open()

    # ==================== 生命周期 ====================

    def open(self) -> None:
        """
        打开目录文件并解析目录树

        失败时关闭句柄并丢弃所有状态，异常原样抛出。

        Raises:
            OSError: 目录文件无法打开
            FormatError: 目录文件结构错误
        """
        self.close()
        self._header = None
        self._tree = None

        self._file = open(self._file_path, 'rb')
        try:
            header, tree = load_directory(
                self._file, self._encoding, self._skip_v2_extension
            )
        except (VpkError, OSError) as e:
            logger.warning("加载 '%s' 失败: %s", self._file_path, e)
            self.close()
            raise
        except BaseException:
            self.close()
            raise

        self._header = header
        self._tree = tree
        logger.debug("已加载 '%s': %d 个文件", self._file_path, len(tree))

    def close(self) -> None:
        """关闭目录文件句柄，目录树保持可用"""
        if self._file:
            self._file.close()
            self._file = None

    def __enter__(self) -> 'VpkArchive':
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _require_tree(self) -> DirectoryTree:
        if self._tree is None:
            raise ArchiveNotLoadedError()
        return self._tree

    # ==================== 属性 ====================

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def header(self) -> VpkHeader:
        if self._header is None:
            raise ArchiveNotLoadedError()
        return self._header

    @property
    def version(self) -> int:
        return self.header.version

    @property
    def tree_length(self) -> int:
        return self.header.tree_length

    @property
    def data_offset(self) -> int:
        return self.header.data_offset

    @property
    def tree(self) -> DirectoryTree:
        return self._require_tree()

    @property
    def entry_count(self) -> int:
        return len(self._require_tree())

    @property
    def is_open(self) -> bool:
        """目录文件句柄是否打开"""
        return self._file is not None

    @property
    def is_loaded(self) -> bool:
        """目录树是否可用"""
        return self._tree is not None

    # ==================== 查找 ====================

    def get_file(self, name: str) -> Optional[FileEntry]:
        """
        按逻辑路径查找文件条目

        Args:
            name: 形如 "dir/sub/name.ext" 的逻辑路径

        Returns:
            FileEntry，未命中或路径缺少 '.' / '/' 时返回 None
        """
        tree = self._require_tree()
        parts = split_logical_name(name)
        if parts is None:
            return None
        extension, path, filename = parts
        return tree.find(extension, path, filename)

    def exists(self, name: str) -> bool:
        """检查逻辑路径是否存在"""
        return self.get_file(name) is not None

    def __contains__(self, name: str) -> bool:
        return self.exists(name)

    def entry_path(self, entry: FileEntry) -> str:
        """重建条目的逻辑路径"""
        return self._require_tree().full_path(entry)

    def shard_path(self, shard_index: int) -> str:
        """
        分片文件路径

        Raises:
            ShardPathError: 目录文件名中没有目录标记
        """
        return shard_path_for(self._file_path, shard_index, self._dir_marker)

    # ==================== 读取 ====================

    def open_entry(self, entry: FileEntry, bounded: bool = False) -> BinaryIO:
        """
        获取条目内容的字节流

        预载条目返回内存流，不产生 I/O；其余条目打开对应的分片文件并
        定位到数据偏移。默认返回的分片流不截断到数据长度，调用方最多
        读取 entry.payload_length 字节；bounded=True 时返回限长流。

        Args:
            entry: 文件条目
            bounded: 是否限制读取长度

        Returns:
            可读字节流，调用方负责关闭

        Raises:
            UnsupportedEntryError: 同时声明了预载与外部数据
            ShardPathError: 无法推导分片文件路径
            OSError: 分片文件无法打开
        """
        if entry.payload_length == 0 and entry.preload_bytes > 0:
            return io.BytesIO(entry.preload_data)

        if entry.preload_bytes != 0:
            raise UnsupportedEntryError(
                entry.name, entry.preload_bytes, entry.payload_length
            )

        shard_path = self.shard_path(entry.shard_index)
        logger.debug(
            "打开分片 '%s' (offset=%d, length=%d)",
            shard_path, entry.payload_offset, entry.payload_length
        )
        stream = open(shard_path, 'rb')
        try:
            stream.seek(entry.payload_offset)
        except OSError:
            stream.close()
            raise

        if bounded:
            return BoundedStream(stream, entry.payload_length)
        return stream

    def read_entry(self, entry: FileEntry) -> bytes:
        """
        读取条目的完整内容

        Returns:
            恰好 entry.size 字节

        Raises:
            TruncatedDataError: 分片文件数据不足
        """
        if entry.is_preloaded:
            return entry.preload_data

        with self.open_entry(entry) as stream:
            data = stream.read(entry.payload_length)
        if len(data) < entry.payload_length:
            raise TruncatedDataError(entry.payload_length, len(data))
        return data

    def _lookup(self, name: str) -> FileEntry:
        entry = self.get_file(name)
        if entry is None:
            raise FileNotFoundError(f"路径不存在: {name}")
        return entry

    def open_file(self, name: str, bounded: bool = False) -> BinaryIO:
        """
        按逻辑路径打开文件内容的字节流

        Raises:
            FileNotFoundError: 路径不存在
        """
        return self.open_entry(self._lookup(name), bounded)

    def read(self, name: str) -> bytes:
        """
        按逻辑路径读取文件内容

        Raises:
            FileNotFoundError: 路径不存在
        """
        return self.read_entry(self._lookup(name))

    # ==================== 遍历 ====================

    def iter_entries(self) -> Iterator[Tuple[str, FileEntry]]:
        """
        按解析顺序迭代所有条目

        Yields:
            (逻辑路径, FileEntry) 元组
        """
        tree = self._require_tree()
        for entry in tree:
            yield tree.full_path(entry), entry

    def list_all(self) -> List[str]:
        """列出所有文件的逻辑路径"""
        return [path for path, _ in self.iter_entries()]

    # ==================== 批量操作 ====================

    def read_batch(
        self,
        names: List[str],
        on_error: Union[str, ErrorPolicy] = 'raise'
    ) -> Dict[str, bytes]:
        """
        批量读取多个文件

        Args:
            names: 逻辑路径列表
            on_error: 错误处理策略 ('raise', 'skip', 'abort')

        Returns:
            {逻辑路径: 数据} 字典，不含失败的条目
        """
        policy = ErrorPolicy.coerce(on_error)
        result = {}

        for name in names:
            try:
                result[name] = self.read(name)
            except (VpkError, OSError) as e:
                if policy is ErrorPolicy.RAISE:
                    raise
                logger.warning("读取 '%s' 失败: %s", name, e)
                if policy is ErrorPolicy.ABORT:
                    break

        return result

    @staticmethod
    def _local_path(root: str, vpk_path: str) -> str:
        """
        逻辑路径在输出目录下对应的本地路径

        Raises:
            UnsafePathError: 解析后的路径不在输出目录内
        """
        local_path = os.path.realpath(os.path.join(root, *vpk_path.split('/')))
        if local_path == root or os.path.commonpath([root, local_path]) != root:
            raise UnsafePathError(vpk_path, root)
        return local_path

    def extract_all(
        self,
        output_dir: Union[str, os.PathLike],
        on_error: Union[str, ErrorPolicy] = 'raise',
        progress_callback: Optional[ProgressCallback] = None
    ) -> BatchResult:
        """
        解包所有文件到指定目录

        Args:
            output_dir: 输出目录
            on_error: 错误处理策略 ('raise', 'skip', 'abort')
            progress_callback: 进度回调

        Returns:
            BatchResult

        Raises:
            UnsafePathError: on_error 为 raise 且条目路径超出输出目录
        """
        policy = ErrorPolicy.coerce(on_error)
        entries = list(self.iter_entries())

        tracker = ProgressTracker(
            total_files=len(entries),
            total_bytes=sum(entry.size for _, entry in entries),
            callback=progress_callback
        )
        result = BatchResult()
        root = os.path.realpath(os.fspath(output_dir))

        for vpk_path, entry in entries:
            try:
                local_path = self._local_path(root, vpk_path)
                data = self.read_entry(entry)
                os.makedirs(os.path.dirname(local_path), exist_ok=True)
                with open(local_path, 'wb') as f:
                    f.write(data)
            except (VpkError, OSError) as e:
                if policy is ErrorPolicy.RAISE:
                    raise
                result.failed_count += 1
                result.failed_files.append((vpk_path, e))
                tracker.update(vpk_path, 0)
                if policy is ErrorPolicy.ABORT:
                    break
                continue

            result.success_count += 1
            result.total_bytes += len(data)
            tracker.update(vpk_path, len(data))

        result.elapsed_time = tracker.finish()
        logger.debug(
            "解包完成: 成功 %d, 失败 %d", result.success_count, result.failed_count
        )
        return result
