#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
目录文件解析

解析文件头和三级目录树 (扩展名 → 路径 → 文件名)。
三级名称列表结构相同，统一由 read_name_list 读取，
每级只提供构造子节点的回调。
"""

from typing import BinaryIO, Callable, List, Tuple, TypeVar

from .binary_io import BinaryReader
from .schema import (
    VpkHeader, EntryRecord,
    VPK_SIGNATURE, SUPPORTED_VERSIONS, ENTRY_TERMINATOR,
    V2_EXTENSION_SIZE, DEFAULT_ENCODING,
)
from .tree import DirectoryTree, ExtensionGroup, PathGroup, FileEntry
from ..exceptions import (
    InvalidSignatureError,
    UnsupportedVersionError,
    MissingTerminatorError,
)
from ..logging_utils import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


def parse_header(reader: BinaryReader) -> VpkHeader:
    """
    解析文件头

    依次读取签名、版本和目录树长度，游标恰好前进 12 字节。

    Args:
        reader: 位于偏移 0 的读取器

    Returns:
        VpkHeader

    Raises:
        InvalidSignatureError: 签名不匹配
        UnsupportedVersionError: 版本不是 1 或 2
        TruncatedDataError: 数据不足
    """
    signature = reader.read_u32()
    if signature != VPK_SIGNATURE:
        raise InvalidSignatureError(signature, VPK_SIGNATURE)

    version = reader.read_u32()
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersionError(version, list(SUPPORTED_VERSIONS))

    # 仅作记录，目录树靠自身的终止符结束
    tree_length = reader.read_u32()

    return VpkHeader(signature=signature, version=version, tree_length=tree_length)


def read_name_list(
    reader: BinaryReader,
    build_child: Callable[[int, str], T],
    encoding: str = DEFAULT_ENCODING
) -> List[T]:
    """
    读取以空名称结尾的名称列表

    每读到一个非空名称就调用 build_child(index, name)，
    由回调继续消费该名称之后的数据。空名称只被消耗，不产生节点。

    Args:
        reader: 读取器
        build_child: 子节点构造回调，index 为该节点在本级中的位置
        encoding: 名称解码方式

    Returns:
        按读取顺序排列的子节点
    """
    children: List[T] = []
    while True:
        name = reader.read_cstring(encoding)
        if not name:
            return children
        children.append(build_child(len(children), name))


def read_file_entry(
    reader: BinaryReader,
    name: str,
    extension_index: int,
    path_index: int
) -> FileEntry:
    """
    读取文件名之后的元数据记录和预载数据

    Raises:
        MissingTerminatorError: 终止符不是 0xFFFF
    """
    record = EntryRecord.unpack(reader.read_bytes(EntryRecord.SIZE))
    if record.terminator != ENTRY_TERMINATOR:
        raise MissingTerminatorError(name, record.terminator, ENTRY_TERMINATOR)

    preload_data = None
    if record.preload_bytes > 0:
        preload_data = reader.read_bytes(record.preload_bytes)

    return FileEntry(
        name=name,
        crc=record.crc,
        preload_bytes=record.preload_bytes,
        shard_index=record.shard_index,
        payload_offset=record.payload_offset,
        payload_length=record.payload_length,
        preload_data=preload_data,
        extension_index=extension_index,
        path_index=path_index,
    )


def parse_tree(reader: BinaryReader, encoding: str = DEFAULT_ENCODING) -> DirectoryTree:
    """
    解析目录树

    Args:
        reader: 位于目录树起点的读取器
        encoding: 名称解码方式

    Returns:
        构建完成的 DirectoryTree
    """
    def build_extension(ext_index: int, name: str) -> ExtensionGroup:
        paths = read_name_list(
            reader,
            lambda path_index, path: build_path(ext_index, path_index, path),
            encoding
        )
        return ExtensionGroup(name=name, index=ext_index, paths=tuple(paths))

    def build_path(ext_index: int, path_index: int, name: str) -> PathGroup:
        files = read_name_list(
            reader,
            lambda _, filename: read_file_entry(reader, filename, ext_index, path_index),
            encoding
        )
        return PathGroup(
            name=name, extension_index=ext_index, index=path_index, files=tuple(files)
        )

    extensions = read_name_list(reader, build_extension, encoding)
    return DirectoryTree(tuple(extensions))


def load_directory(
    file: BinaryIO,
    encoding: str = DEFAULT_ENCODING,
    skip_v2_extension: bool = False
) -> Tuple[VpkHeader, DirectoryTree]:
    """
    从目录文件流解析文件头和目录树

    Args:
        file: 位于偏移 0 的二进制流
        encoding: 名称解码方式
        skip_v2_extension: 版本 2 时跳过头部之后的 16 个保留字节。
            默认不跳过，目录树从偏移 12 开始读取。

    Returns:
        (VpkHeader, DirectoryTree) 元组
    """
    reader = BinaryReader(file)
    header = parse_header(reader)
    logger.debug(
        "文件头: version=%d tree_length=%d data_offset=%d",
        header.version, header.tree_length, header.data_offset
    )

    if header.version == 2 and skip_v2_extension:
        reader.skip(V2_EXTENSION_SIZE)

    tree = parse_tree(reader, encoding)
    logger.debug(
        "目录树: %d 个扩展名, %d 个文件, 共读取 %d 字节",
        len(tree.extensions), len(tree), reader.position
    )
    return header, tree
