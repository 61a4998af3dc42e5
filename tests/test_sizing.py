"""Tests for file size probes."""

import os
import sys
from unittest.mock import patch

import pytest

from duview.errors import ClusterSizeError
from duview.sizing import (
    AllocatedSizeProbe,
    ClusterSizeProbe,
    LogicalSizeProbe,
    SizePolicy,
    _get_compressed_file_size,
    logical_size,
    make_probe,
    query_cluster_size,
)


class TestLogicalSize:
    def test_reads_file_length(self, tmp_path):
        path = tmp_path / "file.bin"
        path.write_bytes(b"x" * 1234)
        assert logical_size(path) == 1234

    def test_missing_file_is_zero(self, tmp_path, caplog):
        assert logical_size(tmp_path / "missing") == 0
        assert "Failed to read size" in caplog.text


class TestLogicalSizeProbe:
    def test_on_disk_equals_logical(self, tmp_path):
        assert LogicalSizeProbe().on_disk_size(tmp_path / "f", 123) == 123


class TestClusterSizeProbe:
    @pytest.mark.parametrize(
        "size, expected",
        [(0, 0), (1, 4096), (4095, 4096), (4096, 4096), (4097, 8192)],
    )
    def test_rounds_up_to_cluster(self, tmp_path, size, expected):
        probe = ClusterSizeProbe(4096)
        assert probe.on_disk_size(tmp_path / "f", size) == expected

    def test_result_is_multiple_and_not_smaller(self, tmp_path):
        probe = ClusterSizeProbe(512)
        for size in range(0, 3000, 37):
            on_disk = probe.on_disk_size(tmp_path / "f", size)
            assert on_disk >= size
            assert on_disk % 512 == 0
            assert on_disk - size < 512

    def test_rejects_invalid_cluster_size(self):
        with pytest.raises(ClusterSizeError):
            ClusterSizeProbe(0)


class TestAllocatedSizeProbe:
    def test_falls_back_to_logical(self, tmp_path):
        with patch("duview.sizing._allocated_blocks_size", return_value=None), patch(
            "duview.sizing._compressed_file_size", return_value=None
        ):
            assert AllocatedSizeProbe().on_disk_size(tmp_path / "f", 777) == 777

    @pytest.mark.skipif(sys.platform == "win32", reason="st_blocks is POSIX only")
    def test_reports_allocated_blocks(self, tmp_path):
        path = tmp_path / "file.bin"
        path.write_bytes(b"x" * 10000)
        expected = os.stat(path).st_blocks * 512
        assert AllocatedSizeProbe().on_disk_size(path, 10000) == expected

    @pytest.mark.skipif(sys.platform != "win32", reason="GetCompressedFileSizeW is Windows only")
    def test_compressed_size_function_bound_once(self, tmp_path):
        path = tmp_path / "file.bin"
        path.write_bytes(b"x" * 10000)
        _get_compressed_file_size.cache_clear()
        probe = AllocatedSizeProbe()
        probe.on_disk_size(path, 10000)
        probe.on_disk_size(path, 10000)
        assert _get_compressed_file_size.cache_info().misses == 1

    @pytest.mark.skipif(sys.platform == "win32", reason="st_blocks is POSIX only")
    def test_missing_file_falls_back(self, tmp_path):
        assert AllocatedSizeProbe().on_disk_size(tmp_path / "missing", 42) == 42


class TestQueryClusterSize:
    def test_real_volume(self, tmp_path):
        assert query_cluster_size(tmp_path) > 0

    @pytest.mark.skipif(sys.platform == "win32", reason="statvfs is POSIX only")
    def test_failure_is_fatal(self, tmp_path):
        with patch("duview.sizing.os.statvfs", side_effect=OSError("no volume")):
            with pytest.raises(ClusterSizeError):
                query_cluster_size(tmp_path)


class TestMakeProbe:
    def test_logical(self, tmp_path):
        probe = make_probe(SizePolicy.LOGICAL, tmp_path)
        assert isinstance(probe, LogicalSizeProbe)
        assert probe.policy == SizePolicy.LOGICAL

    def test_cluster_queries_once(self, tmp_path):
        with patch("duview.sizing.query_cluster_size", return_value=8192) as mock_query:
            probe = make_probe(SizePolicy.CLUSTER, tmp_path)
        mock_query.assert_called_once_with(tmp_path)
        assert isinstance(probe, ClusterSizeProbe)
        assert probe.cluster_size == 8192

    def test_allocated(self, tmp_path):
        assert isinstance(make_probe(SizePolicy.ALLOCATED, tmp_path), AllocatedSizeProbe)
